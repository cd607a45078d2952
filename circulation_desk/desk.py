"""Result boundary between the catalog core and the shell.

Every call returns a ``Success`` or a ``Failure``; the four rejected-input
errors never escape this module. Other exceptions are left alone.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Callable, Optional, Union

from .config import settings
from .errors import ErrorKind, LibraryError
from .library import MEMBER_NOT_FOUND, Library
from .models import PaymentOutcome

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def format_money(amount: Decimal, symbol: Optional[str] = None) -> str:
    symbol = settings.currency_symbol if symbol is None else symbol
    # Quantizing needs one digit per integer place plus the two cents
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        cents = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"{symbol}{cents}"


@dataclass
class Success:
    message: str = ""
    payload: Any = None

    ok = True


@dataclass
class Failure:
    kind: ErrorKind
    message: str

    ok = False


Result = Union[Success, Failure]


class CirculationDesk:
    """The operations a staff or member session can invoke."""

    def __init__(self, library: Optional[Library] = None, currency_symbol: Optional[str] = None) -> None:
        self.library = library if library is not None else Library()
        self.currency_symbol = settings.currency_symbol if currency_symbol is None else currency_symbol

    def _run(self, action: str, func: Callable[[], Any], message: str) -> Result:
        try:
            payload = func()
        except LibraryError as e:
            logger.info(f"{action} rejected: {e.kind.value}: {e.message}")
            return Failure(e.kind, e.message)
        return Success(message, payload)

    def money(self, amount: Decimal) -> str:
        return format_money(amount, self.currency_symbol)

    # ---- catalog
    def add_book(self, title: str) -> Result:
        return self._run("add_book", lambda: self.library.add_book(title), "Book added successfully!")

    def remove_book(self, title: str) -> Result:
        return self._run("remove_book", lambda: self.library.remove_book(title), "Book removed successfully!")

    def list_books(self) -> Result:
        rows = self.library.list_books()
        return Success("" if rows else "No books available.", rows)

    browse_books = list_books

    def search_books(self, query: str) -> Result:
        rows = self.library.search_books(query)
        return Success("" if rows else f"No books found matching '{query}'", rows)

    # ---- members
    def add_member(self, name: str) -> Result:
        return self._run("add_member", lambda: self.library.add_member(name), "Member added successfully!")

    def remove_member(self, name: str) -> Result:
        return self._run("remove_member", lambda: self.library.remove_member(name), "Member removed successfully!")

    def check_member(self, name: str) -> Result:
        """Lets the shell reject an unknown member before asking further questions."""
        if self.library.has_member(name):
            return Success("", name)
        return Failure(ErrorKind.NOT_FOUND, MEMBER_NOT_FOUND)

    def list_members(self) -> Result:
        rows = self.library.list_members()
        return Success("" if rows else "No members registered.", rows)

    # ---- circulation
    def borrow_book(self, member: str, title: str) -> Result:
        return self._run(
            "borrow_book", lambda: self.library.borrow_book(member, title), "Book borrowed successfully!"
        )

    def return_book(self, title: str) -> Result:
        return self._run("return_book", lambda: self.library.return_book(title), "Book returned successfully!")

    def list_loans(self) -> Result:
        rows = self.library.list_loans()
        return Success("" if rows else "No active loans.", rows)

    # ---- fines
    def assign_fine(self, member: str, amount_text: str) -> Result:
        return self._run(
            "assign_fine", lambda: self.library.assign_fine(member, amount_text), "Fine assigned successfully!"
        )

    def fine_for(self, member: str) -> Optional[Decimal]:
        return self.library.fine_for(member)

    def pay_fine(self, member: str, payment_text: str) -> Result:
        result = self._run("pay_fine", lambda: self.library.pay_fine(member, payment_text), "")
        if isinstance(result, Failure):
            return result
        payment = result.payload
        if payment.outcome is PaymentOutcome.NO_FINE:
            result.message = "No fines found for this member."
        elif payment.outcome is PaymentOutcome.PAID_IN_FULL:
            result.message = "Fine paid in full. Thank you!"
        else:
            result.message = f"Partial payment received. Remaining balance: {self.money(payment.remaining)}"
        return result

    def member_summary(self, member: str) -> Result:
        return Success("", self.library.member_summary(member))
