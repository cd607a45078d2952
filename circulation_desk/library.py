import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Any

from .errors import ConflictError, InvalidAmountError, NotFoundError, ValidationError
from .models import (
    BookRow,
    BookStatus,
    LoanRow,
    MemberRow,
    MemberSummary,
    PaymentOutcome,
    PaymentResult,
)

logger = logging.getLogger(__name__)

MEMBER_NOT_FOUND = "Member not found!"
BOOK_NOT_FOUND = "Book not found!"


class Library:
    """Owns the catalog, the member roster and the loan and fine ledgers.

    Titles and member names are exact, case-sensitive strings. Every operation
    either applies a single edit or raises one of the errors in ``errors.py``
    without touching state.
    """

    def __init__(self) -> None:
        self._books: List[str] = []
        self._members: List[str] = []
        self._loans: Dict[str, str] = {}
        self._fines: Dict[str, Decimal] = {}

    # ------------------------- Catalog ------------------------- #
    def add_book(self, title: str) -> None:
        """Append a title. The same title may be added more than once."""
        self._require(title, "Book title cannot be empty.")
        self._books.append(title)
        logger.info(f"Book added: {title!r} (catalog size={len(self._books)})")

    def remove_book(self, title: str) -> None:
        """Remove the first matching title and drop its loan, if any."""
        self._require(title, "Book title cannot be empty.")
        if title not in self._books:
            raise NotFoundError(BOOK_NOT_FOUND)
        self._books.remove(title)
        borrower = self._loans.pop(title, None)
        if borrower is not None:
            logger.info(f"Loan of {title!r} to {borrower!r} dropped with the book")
        logger.info(f"Book removed: {title!r}")

    def list_books(self) -> List[BookRow]:
        """All titles in catalog order with their loan status."""
        return [self._row(title) for title in self._books]

    browse_books = list_books

    def search_books(self, query: str) -> List[BookRow]:
        """Case-insensitive substring match on titles. A blank query matches nothing."""
        if not query or not query.strip():
            return []
        needle = query.lower()
        return [self._row(title) for title in self._books if needle in title.lower()]

    # ------------------------- Members ------------------------- #
    def add_member(self, name: str) -> None:
        self._require(name, "Member name cannot be empty.")
        self._members.append(name)
        logger.info(f"Member added: {name!r}")

    def remove_member(self, name: str) -> None:
        """Remove the first matching member, their fine and every loan they hold.

        Borrowed titles stay in the catalog and become available again.
        """
        self._require(name, "Member name cannot be empty.")
        if name not in self._members:
            raise NotFoundError(MEMBER_NOT_FOUND)
        self._members.remove(name)
        self._fines.pop(name, None)
        released = [title for title, borrower in self._loans.items() if borrower == name]
        for title in released:
            del self._loans[title]
        logger.info(f"Member removed: {name!r} (released {len(released)} loan(s))")

    def list_members(self) -> List[MemberRow]:
        return [MemberRow(name, self._fines.get(name)) for name in self._members]

    def has_member(self, name: str) -> bool:
        return name in self._members

    # ------------------------- Circulation ------------------------- #
    def borrow_book(self, member: str, title: str) -> None:
        self._require(member, "Member name cannot be empty.")
        self._require(title, "Book title cannot be empty.")
        if member not in self._members:
            raise NotFoundError(MEMBER_NOT_FOUND)
        if title not in self._books:
            raise NotFoundError(BOOK_NOT_FOUND)
        if title in self._loans:
            raise ConflictError("Book is already borrowed!")
        self._loans[title] = member
        logger.info(f"{member!r} borrowed {title!r}")

    def return_book(self, title: str) -> None:
        """Close the loan on ``title``. Who returns it is not checked."""
        self._require(title, "Book title cannot be empty.")
        if title not in self._loans:
            raise NotFoundError("This book wasn't borrowed or doesn't exist!")
        borrower = self._loans.pop(title)
        logger.info(f"{title!r} returned (was on loan to {borrower!r})")

    def list_loans(self) -> List[LoanRow]:
        return [LoanRow(title, borrower) for title, borrower in self._loans.items()]

    # ------------------------- Fines ------------------------- #
    def assign_fine(self, member: str, amount_text: str) -> Decimal:
        """Add ``amount_text`` to the member's balance and return the new balance.

        No range check: zero and negative amounts are accepted as entered.
        """
        if member not in self._members:
            raise NotFoundError(MEMBER_NOT_FOUND)
        amount = self._parse_amount(amount_text, "Invalid amount!")
        balance = self._fines.get(member, Decimal("0")) + amount
        self._fines[member] = balance
        logger.info(f"Fine of {amount} assigned to {member!r} (balance={balance})")
        return balance

    def pay_fine(self, member: str, payment_text: str) -> PaymentResult:
        balance = self._fines.get(member)
        if balance is None:
            return PaymentResult(PaymentOutcome.NO_FINE)
        payment = self._parse_amount(payment_text, "Invalid payment amount!")
        if payment >= balance:
            del self._fines[member]
            logger.info(f"{member!r} paid {payment} and settled a balance of {balance}")
            return PaymentResult(PaymentOutcome.PAID_IN_FULL)
        remaining = balance - payment
        self._fines[member] = remaining
        logger.info(f"{member!r} paid {payment}, remaining balance {remaining}")
        return PaymentResult(PaymentOutcome.PARTIAL, remaining)

    def fine_for(self, member: str) -> Optional[Decimal]:
        return self._fines.get(member)

    def member_summary(self, member: str) -> MemberSummary:
        """Fine and borrowed titles for ``member``. Unknown names get an empty summary."""
        titles = [title for title, borrower in self._loans.items() if borrower == member]
        return MemberSummary(self._fines.get(member), titles)

    # ------------------------- Inspection ------------------------- #
    @property
    def books(self) -> List[str]:
        return list(self._books)

    @property
    def members(self) -> List[str]:
        return list(self._members)

    @property
    def loans(self) -> Dict[str, str]:
        return dict(self._loans)

    @property
    def fines(self) -> Dict[str, Decimal]:
        return dict(self._fines)

    def counts(self) -> Dict[str, Any]:
        return {
            "total_books": len(self._books),
            "total_members": len(self._members),
            "active_loans": len(self._loans),
            "members_with_fines": len(self._fines),
            "outstanding_fines": sum(self._fines.values(), Decimal("0")),
        }

    # ------------------------- Utilities ------------------------- #
    def _row(self, title: str) -> BookRow:
        status = BookStatus.BORROWED if title in self._loans else BookStatus.AVAILABLE
        return BookRow(title, status)

    @staticmethod
    def _require(text: Optional[str], message: str) -> None:
        if text is None or not text.strip():
            raise ValidationError(message)

    @staticmethod
    def _parse_amount(raw: Optional[str], message: str) -> Decimal:
        """Parse decimal text. Non-numeric and non-finite input is rejected."""
        if raw is None:
            raise InvalidAmountError(message)
        try:
            amount = Decimal(raw.strip())
        except InvalidOperation as e:
            raise InvalidAmountError(message) from e
        if not amount.is_finite():
            raise InvalidAmountError(message)
        return amount
