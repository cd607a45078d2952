from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import List, NamedTuple, Optional


class BookStatus(str, Enum):
    AVAILABLE = "Available"
    BORROWED = "Borrowed"

    def __str__(self) -> str:
        return self.value


class BookRow(NamedTuple):
    title: str
    status: BookStatus


class MemberRow(NamedTuple):
    name: str
    fine: Optional[Decimal]


class LoanRow(NamedTuple):
    title: str
    borrower: str


class MemberSummary(NamedTuple):
    fine: Optional[Decimal]
    loans: List[str]


class PaymentOutcome(Enum):
    NO_FINE = auto()
    PAID_IN_FULL = auto()
    PARTIAL = auto()


@dataclass
class PaymentResult:
    outcome: PaymentOutcome
    remaining: Optional[Decimal] = None


class Role(Enum):
    """Which menu a session sees. Not an identity check."""

    STAFF = auto()
    MEMBER = auto()
