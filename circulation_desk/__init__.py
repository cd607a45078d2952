"""Circulation Desk - in-memory library circulation desk

This package contains the application modules:
- Catalog & ledger core (library.py)
- Result facade used by the shell (desk.py)
- Shell commands and CLI (commands.py, main.py)
- Row and value types (models.py, errors.py)
- Output rendering (ui_helpers.py)
"""

from .errors import (
    ConflictError,
    ErrorKind,
    InvalidAmountError,
    LibraryError,
    NotFoundError,
    ValidationError,
)
from .models import (
    BookRow,
    BookStatus,
    LoanRow,
    MemberRow,
    MemberSummary,
    PaymentOutcome,
    PaymentResult,
    Role,
)
from .library import Library
from .desk import CirculationDesk, Failure, Result, Success
from .seed import seed_demo_data

__all__ = [
    # errors
    "ErrorKind",
    "LibraryError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InvalidAmountError",
    # models
    "BookStatus",
    "BookRow",
    "MemberRow",
    "LoanRow",
    "MemberSummary",
    "PaymentOutcome",
    "PaymentResult",
    "Role",
    # core
    "Library",
    # facade
    "CirculationDesk",
    "Result",
    "Success",
    "Failure",
    # seed
    "seed_demo_data",
]
