from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    NOT_FOUND = "NotFoundError"
    CONFLICT = "ConflictError"
    INVALID_AMOUNT = "InvalidAmountError"


class LibraryError(Exception):
    """Base class for rejected desk operations. Nothing was mutated."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LibraryError, ValueError):
    kind = ErrorKind.VALIDATION


class NotFoundError(LibraryError, LookupError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(LibraryError):
    kind = ErrorKind.CONFLICT


class InvalidAmountError(LibraryError, ValueError):
    kind = ErrorKind.INVALID_AMOUNT
