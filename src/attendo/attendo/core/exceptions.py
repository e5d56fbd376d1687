from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class ManualRecordRejected(ValidationError):
    """Raised when a manually entered record fails validation."""


class RecordParseError(DomainError, ValueError):
    """Raised when a stored timestamp cannot be interpreted."""


class StoreError(DomainError):
    """Raised when a record or break type store call fails."""
