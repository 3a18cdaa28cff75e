# ============================================================================
# RESULT ENVELOPE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Foundation - (data, error) result type
# PURPOSE: Uniform return value for every resource operation
# CREATED: 16 OCT 2026
# ============================================================================
"""
Result Envelope

Every resource operation returns a MetaResult holding exactly one of
``data`` or ``error``. The three expected failure kinds (validation,
not-found, execution) travel as MetaError values instead of exceptions so
callers can branch on ``result.ok`` and routes can map ``error.kind`` to an
HTTP status. Database errors keep the server's own message.

Usage:
    result = await meta.triggers.retrieve(id=42)
    if not result.ok:
        logger.warning(result.error.message)
    trigger = result.data
"""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    EXECUTION = "execution"


class MetaError(BaseModel):
    """Error payload returned in place of data."""
    message: str
    kind: ErrorKind = ErrorKind.EXECUTION
    code: Optional[str] = None
    detail: Optional[str] = None
    hint: Optional[str] = None

    @classmethod
    def validation(cls, message: str) -> "MetaError":
        return cls(message=message, kind=ErrorKind.VALIDATION)

    @classmethod
    def not_found(cls, message: str) -> "MetaError":
        return cls(message=message, kind=ErrorKind.NOT_FOUND)

    @classmethod
    def from_exception(cls, exc: Exception) -> "MetaError":
        """
        Build an execution error from a driver exception.

        psycopg errors carry a Diagnostic with the server's primary message,
        detail, hint and SQLSTATE; those are copied as-is.
        """
        diag = getattr(exc, "diag", None)
        message = getattr(diag, "message_primary", None) or str(exc).strip()
        return cls(
            message=message,
            kind=ErrorKind.EXECUTION,
            code=getattr(exc, "sqlstate", None),
            detail=getattr(diag, "message_detail", None),
            hint=getattr(diag, "message_hint", None),
        )


class MetaResultError(Exception):
    """Raised by MetaResult.unwrap() on a failed result."""

    def __init__(self, error: MetaError):
        self.error = error
        super().__init__(error.message)


class MetaResult(Generic[T]):
    """Holds either data or an error, never both."""

    __slots__ = ("data", "error")

    def __init__(self, data: Optional[T] = None, error: Optional[MetaError] = None):
        if error is not None and data is not None:
            raise ValueError("MetaResult cannot carry both data and error")
        self.data = data
        self.error = error

    @classmethod
    def success(cls, data: T) -> "MetaResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: MetaError) -> "MetaResult[Any]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise MetaResultError(self.error)
        return self.data

    def __repr__(self) -> str:
        if self.error is not None:
            return f"MetaResult(error={self.error.message!r})"
        return f"MetaResult(data={self.data!r})"


__all__ = ["ErrorKind", "MetaError", "MetaResult", "MetaResultError"]
