"""Exceptions raised by terminal operations on a LookupResult.

Every exception carries a machine-readable ErrorCode so callers can branch on
the kind of failure without string matching. Each also inherits the closest
builtin exception, so an existing ``except LookupError`` keeps working.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .result import NotFound


class ErrorCode(StrEnum):
    """Standard codes for lookup result failures.

    Using StrEnum allows these to log cleanly and be pattern-matched.
    """
    NOT_FOUND = "NOT_FOUND"
    WRONG_VARIANT = "WRONG_VARIANT"
    INVALID_HANDLERS = "INVALID_HANDLERS"
    NO_NULL_OBJECT = "NO_NULL_OBJECT"
    CUSTOM_THROW_RETURNED = "CUSTOM_THROW_RETURNED"


class LookupResultError(Exception):
    """Base for all lookupresult exceptions."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundAccessError(LookupResultError, LookupError):
    """Raised by value()/ensure() on a NotFound with no custom failure action."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, result: NotFound[Any]) -> None:
        super().__init__(result.error_message())
        self.result = result


class NoNullObjectConfiguredError(LookupResultError, LookupError):
    """Raised by or_null_object() on a NotFound without a null object."""

    code = ErrorCode.NO_NULL_OBJECT

    def __init__(self, result: NotFound[Any]) -> None:
        super().__init__(f"No null object configured: {result.error_message()}")
        self.result = result


class WrongVariantError(LookupResultError, TypeError):
    """Raised when a NotFound-only accessor is called on Found."""

    code = ErrorCode.WRONG_VARIANT


class ConfigurationError(LookupResultError, ValueError):
    """Raised by match() when the handler set is incomplete."""

    code = ErrorCode.INVALID_HANDLERS

    def __init__(self, missing: tuple[str, ...]) -> None:
        super().__init__(f"match() requires handlers for: {', '.join(missing)}")
        self.missing = missing


class CustomThrowReturnedError(LookupResultError, RuntimeError):
    """Raised when a custom failure action returns instead of raising."""

    code = ErrorCode.CUSTOM_THROW_RETURNED

    def __init__(self, action: object) -> None:
        name = getattr(action, "__qualname__", repr(action))
        super().__init__(f"Custom failure action {name} returned normally; it must raise")
        self.action = action
