"""Found/NotFound results for lookups that may legitimately miss.

Return found(value) or not_found() from a lookup and let each caller decide
how absence is handled.

Example:
    >>> from lookupresult import found, not_found
    >>>
    >>> def find_user(user_id: int):
    ...     if user_id == 1:
    ...         return found("alice")
    ...     return not_found().with_error(f"user {user_id} not found").with_null_object("guest")
    >>>
    >>> find_user(1).value()
    'alice'
    >>> find_user(2).or_null_object()
    'guest'
    >>> find_user(2).slip()
    []
"""

from .collection import first_found, lookup, or_undef_all, partition, slip_all
from .errors import (
    ConfigurationError,
    CustomThrowReturnedError,
    ErrorCode,
    LookupResultError,
    NoNullObjectConfiguredError,
    NotFoundAccessError,
    WrongVariantError,
)
from .logging import configure_logging, get_logger, log_context
from .result import DEFAULT_ERROR_MESSAGE, Found, LookupResult, MatchHandlers, NotFound, found, not_found
from .settings import LookupResultSettings, get_settings, reset_settings

__all__ = [
    # Core types
    "LookupResult",
    "Found",
    "NotFound",
    "MatchHandlers",
    "DEFAULT_ERROR_MESSAGE",
    # Constructors
    "found",
    "not_found",
    # Collection operations
    "slip_all",
    "or_undef_all",
    "first_found",
    "partition",
    "lookup",
    # Errors
    "ErrorCode",
    "LookupResultError",
    "NotFoundAccessError",
    "NoNullObjectConfiguredError",
    "WrongVariantError",
    "ConfigurationError",
    "CustomThrowReturnedError",
    # Settings & logging
    "LookupResultSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "log_context",
]
