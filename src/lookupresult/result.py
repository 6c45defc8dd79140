"""Found/NotFound result type for lookups that may legitimately miss.

A producer returns found(value) or not_found(); each consumer then picks how
absence is handled at its own call site:
- value()/ensure(): raise on NotFound
- or_undef(): None on NotFound
- slip(): zero-or-one element list, for flattening
- or_null_object(): configured substitute on NotFound
- match(): explicit branch over both variants

Configuration (with_error_message, with_null_object, with_custom_throw,
transform_error) only touches NotFound; on Found it returns the receiver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Final, Generic, Literal, NoReturn, TypedDict, TypeVar

from .errors import (
    ConfigurationError,
    CustomThrowReturnedError,
    NoNullObjectConfiguredError,
    NotFoundAccessError,
    WrongVariantError,
)
from .logging import get_logger

T = TypeVar("T")  # Looked-up value type
R = TypeVar("R")  # match() return type

DEFAULT_ERROR_MESSAGE: Final = "Not found"
HANDLER_KEYS: Final = ("found", "not_found")

_log = get_logger("lookupresult.result")


class _Unset(Enum):
    """Marker for a NotFound without a null object, so None stays a legal substitute."""
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "<unset>"


_UNSET: Final = _Unset.UNSET


class MatchHandlers(TypedDict, Generic[T, R]):
    """Handler table accepted by LookupResult.match(). Both keys are mandatory."""
    found: Callable[[T], R]
    not_found: Callable[[str], R]


class LookupResult(ABC, Generic[T]):
    """Outcome of a lookup: either Found (holds a value) or NotFound (holds a reason).

    Instances are immutable. Every with_* call returns a result; the receiver
    is never modified.

    Examples:
        >>> found(1).value()
        1
        >>> not_found().with_error('"x" not found').or_undef() is None
        True
    """

    __slots__ = ()

    # ─────────────────────────────────────────────────────────────────
    # Predicates
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def succeeded(self) -> bool:
        """True iff this is Found."""

    def was_found(self) -> bool:
        """Alias for succeeded()."""
        return self.succeeded()

    def failed(self) -> bool:
        """True iff this is NotFound."""
        return not self.succeeded()

    # ─────────────────────────────────────────────────────────────────
    # Configuration
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def with_error_message(self, message: str) -> LookupResult[T]:
        """Replace the failure message. Identity on Found."""

    def with_error(self, message: str) -> LookupResult[T]:
        """Alias for with_error_message()."""
        return self.with_error_message(message)

    @abstractmethod
    def transform_error(self, f: Callable[[str], str]) -> LookupResult[T]:
        """Replace the failure message with f(current message). Identity on Found."""

    @abstractmethod
    def with_null_object(self, null_object: T) -> LookupResult[T]:
        """Set the substitute returned by or_null_object(). Identity on Found."""

    @abstractmethod
    def with_custom_throw(self, action: Callable[[LookupResult[T]], NoReturn]) -> LookupResult[T]:
        """Set the action run by value()/ensure() instead of raising NotFoundAccessError.

        The action receives the NotFound result and must raise. Identity on Found.
        """

    # ─────────────────────────────────────────────────────────────────
    # Extraction
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def value(self) -> T:
        """Return the found value.

        Raises:
            NotFoundAccessError: On NotFound without a custom failure action
            CustomThrowReturnedError: If the custom failure action returns
        """

    def ensure(self) -> T:
        """Same as value(); reads as "this must exist" at the call site."""
        return self.value()

    @abstractmethod
    def or_undef(self) -> T | None:
        """Return the found value, or None on NotFound."""

    @abstractmethod
    def slip(self) -> list[T]:
        """Return [value] on Found, [] on NotFound."""

    @abstractmethod
    def or_null_object(self) -> T:
        """Return the found value, or the configured null object on NotFound.

        Raises:
            NoNullObjectConfiguredError: On NotFound without a null object
        """

    @abstractmethod
    def error_message(self) -> str:
        """Return the failure message.

        Raises:
            WrongVariantError: On Found
        """

    def error(self) -> str:
        """Alias for error_message()."""
        return self.error_message()

    def has_null_object(self) -> bool:
        """True if or_null_object() has a substitute to return on NotFound. Always False on Found."""
        return False

    # ─────────────────────────────────────────────────────────────────
    # Pattern Matching
    # ─────────────────────────────────────────────────────────────────

    def match(
        self,
        handlers: MatchHandlers[T, R] | Mapping[str, Callable[[Any], R]] | None = None,
        /,
        **kwargs: Callable[[Any], R],
    ) -> R:
        """Dispatch to handlers["found"](value) or handlers["not_found"](message).

        Handlers may be given as a mapping, as keyword arguments, or both
        (keywords win). Both handlers are required whichever variant this is.

        Example:
            >>> found(1).match(
            ...     found=lambda v: f"Succeeded. Value: {v}",
            ...     not_found=lambda e: f"Failed. Error: {e}",
            ... )
            'Succeeded. Value: 1'

        Raises:
            ConfigurationError: If either handler is missing
        """
        table = {**(handlers or {}), **kwargs}
        if missing := tuple(key for key in HANDLER_KEYS if table.get(key) is None):
            raise ConfigurationError(missing)
        return self._dispatch(table["found"], table["not_found"])

    @abstractmethod
    def _dispatch(self, on_found: Callable[[T], R], on_not_found: Callable[[str], R]) -> R: ...

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True if Found, whatever the truthiness of the value itself."""
        return self.succeeded()

    def __iter__(self) -> Iterator[T]:
        """Iterate over the slip() elements (0 or 1)."""
        return iter(self.slip())


@dataclass(frozen=True, slots=True, repr=False)
class Found(LookupResult[T]):
    """Successful lookup holding a value."""

    _value: T

    def succeeded(self) -> Literal[True]:
        return True

    def with_error_message(self, message: str) -> Found[T]:
        return self

    def transform_error(self, f: Callable[[str], str]) -> Found[T]:
        return self

    def with_null_object(self, null_object: T) -> Found[T]:
        return self

    def with_custom_throw(self, action: Callable[[LookupResult[T]], NoReturn]) -> Found[T]:
        return self

    def value(self) -> T:
        return self._value

    def or_undef(self) -> T:
        return self._value

    def slip(self) -> list[T]:
        return [self._value]

    def or_null_object(self) -> T:
        return self._value

    def error_message(self) -> NoReturn:
        raise WrongVariantError(f"error_message() called on Found value: {self._value!r}")

    def _dispatch(self, on_found: Callable[[T], R], on_not_found: Callable[[str], R]) -> R:
        return on_found(self._value)

    def __repr__(self) -> str:
        return f"Found({self._value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class NotFound(LookupResult[T]):
    """Failed lookup holding a reason, and optionally a null object and custom failure action."""

    _message: str = DEFAULT_ERROR_MESSAGE
    _null_object: T | _Unset = _UNSET
    _custom_throw: Callable[[LookupResult[T]], NoReturn] | None = field(default=None, compare=False)

    def succeeded(self) -> Literal[False]:
        return False

    def with_error_message(self, message: str) -> NotFound[T]:
        return replace(self, _message=message)

    def transform_error(self, f: Callable[[str], str]) -> NotFound[T]:
        return replace(self, _message=f(self._message))

    def with_null_object(self, null_object: T) -> NotFound[T]:
        return replace(self, _null_object=null_object)

    def with_custom_throw(self, action: Callable[[LookupResult[T]], NoReturn]) -> NotFound[T]:
        return replace(self, _custom_throw=action)

    def has_null_object(self) -> bool:
        """True if a null object was configured with with_null_object()."""
        return self._null_object is not _UNSET

    def value(self) -> NoReturn:
        if (action := self._custom_throw) is None:
            _log.debug("value demanded from NotFound", error_message=self._message)
            raise NotFoundAccessError(self)
        action(self)
        _log.error("custom failure action returned", error_message=self._message,
                   action=getattr(action, "__qualname__", repr(action)))
        raise CustomThrowReturnedError(action)

    def or_undef(self) -> None:
        return None

    def slip(self) -> list[T]:
        return []

    def or_null_object(self) -> T:
        if not self.has_null_object():
            _log.debug("null object demanded but not configured", error_message=self._message)
            raise NoNullObjectConfiguredError(self)
        return self._null_object

    def error_message(self) -> str:
        return self._message

    def _dispatch(self, on_found: Callable[[T], R], on_not_found: Callable[[str], R]) -> R:
        return on_not_found(self._message)

    def __repr__(self) -> str:
        extra = f", null_object={self._null_object!r}" if self.has_null_object() else ""
        return f"NotFound({self._message!r}{extra})"


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def found(value: T) -> LookupResult[T]:
    """Construct Found. Any value is accepted, falsy ones included."""
    return Found(value)


def not_found() -> LookupResult[Any]:
    """Construct NotFound with the default message and nothing else configured."""
    return NotFound()
