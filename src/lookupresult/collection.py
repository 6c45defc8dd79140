"""Bulk helpers over iterables of LookupResult.

Example:
    >>> from lookupresult import found, not_found
    >>> results = [found(1), not_found(), found(2)]
    >>> slip_all(results)
    [1, 2]
    >>> or_undef_all(results)
    [1, None, 2]
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import TypeVar

from .result import LookupResult, found, not_found

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def slip_all(results: Iterable[LookupResult[T]]) -> list[T]:
    """Values of every Found result, in order. NotFound results vanish."""
    return [v for result in results for v in result.slip()]


def or_undef_all(results: Iterable[LookupResult[T]]) -> list[T | None]:
    """One entry per result: the value, or None where the lookup missed."""
    return [result.or_undef() for result in results]


def first_found(results: Iterable[LookupResult[T]]) -> LookupResult[T]:
    """First Found result; otherwise the last NotFound seen.

    An empty iterable gives a fresh not_found().
    """
    last: LookupResult[T] | None = None
    for result in results:
        if result.succeeded():
            return result
        last = result
    return last if last is not None else not_found()


def partition(results: Iterable[LookupResult[T]]) -> tuple[list[T], list[str]]:
    """Split into (found values, failure messages), each in input order."""
    values: list[T] = []
    errors: list[str] = []
    for result in results:
        if result.succeeded():
            values.append(result.value())
        else:
            errors.append(result.error_message())
    return values, errors


def lookup(mapping: Mapping[K, T], key: K) -> LookupResult[T]:
    """Look key up in mapping. A miss fails with the message '"<key>" not found'.

    Example:
        >>> lookup({"a": 0}, "a").value()
        0
        >>> lookup({"a": 0}, "b").error_message()
        '"b" not found'
    """
    try:
        return found(mapping[key])
    except KeyError:
        return not_found().with_error_message(f'"{key}" not found')
