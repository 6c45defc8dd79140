"""Tests for the LookupResult type.

Validates:
- Predicates and extraction on both variants
- Configuration combinators (no-ops on Found)
- Exhaustive match dispatch
- Custom failure actions
"""

from __future__ import annotations

import dataclasses

import pytest

from lookupresult import (
    ConfigurationError,
    CustomThrowReturnedError,
    ErrorCode,
    Found,
    LookupResult,
    NoNullObjectConfiguredError,
    NotFound,
    NotFoundAccessError,
    WrongVariantError,
    found,
    not_found,
)


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch: pytest.MonkeyPatch) -> object:
    """Keep debug records out of test output."""
    monkeypatch.setenv("LOOKUPRESULT_LOG_FORMAT", "none")
    from lookupresult.logging import reset_logging
    from lookupresult.settings import reset_settings
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


def _lookup(key: str) -> LookupResult[int]:
    match key:
        case "existing": return found(1)
        case "existing_2": return found(2)
        case _: return not_found().with_error_message(f'"{key}" not found').with_null_object(0)


class _Missing(Exception):
    pass


def _raise_missing(result: LookupResult[object]) -> None:
    raise _Missing(result.error_message())


# ═════════════════════════════════════════════════════════════════════════════
# Found
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("v", [1, "x", 0, "", None, [], False])
def test_found_accessors(v: object) -> None:
    """Found answers every terminal operation with its value, falsy values included."""
    result = found(v)

    assert result.succeeded()
    assert result.was_found()
    assert not result.failed()
    assert result.value() == v
    assert result.ensure() == v
    assert result.or_undef() == v
    assert result.slip() == [v]
    assert result.or_null_object() == v
    assert bool(result)
    assert list(result) == [v]


def test_found_error_message_raises() -> None:
    result = found("x")

    with pytest.raises(WrongVariantError) as exc_info:
        result.error_message()
    assert exc_info.value.code is ErrorCode.WRONG_VARIANT

    with pytest.raises(TypeError):
        result.error()


def test_configuration_is_identity_on_found() -> None:
    """with_* calls return the receiver unchanged on Found."""
    result = found("x")

    assert result.with_null_object("") is result
    assert result.with_error_message("nope") is result
    assert result.with_error("nope") is result
    assert result.transform_error(str.upper) is result
    assert result.with_custom_throw(_raise_missing) is result
    assert result.with_null_object("").or_null_object() == "x"
    assert result.with_custom_throw(_raise_missing).ensure() == "x"


# ═════════════════════════════════════════════════════════════════════════════
# NotFound
# ═════════════════════════════════════════════════════════════════════════════


def test_not_found_defaults() -> None:
    result = not_found()

    assert not result.succeeded()
    assert not result.was_found()
    assert result.failed()
    assert result.or_undef() is None
    assert result.slip() == []
    assert list(result) == []
    assert not result
    assert result.error_message() == "Not found"
    assert result.error() == "Not found"


@pytest.mark.parametrize("method", ["value", "ensure"])
def test_not_found_value_raises(method: str) -> None:
    result = not_found()

    with pytest.raises(NotFoundAccessError) as exc_info:
        getattr(result, method)()

    assert str(exc_info.value) == "Not found"
    assert exc_info.value.message == "Not found"
    assert exc_info.value.result is result
    assert exc_info.value.code is ErrorCode.NOT_FOUND


@pytest.mark.parametrize("method", ["value", "ensure"])
def test_custom_error_message_is_raised(method: str) -> None:
    result = not_found().with_error_message("Custom error")

    with pytest.raises(NotFoundAccessError, match="Custom error"):
        getattr(result, method)()


def test_not_found_access_error_is_lookup_error() -> None:
    with pytest.raises(LookupError):
        not_found().value()


def test_null_object() -> None:
    assert not_found().with_null_object("").or_null_object() == ""
    assert not_found().with_null_object(None).or_null_object() is None


def test_has_null_object() -> None:
    assert not NotFound().has_null_object()
    assert not found(1).with_null_object(0).has_null_object()
    assert NotFound().with_null_object(None).has_null_object()
    assert not_found().with_null_object(0).with_error("x").has_null_object()


def test_missing_null_object_raises() -> None:
    result = not_found().with_error("Key missing")

    with pytest.raises(NoNullObjectConfiguredError) as exc_info:
        result.or_null_object()

    assert "Key missing" in str(exc_info.value)
    assert exc_info.value.result is result
    assert exc_info.value.code is ErrorCode.NO_NULL_OBJECT


def test_transform_error_composes() -> None:
    result = not_found().with_error("Key not found").transform_error(lambda e: e + ": 'foo'")
    assert result.error_message() == "Key not found: 'foo'"


def test_last_configuration_wins() -> None:
    result = not_found().with_error("first").with_error("second").with_null_object(1).with_null_object(2)

    assert result.error() == "second"
    assert result.or_null_object() == 2


def test_configuration_does_not_mutate() -> None:
    original = not_found()
    configured = original.with_error("changed").with_null_object(5)

    assert original.error_message() == "Not found"
    assert configured.error_message() == "changed"
    with pytest.raises(NoNullObjectConfiguredError):
        original.or_null_object()


def test_results_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        found(1)._value = 2  # type: ignore[misc]


# ═════════════════════════════════════════════════════════════════════════════
# Custom Failure Actions
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("method", ["value", "ensure"])
def test_custom_throw_replaces_default_error(method: str) -> None:
    seen: list[LookupResult[object]] = []

    def action(result: LookupResult[object]) -> None:
        seen.append(result)
        raise _Missing(result.error_message())

    result = not_found().with_error("gone").with_custom_throw(action)

    with pytest.raises(_Missing, match="gone"):
        getattr(result, method)()
    assert seen == [result]
    assert seen[0] is result


def test_custom_throw_returning_normally_is_an_error() -> None:
    result = not_found().with_custom_throw(lambda r: None)  # type: ignore[arg-type,return-value]

    with pytest.raises(CustomThrowReturnedError) as exc_info:
        result.ensure()
    assert exc_info.value.code is ErrorCode.CUSTOM_THROW_RETURNED


def test_custom_throw_leaves_other_terminals_alone() -> None:
    result = not_found().with_custom_throw(_raise_missing).with_null_object(7)

    assert result.or_undef() is None
    assert result.slip() == []
    assert result.or_null_object() == 7


# ═════════════════════════════════════════════════════════════════════════════
# Match
# ═════════════════════════════════════════════════════════════════════════════


HANDLERS = {
    "found": lambda v: f"Succeeded. Value: {v}",
    "not_found": lambda e: f"Failed. Error: {e}",
}


def test_match_found() -> None:
    assert found(1).match(HANDLERS) == "Succeeded. Value: 1"


def test_match_not_found() -> None:
    result = not_found().with_error_message('"nonexistant" not found')
    assert result.match(HANDLERS) == 'Failed. Error: "nonexistant" not found'


def test_match_keyword_handlers() -> None:
    assert found(2).match(found=lambda v: v * 10, not_found=lambda e: -1) == 20
    assert not_found().match(found=lambda v: v, not_found=len) == len("Not found")


@pytest.mark.parametrize("result", [found(1), not_found()], ids=["found", "not_found"])
@pytest.mark.parametrize("missing", ["found", "not_found"])
def test_match_requires_both_handlers(result: LookupResult[int], missing: str) -> None:
    """Completeness is checked regardless of which branch would run."""
    handlers = {k: v for k, v in HANDLERS.items() if k != missing}

    with pytest.raises(ConfigurationError) as exc_info:
        result.match(handlers)
    assert exc_info.value.missing == (missing,)
    assert exc_info.value.code is ErrorCode.INVALID_HANDLERS


def test_match_with_no_handlers() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        found(1).match({})
    assert exc_info.value.missing == ("found", "not_found")


def test_structural_pattern_matching() -> None:
    def describe(result: LookupResult[int]) -> str:
        match result:
            case Found(v):
                return f"got {v}"
            case NotFound(message):
                return f"missed: {message}"
        return "unreachable"

    assert describe(_lookup("existing")) == "got 1"
    assert describe(_lookup("nope")) == 'missed: "nope" not found'


# ═════════════════════════════════════════════════════════════════════════════
# Dunder Methods
# ═════════════════════════════════════════════════════════════════════════════


def test_repr() -> None:
    assert repr(found(1)) == "Found(1)"
    assert repr(not_found()) == "NotFound('Not found')"
    assert repr(not_found().with_null_object(0)) == "NotFound('Not found', null_object=0)"


def test_equality_and_hash() -> None:
    assert found(1) == found(1)
    assert found(1) != found(2)
    assert not_found() == not_found()
    assert not_found() != not_found().with_error("other")
    assert found(None) != not_found()
    assert len({found(1), found(1), not_found()}) == 2


# ═════════════════════════════════════════════════════════════════════════════
# End-to-end
# ═════════════════════════════════════════════════════════════════════════════


def test_lookup_end_to_end() -> None:
    keys = ["existing", "nonexistant", "existing_2"]

    assert [v for key in keys for v in _lookup(key).slip()] == [1, 2]
    assert [_lookup(key).or_undef() for key in keys] == [1, None, 2]
    assert sum(_lookup(k).or_null_object() for k in ["existing", "existing_2", "nonexistant", "nonexistant"]) == 3
    with pytest.raises(NotFoundAccessError, match='"nonexistant" not found'):
        _lookup("nonexistant").ensure()


def test_default_message_ignores_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """The default failure message is fixed; nothing in the environment changes it."""
    from lookupresult.settings import reset_settings

    monkeypatch.setenv("LOOKUPRESULT_DEFAULT_ERROR_MESSAGE", "Missing")
    reset_settings()

    assert not_found().error_message() == "Not found"
    assert not_found() == NotFound()
