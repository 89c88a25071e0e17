"""Fatal classification tests: fatal exceptions never become data."""

from __future__ import annotations

import asyncio

import pytest

from fallible import (
    DEFAULT_FATAL_KINDS,
    Failed,
    FatalError,
    FrozenConfig,
    Outcome,
    config_scope,
    is_fatal,
    raise_if_fatal,
)
from tests.helpers import CorruptStateError, raise_, raising

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "exc",
    [
        KeyboardInterrupt(),
        SystemExit(1),
        GeneratorExit(),
        asyncio.CancelledError(),
        ImportError("no module"),
        ModuleNotFoundError("no module named x"),
        MemoryError(),
        RecursionError("too deep"),
        SystemError("interpreter"),
        FatalError("wrapped", cause=MemoryError()),
    ],
    ids=lambda e: type(e).__name__,
)
def test_fatal_kinds(exc: BaseException) -> None:
    assert is_fatal(exc)


@pytest.mark.parametrize(
    "exc",
    [ValueError(), KeyError("k"), ZeroDivisionError(), OSError(), RuntimeError()],
    ids=lambda e: type(e).__name__,
)
def test_recoverable_kinds(exc: BaseException) -> None:
    assert not is_fatal(exc)


def test_default_fatal_kinds_are_exception_classes() -> None:
    assert all(issubclass(k, BaseException) for k in DEFAULT_FATAL_KINDS)


# =============================================================================
# Propagation
# =============================================================================


def test_of_propagates_fatal_with_original_identity() -> None:
    err = MemoryError("exhausted")

    with pytest.raises(MemoryError) as exc:
        Outcome.of(lambda: raise_(err))

    assert exc.value is err


def test_of_propagates_interruption() -> None:
    with pytest.raises(KeyboardInterrupt):
        Outcome.of(lambda: raise_(KeyboardInterrupt()))


def test_failed_construction_rejects_fatal_cause() -> None:
    err = RecursionError("deep")

    with pytest.raises(RecursionError) as exc:
        Failed(err)

    assert exc.value is err


@pytest.mark.parametrize(
    "combinator",
    [
        lambda o, f: o.map(f),
        lambda o, f: o.flat_map(f),
        lambda o, f: o.and_then(f),
    ],
    ids=["map", "flat_map", "and_then"],
)
def test_combinators_propagate_fatal(combinator) -> None:
    with pytest.raises(SystemError):
        combinator(Outcome.succeeded(1), raising(SystemError("corrupt")))


def test_recover_handler_propagates_fatal() -> None:
    failed = Outcome.failed(ValueError("x"))

    with pytest.raises(ImportError):
        failed.recover(ValueError, raising(ImportError("plugin")))


def test_raise_if_fatal_returns_for_recoverable() -> None:
    assert raise_if_fatal(ValueError("fine")) is None


def test_propagation_is_logged_at_debug(fallible_debug_logs) -> None:
    with pytest.raises(MemoryError):
        Outcome.of(lambda: raise_(MemoryError()))

    messages = [r.getMessage() for r in fallible_debug_logs.records]
    assert any("Propagating fatal MemoryError" in m for m in messages)


# =============================================================================
# Configuration
# =============================================================================


class TestWrapFatal:
    def test_wraps_in_fatal_error(self) -> None:
        err = KeyboardInterrupt()

        with config_scope(wrap_fatal=True), pytest.raises(FatalError) as exc:
            Outcome.of(lambda: raise_(err))

        assert exc.value.cause is err
        assert exc.value.__cause__ is err
        assert "KeyboardInterrupt" in str(exc.value)

    def test_wrapped_fatal_escapes_nested_evaluation(self) -> None:
        with config_scope(wrap_fatal=True), pytest.raises(FatalError) as exc:
            Outcome.of(lambda: Outcome.of(lambda: raise_(MemoryError())))

        assert isinstance(exc.value.cause, MemoryError)
        assert not isinstance(exc.value.cause, FatalError)

    def test_explicit_config_argument(self) -> None:
        cfg = FrozenConfig(wrap_fatal=True)

        with pytest.raises(FatalError):
            raise_if_fatal(SystemExit(2), cfg)


class TestExtraFatalKinds:
    def test_extra_kind_propagates(self) -> None:
        with config_scope(extra_fatal_kinds=[CorruptStateError]):
            with pytest.raises(CorruptStateError):
                Outcome.of(lambda: raise_(CorruptStateError("state")))
            with pytest.raises(CorruptStateError):
                Failed(CorruptStateError("state"))

    def test_extra_kind_matches_subclasses(self) -> None:
        with config_scope(extra_fatal_kinds=["LookupError"]), pytest.raises(KeyError):
            Outcome.of(lambda: {}["missing"])

    def test_scope_is_restored_on_exit(self) -> None:
        with config_scope(extra_fatal_kinds=[CorruptStateError]):
            assert is_fatal(CorruptStateError())

        assert not is_fatal(CorruptStateError())
        assert Outcome.of(lambda: raise_(CorruptStateError())).is_failed()

    def test_explicit_config_argument(self) -> None:
        cfg = FrozenConfig(extra_fatal_kinds=(CorruptStateError,))

        assert is_fatal(CorruptStateError(), cfg)
        assert not is_fatal(CorruptStateError())
