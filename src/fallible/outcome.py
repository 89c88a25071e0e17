"""Outcome: the result of a fallible computation as a value.

``Outcome[T]`` is a closed sum type with exactly two variants, ``Succeeded``
and ``Failed``. Failures stay data while they flow through ``map``,
``flat_map``, ``and_then`` and ``recover``; they surface as exceptions only
when the caller unwraps with ``get()`` or when the exception is fatal.

Example:
    total = (
        Outcome.of(lambda: 10 / 0)
        .recover(ArithmeticError, lambda exc: 0)
        .get_or_else(-1)
    )

    match Outcome.of(load_user):
        case Succeeded(user):
            greet(user)
        case Failed(cause):
            report(cause)
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, assert_never, cast, final

from fallible.config import current_config
from fallible.errors import UnwrapError
from fallible.fatal import raise_if_fatal

if TYPE_CHECKING:
    from collections.abc import Callable

    from fallible.computation import FallibleComputation
    from fallible.config import FrozenConfig

logger = logging.getLogger(__name__)

type ErrorKind[E: BaseException] = (
    type[E] | tuple[type[E], ...] | Callable[[BaseException], bool]
)


class Outcome[T]:
    """Base of the two outcome variants; holds the combinator algebra.

    Not instantiable and closed to subclassing: every Outcome is either a
    ``Succeeded`` or a ``Failed``. Combinators never mutate the receiver.
    """

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> Outcome[T]:
        if cls is Outcome:
            raise TypeError("Outcome cannot be instantiated; use Outcome.of()")
        return super().__new__(cls)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(
                f"{cls.__qualname__}: Outcome is closed to Succeeded and Failed"
            )

    # --- Construction ---

    @staticmethod
    def of[R](computation: FallibleComputation[R]) -> Outcome[R]:
        """Evaluate *computation* once and capture its result.

        Args:
            computation: Zero-argument callable returning a value or raising.

        Returns:
            ``Succeeded(value)`` when it returns, ``Failed(exc)`` when it
            raises a recoverable exception.

        Raises:
            TypeError: If *computation* is not callable.
            ConfigurationError: If the active configuration is invalid; raised
                before *computation* runs.
            BaseException: Any fatal exception, re-raised as-is (or wrapped
                in FatalError when ``wrap_fatal`` is configured).
        """
        _require_callable(computation, "computation")
        config = current_config()
        try:
            value = computation()
        except BaseException as exc:
            return _capture(exc, config)
        return Succeeded(value)

    @staticmethod
    def succeeded[R](value: R) -> Outcome[R]:
        """Wrap an already known value."""
        return Succeeded(value)

    @staticmethod
    def failed[R](cause: BaseException) -> Outcome[R]:
        """Wrap an already caught exception (fatal ones are re-raised)."""
        return Failed(cause)

    # --- Inspection ---

    def is_succeeded(self) -> bool:
        return isinstance(self, Succeeded)

    def is_failed(self) -> bool:
        return isinstance(self, Failed)

    def get(self) -> T:
        """Return the value, or raise UnwrapError chained from the cause.

        The cause is never re-raised with its own type; catch UnwrapError and
        read ``.cause`` (or ``__cause__``) to get at it.
        """
        match self._variant():
            case Succeeded(value):
                return value
            case Failed(cause):
                raise UnwrapError(
                    f"get() called on a failed outcome: {cause!r}", cause=cause
                ) from cause
            case _ as unreachable:
                assert_never(unreachable)

    def get_or_else(self, default: T) -> T:
        """Return the value, or *default* when failed."""
        match self._variant():
            case Succeeded(value):
                return value
            case Failed():
                return default
            case _ as unreachable:
                assert_never(unreachable)

    # --- Combinators ---

    def map[R](self, f: Callable[[T], R]) -> Outcome[R]:
        """Apply *f* to the value; a recoverable exception from *f* becomes a Failed.

        Example:
            Outcome.of(lambda: 7).map(lambda x: x * 2).get()  # 14
        """
        _require_callable(f, "f")
        match self._variant():
            case Succeeded(value):
                return Outcome.of(lambda: f(value))
            case Failed() as failed:
                return cast("Failed[R]", failed)
            case _ as unreachable:
                assert_never(unreachable)

    def flat_map[R](self, f: Callable[[T], Outcome[R]]) -> Outcome[R]:
        """Chain a step that itself returns an Outcome.

        The returned Outcome is passed through as-is. If *f* raises, or
        returns something that is not an Outcome, the result is a Failed.
        """
        _require_callable(f, "f")
        match self._variant():
            case Succeeded(value):
                config = current_config()
                try:
                    result = f(value)
                except BaseException as exc:
                    return _capture(exc, config)
                if not isinstance(result, Outcome):
                    return _capture(
                        TypeError(
                            "flat_map function must return an Outcome, "
                            f"got {type(result).__name__}"
                        ),
                        config,
                    )
                return result
            case Failed() as failed:
                return cast("Failed[R]", failed)
            case _ as unreachable:
                assert_never(unreachable)

    def and_then(self, action: Callable[[T], object]) -> Outcome[T]:
        """Run *action* on the value for its effect only.

        Returns self when *action* completes; a recoverable exception from
        *action* becomes a new Failed.
        """
        _require_callable(action, "action")
        match self._variant():
            case Succeeded(value):
                config = current_config()
                try:
                    action(value)
                except BaseException as exc:
                    return _capture(exc, config)
                return self
            case Failed():
                return self
            case _ as unreachable:
                assert_never(unreachable)

    def on_success(self, action: Callable[[T], object]) -> Outcome[T]:
        """Call *action* with the value when succeeded; its exceptions escape."""
        _require_callable(action, "action")
        if isinstance(self, Succeeded):
            action(self.value)
        return self

    def on_failure(self, action: Callable[[BaseException], object]) -> Outcome[T]:
        """Call *action* with the cause when failed; its exceptions escape."""
        _require_callable(action, "action")
        if isinstance(self, Failed):
            action(self.cause)
        return self

    def or_else(self, other: Outcome[T]) -> Outcome[T]:
        """Return self when succeeded, else *other*."""
        if not isinstance(other, Outcome):
            raise TypeError(f"or_else expects an Outcome, got {type(other).__name__}")
        match self._variant():
            case Succeeded():
                return self
            case Failed():
                return other
            case _ as unreachable:
                assert_never(unreachable)

    def recover[E: BaseException](
        self, kind: ErrorKind[E], f: Callable[[E], T]
    ) -> Outcome[T]:
        """Turn a matching failure back into an Outcome by evaluating ``f(cause)``.

        Args:
            kind: An exception class or tuple of classes, matched with
                ``isinstance`` so broader classes catch narrower ones; or a
                predicate called with the cause.
            f: Called with the cause; evaluated like ``Outcome.of``.

        Returns:
            ``Outcome.of(lambda: f(cause))`` when failed with a matching
            cause, otherwise self.
        """
        matches = _error_matcher(kind)
        _require_callable(f, "f")
        match self._variant():
            case Failed(cause) if matches(cause):
                return Outcome.of(lambda: f(cast("E", cause)))
            case Succeeded() | Failed():
                return self
            case _ as unreachable:
                assert_never(unreachable)

    def _variant(self) -> Succeeded[T] | Failed[T]:
        return cast("Succeeded[T] | Failed[T]", self)


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Succeeded[T](Outcome[T]):
    """A computation that returned ``value``."""

    value: T


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Failed[T](Outcome[T]):
    """A computation that raised the recoverable exception ``cause``."""

    cause: BaseException

    def __post_init__(self) -> None:
        if not isinstance(self.cause, BaseException):
            raise TypeError(
                f"Failed cause must be an exception instance, got {self.cause!r}"
            )
        raise_if_fatal(self.cause)


evaluate = Outcome.of


# --- Internal helpers ---


def _capture[R](exc: BaseException, config: FrozenConfig) -> Outcome[R]:
    raise_if_fatal(exc, config)
    failed: Failed[R] = Failed(exc)
    logger.debug("Captured %s as a failed outcome", type(exc).__name__)
    return failed


def _require_callable(fn: object, name: str) -> None:
    if not callable(fn):
        raise TypeError(f"{name} must be callable, got {type(fn).__name__}")


def _is_exception_class(kind: object) -> bool:
    return isinstance(kind, type) and issubclass(kind, BaseException)


def _error_matcher(kind: object) -> Callable[[BaseException], bool]:
    if _is_exception_class(kind) or (
        isinstance(kind, tuple) and kind and all(map(_is_exception_class, kind))
    ):
        classes = cast("type[BaseException] | tuple[type[BaseException], ...]", kind)
        return lambda cause: isinstance(cause, classes)
    if isinstance(kind, type | tuple):
        raise TypeError(f"recover kind must name exception classes, got {kind!r}")
    if callable(kind):
        return cast("Callable[[BaseException], bool]", kind)
    raise TypeError(f"recover kind must be an exception class or predicate, got {kind!r}")
