"""Test helpers (small, reusable doubles).

Keep this file tiny: raising from a lambda and recording calls are the only
things most outcome tests need.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, NoReturn


def raise_(exc: BaseException) -> NoReturn:
    """Raise *exc*; usable inside lambdas."""
    raise exc


def raising(exc: BaseException):
    """Return a callable that ignores its arguments and raises *exc*."""

    def _raise(*_args: Any) -> NoReturn:
        raise exc

    return _raise


@dataclass
class Recorder:
    """Callable that records the arguments it was called with."""

    calls: list[Any] = field(default_factory=list)

    def __call__(self, arg: Any) -> None:
        self.calls.append(arg)


class CorruptStateError(Exception):
    """Application error some callers want treated as fatal."""


RECOVERABLE_KINDS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    ZeroDivisionError,
    RuntimeError,
    OSError,
    TypeError,
    LookupError,
    ArithmeticError,
)

FATAL_KINDS: tuple[type[BaseException], ...] = (
    KeyboardInterrupt,
    SystemExit,
    GeneratorExit,
    asyncio.CancelledError,
    ImportError,
    ModuleNotFoundError,
    MemoryError,
    RecursionError,
    SystemError,
)
