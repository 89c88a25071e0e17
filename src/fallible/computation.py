"""FallibleComputation protocol: a zero-argument operation that may raise."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FallibleComputation[T](Protocol):
    """Zero-argument callable that returns a value or raises.

    Any function, lambda, ``functools.partial`` or bound method taking no
    arguments satisfies it. What the raised exception carries is unconstrained.
    """

    def __call__(self) -> T:
        """Run the computation once."""
        ...
