"""Exception hierarchy for fallible."""

from __future__ import annotations


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(FallibleError):
    """Configuration validation or resolution failed."""


class UnwrapError(FallibleError):
    """``get()`` was called on a failed outcome.

    The original exception is kept on ``cause`` and chained as ``__cause__``.
    It is never re-raised with its own type.
    """

    def __init__(
        self, message: str, *, cause: BaseException, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.cause = cause


class FatalError(FallibleError):
    """A fatal exception, wrapped because ``wrap_fatal`` is enabled.

    Classified as fatal itself so it keeps escaping nested evaluations.
    """

    def __init__(
        self, message: str, *, cause: BaseException, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.cause = cause
