"""Fatal/recoverable exception classification.

Fatal exceptions are never captured as data. They cover:
- interruption and cooperative cancellation: every ``BaseException`` that is
  not an ``Exception`` (``KeyboardInterrupt``, ``SystemExit``,
  ``GeneratorExit``, ``asyncio.CancelledError``)
- dynamic-linkage failures: ``ImportError``
- interpreter resource exhaustion or corruption: ``MemoryError``,
  ``RecursionError``, ``SystemError``

Everything else is recoverable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fallible.config import current_config
from fallible.errors import FatalError

if TYPE_CHECKING:
    from fallible.config import FrozenConfig

logger = logging.getLogger(__name__)

DEFAULT_FATAL_KINDS: tuple[type[BaseException], ...] = (
    ImportError,
    MemoryError,
    RecursionError,
    SystemError,
    FatalError,
)


def fatal_kinds(config: FrozenConfig | None = None) -> tuple[type[BaseException], ...]:
    """Return the exception kinds treated as fatal under *config*."""
    cfg = config if config is not None else current_config()
    return DEFAULT_FATAL_KINDS + cfg.extra_fatal_kinds


def is_fatal(exc: BaseException, config: FrozenConfig | None = None) -> bool:
    """Return True when *exc* must propagate instead of becoming a Failed."""
    if not isinstance(exc, Exception):
        return True
    return isinstance(exc, fatal_kinds(config))


def raise_if_fatal(exc: BaseException, config: FrozenConfig | None = None) -> None:
    """Re-raise *exc* when it is fatal; return normally otherwise.

    The original exception is re-raised as-is unless ``wrap_fatal`` is
    enabled, in which case it is chained under a FatalError. An exception
    that is already a FatalError is never wrapped twice.
    """
    cfg = config if config is not None else current_config()
    if not is_fatal(exc, cfg):
        return
    logger.debug("Propagating fatal %s", type(exc).__name__)
    if cfg.wrap_fatal and not isinstance(exc, FatalError):
        raise FatalError(
            f"Fatal {type(exc).__name__} during evaluation: {exc}", cause=exc
        ) from exc
    raise exc
