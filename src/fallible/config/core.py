# src/fallible/config/core.py

"""Core configuration schema and resolution for fallible.

Resolve-once, freeze-then-flow:
- Single source of truth for configuration fields (Settings)
- Immutable runtime payload (FrozenConfig)
- Guarded ambient scope (config_scope) consulted by evaluation
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import logging
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from fallible.errors import ConfigurationError

from .loaders import field_spec_hint, parse_exception_kinds

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults."""

    # Re-raise fatal exceptions wrapped in FatalError instead of as-is
    wrap_fatal: bool = Field(default=False)
    # Exception kinds treated as fatal in addition to the built-in set
    extra_fatal_kinds: tuple[type[BaseException], ...] = Field(default=())

    model_config = {"extra": "forbid"}

    @field_validator("extra_fatal_kinds", mode="before")
    @classmethod
    def normalize_extra_fatal_kinds(cls, v: Any) -> Any:
        """Accept classes, dotted paths, or a comma-separated string."""
        return parse_exception_kinds(v)


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration consulted when classifying exceptions."""

    wrap_fatal: bool = False
    extra_fatal_kinds: tuple[type[BaseException], ...] = ()

    def __str__(self) -> str:
        kinds = ", ".join(k.__qualname__ for k in self.extra_fatal_kinds)
        return f"FrozenConfig(wrap_fatal={self.wrap_fatal!r}, extra_fatal_kinds=({kinds}))"

    __repr__ = __str__


# --- Ambient scope (guarded) ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "fallible_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


class ConfigScope:
    """Context manager for temporarily setting the ambient configuration."""

    def __init__(self, cfg: FrozenConfig):
        """Hold *cfg* until the scope is entered."""
        self._token: contextvars.Token[FrozenConfig | None] | None = None
        self._cfg = cfg

    def __enter__(self) -> FrozenConfig:
        """Make *cfg* the ambient config for the current context."""
        self._token = _AMBIENT.set(self._cfg)
        return self._cfg

    def __exit__(
        self,
        _: type[BaseException] | None,
        __: BaseException | None,
        ___: TracebackType | None,
    ) -> Literal[False]:
        """Restore the previous ambient config; exceptions are not suppressed."""
        if self._token is not None:
            _AMBIENT.reset(self._token)
        return False


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Create a scoped configuration context.

    The scope is held in a ``ContextVar`` so it is thread-safe and async-safe.

    Args:
        cfg_or_overrides: Either a FrozenConfig to use directly, or a mapping
            of overrides applied on top of the environment.
        **overrides: Additional override values (merged with
            cfg_or_overrides if it's a mapping).

    Yields:
        The FrozenConfig active in this scope.

    Example:
        with config_scope(wrap_fatal=True):
            Outcome.of(load_plugin)
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        combined_overrides = {**(cfg_or_overrides or {}), **overrides}
        cfg = resolve_config(overrides=combined_overrides)

    with ConfigScope(cfg):
        yield cfg


def _try_load_dotenv() -> None:
    """Load a ``.env`` file from the working directory once per process."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))
    _DOTENV_LOADED = True


# --- Public resolution API ---


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve configuration into a FrozenConfig.

    Precedence: defaults < environment (``FALLIBLE_*``, ``.env``) < overrides.

    Raises:
        ConfigurationError: If configuration validation fails.
    """
    _try_load_dotenv()

    from .loaders import load_env

    merged = {**load_env(), **(overrides or {})}

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        msg = err.get("msg") or "invalid value"
        # Remove "Value error, " prefix if present (Pydantic standard wrapper)
        if msg.startswith("Value error, "):
            msg = msg[13:]
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else None
        hint = field_spec_hint(field) if field in Settings.model_fields else None
        raise ConfigurationError(
            f"Configuration validation failed: {field or 'config'}: {msg}", hint=hint
        ) from e

    frozen = FrozenConfig(
        wrap_fatal=settings.wrap_fatal,
        extra_fatal_kinds=settings.extra_fatal_kinds,
    )
    logger.debug("Resolved %s", frozen)
    return frozen


@cache
def _env_config() -> FrozenConfig:
    return resolve_config()


def current_config() -> FrozenConfig:
    """Return the ambient config, else the (cached) environment config."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _env_config()


def reset_config_cache() -> None:
    """Forget the cached environment config so the next lookup re-reads it."""
    _env_config.cache_clear()
