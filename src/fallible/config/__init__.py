# src/fallible/config/__init__.py

"""Configuration management for fallible.

Configuration is resolved once into an immutable FrozenConfig. Evaluation
reads the ambient config set by ``config_scope``, falling back to the
configuration resolved from the environment.

Key exports:
- resolve_config: Resolve defaults, environment and overrides
- FrozenConfig: Immutable configuration payload
- config_scope: Context manager for scoped configuration
- current_config: The configuration evaluation uses right now
- Settings: Pydantic schema for validation and defaults
"""

# ruff: noqa: I001

from .core import (
    FrozenConfig,
    Settings,
    config_scope,
    current_config,
    reset_config_cache,
    resolve_config,
)
from .loaders import ENV_PREFIX, field_spec_hint, import_exception_kind

__all__ = [  # noqa: RUF022
    # Main public API
    "resolve_config",
    "FrozenConfig",
    "config_scope",
    "current_config",
    "reset_config_cache",
    # Schema
    "Settings",
    # Helpers
    "ENV_PREFIX",
    "field_spec_hint",
    "import_exception_kind",
]
