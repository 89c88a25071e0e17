# src/fallible/config/loaders.py

"""Configuration loaders for the environment.

Loaders are pure data extraction: they read raw values and return plain
dictionaries that the core resolver validates. Dotted exception paths are
resolved here so the schema only ever sees classes.
"""

from __future__ import annotations

from collections.abc import Iterable
import importlib
import logging
import os
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# --- Constants ---

ENV_PREFIX = "FALLIBLE_"


def _coerce_bool(v: str) -> bool:
    """Convert string to boolean using common conventions."""
    return v.strip().lower() in {"1", "true", "yes", "on"}


def field_spec_hint(field: str) -> str:
    """Return a compact hint for setting a config field via env or overrides."""
    env_key = f"{ENV_PREFIX}{field.upper()}"
    return f"Set {env_key} or pass {field}=... to resolve_config()/config_scope()."


# --- Environment Loading ---


def load_env() -> Mapping[str, Any]:
    """Load configuration from ``FALLIBLE_*`` environment variables.

    Behavior:
    - Only fields known to ``Settings`` are read; other ``FALLIBLE_*``
      variables are skipped.
    - Booleans are coerced using common conventions ("1", "true", "yes", "on").
    - ``.env`` loading happens in the resolver; this function only reads
      ``os.environ``.

    Returns:
        Dictionary of configuration values.
    """
    from .core import Settings  # local import to keep loaders import-light

    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        info = Settings.model_fields.get(field_name)
        if info is None:
            logger.debug("Ignoring unknown environment variable %s", key)
            continue
        config[field_name] = _coerce_bool(value) if info.annotation is bool else value
    return config


# --- Exception kind resolution ---


def import_exception_kind(path: str) -> type[BaseException]:
    """Import an exception class from a dotted path such as ``"pkg.mod.Error"``.

    Builtins may be named without a module (``"TimeoutError"``).

    Raises:
        ValueError: If the path cannot be imported or does not name an
            exception class.
    """
    path = path.strip()
    module_name, _, attr = path.rpartition(".")
    module_name = module_name or "builtins"
    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise ValueError(f"cannot import module {module_name!r} for {path!r}") from e
    kind = getattr(module, attr, None)
    if not (isinstance(kind, type) and issubclass(kind, BaseException)):
        raise ValueError(f"{path!r} is not an exception class")
    return kind


def parse_exception_kinds(value: Any) -> tuple[type[BaseException], ...]:
    """Normalize classes, dotted paths or a comma-separated string to classes."""
    if value is None:
        return ()
    items: Iterable[Any]
    if isinstance(value, str):
        items = [part for part in value.split(",") if part.strip()]
    elif isinstance(value, type):
        items = [value]
    elif isinstance(value, Iterable):
        items = value
    else:
        raise ValueError(f"{value!r} is not an exception class")

    kinds: list[type[BaseException]] = []
    for item in items:
        if isinstance(item, str):
            kinds.append(import_exception_kind(item))
        elif isinstance(item, type) and issubclass(item, BaseException):
            kinds.append(item)
        else:
            raise ValueError(f"{item!r} is not an exception class")
    return tuple(kinds)
