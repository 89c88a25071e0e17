"""fallible: outcomes of fallible computations as values.

Public API:
    - Outcome.of() / evaluate(): Run a computation once and capture its outcome
    - Succeeded, Failed: The two Outcome variants
    - is_fatal(): Fatal/recoverable classification
    - config_scope(), resolve_config(): Configuration
"""

from __future__ import annotations

import logging

from fallible.computation import FallibleComputation
from fallible.config import FrozenConfig, config_scope, current_config, resolve_config
from fallible.errors import ConfigurationError, FallibleError, FatalError, UnwrapError
from fallible.fatal import DEFAULT_FATAL_KINDS, is_fatal, raise_if_fatal
from fallible.outcome import ErrorKind, Failed, Outcome, Succeeded, evaluate

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_FATAL_KINDS",
    "ConfigurationError",
    "ErrorKind",
    "FallibleComputation",
    "FallibleError",
    "Failed",
    "FatalError",
    "FrozenConfig",
    "Outcome",
    "Succeeded",
    "UnwrapError",
    "config_scope",
    "current_config",
    "evaluate",
    "is_fatal",
    "raise_if_fatal",
    "resolve_config",
]
