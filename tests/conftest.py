"""Pytest configuration and fixtures.

Provides environment isolation and config cache resets. All fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os

import pytest

from fallible.config import reset_config_cache

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_fallible_env(request, monkeypatch):
    """Ensure a clean FALLIBLE_* environment and config cache for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("FALLIBLE_"):
                monkeypatch.delenv(key, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def fallible_debug_logs(caplog):
    """Capture DEBUG records from the fallible loggers."""
    caplog.set_level(logging.DEBUG, logger="fallible")
    return caplog
