"""
Shared fixtures for the switchyard test suite.

Settings tests must not pick up a developer's SWITCHYARD_* variables or
.env file, and configure_structlog() mutates global logging state.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from switchyard.config import get_settings
from switchyard.logs import LOGGER_NAME


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Run with no SWITCHYARD_* variables, from an empty directory, with a cold settings cache."""
    for name in list(os.environ):
        if name.startswith("SWITCHYARD_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def restore_logging() -> Iterator[None]:
    """Undo configure_structlog() side effects after the test."""
    library_logger = logging.getLogger(LOGGER_NAME)
    handlers = list(library_logger.handlers)
    level = library_logger.level
    propagate = library_logger.propagate
    yield
    library_logger.handlers[:] = handlers
    library_logger.setLevel(level)
    library_logger.propagate = propagate
    structlog.reset_defaults()
