"""Pytest configuration for the crux_abortable test suite.

Provides log capture on the shared ``abortable`` logger and keeps the cached
settings/logger configuration from leaking between tests that patch the
environment.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from crux_abortable.base.logging import close_managed_handlers, get_logger
from crux_abortable.base.settings import reset_settings_cache


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Re-read settings after each test so env patches do not leak."""
    yield
    reset_settings_cache()
    close_managed_handlers()
    get_logger()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Collect every record emitted under the ``abortable`` logger (DEBUG+)."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    logger = get_logger()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
