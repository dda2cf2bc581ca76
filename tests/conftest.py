"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _debug_logging(caplog: pytest.LogCaptureFixture) -> Iterator[None]:
    """Run every test with chesstree debug logging enabled.

    The library only logs at debug level, so this is what makes a broken
    log call fail a test instead of going unnoticed.
    """
    caplog.set_level(logging.DEBUG, logger="chesstree")
    yield
    for record in caplog.records:
        # Formatting raises here if the arguments do not fit the message.
        record.getMessage()
