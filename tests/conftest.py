"""Shared fixtures for log capture tests."""

import pytest
import structlog

from logcapture.capture import EntryBuffer, LogEntry
from logcapture.core import config


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults and settings after every test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    config.settings = None


@pytest.fixture
def scenario_buffer():
    """Buffer holding the three entries most query tests run against."""
    buffer = EntryBuffer()
    buffer.write(
        LogEntry(
            severity=20,
            message="foobar",
            tags={"foo": "bar", "baz": {"one": 1, "two": [2, 22], "three": None}},
        )
    )
    buffer.write(LogEntry(severity=30, message="FOOBAR", tags={"foo": "bum"}))
    buffer.write(LogEntry(severity=20, message="baxbar", tags={"foo": "bar"}))
    return buffer
