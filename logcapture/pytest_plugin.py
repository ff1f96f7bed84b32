"""pytest fixture for capturing structlog entries during a test."""

import pytest

from .capture import capture


@pytest.fixture
def log_capture():
    """Capture everything logged through structlog during the test."""
    with capture() as logs:
        yield logs


__all__ = ["log_capture"]
