"""
Tests for log capture exceptions.
"""

from logcapture.core.exceptions import (
    ConfigurationError,
    LogCaptureError,
    UnknownLevelError,
)


class TestExceptions:
    """Test cases for the exception hierarchy."""

    def test_message_only(self):
        """Test string form without operation."""
        error = LogCaptureError("something broke")
        assert str(error) == "something broke"
        assert error.context == {}

    def test_with_operation(self):
        """Test string form with operation."""
        error = ConfigurationError("bad limit", operation="LogFilter", context={"limit": -1})
        assert str(error) == "[LogFilter] bad limit"
        assert error.context == {"limit": -1}
        assert isinstance(error, LogCaptureError)

    def test_unknown_level(self):
        """Test unknown level error details."""
        error = UnknownLevelError("loud", operation="resolve_level")
        assert error.label == "loud"
        assert str(error) == "[resolve_level] Unknown log level: 'loud'"
