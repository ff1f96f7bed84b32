"""
Tests for capture targets over stdlib loggers.
"""

import io
import logging

import pytest
import structlog

from logcapture.capture import EntryBuffer, StdlibTarget, StructlogTarget, capture
from logcapture.capture.targets import (
    CaptureHandler,
    LoggerTarget,
    as_target,
    method_severity,
)


@pytest.fixture
def stdlib_logger():
    """Logger with its own handler, formatter and level."""
    logger = logging.getLogger("tests.capture.targets")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    formatter = logging.Formatter("%(levelname)s %(message)s")
    handler.setFormatter(formatter)

    saved = (logger.handlers[:], logger.level, logger.propagate)
    logger.handlers = [handler]
    logger.setLevel(logging.INFO)
    logger.propagate = True

    yield logger, stream, handler, formatter

    logger.handlers, level, logger.propagate = saved
    logger.setLevel(level)


class TestStdlibCapture:
    """Test cases for capturing a logging.Logger."""

    def test_captures_all_levels(self, stdlib_logger):
        """Test that records below the logger level are captured."""
        logger, stream, _, _ = stdlib_logger

        with capture(logger) as logs:
            logger.debug("one")
            logger.info("two")

        assert logs.messages() == ["one", "two"]
        assert logs.exists(level="debug", message="one")
        assert stream.getvalue() == ""

    def test_restores_logger(self, stdlib_logger):
        """Test that handlers, level, propagation and formatters are restored."""
        logger, stream, handler, formatter = stdlib_logger

        with capture(logger):
            assert logger.propagate is False
            assert logger.level == 1
            assert isinstance(logger.handlers[0], CaptureHandler)

        assert logger.handlers == [handler]
        assert logger.level == logging.INFO
        assert logger.propagate is True
        assert handler.formatter is formatter

        logger.info("after")
        assert stream.getvalue() == "INFO after\n"

    def test_error_restores_logger(self, stdlib_logger):
        """Test that an error inside the block restores the logger first."""
        logger, _, handler, _ = stdlib_logger
        seen = []

        def block(logs):
            seen.append(logs)
            logger.warning("one")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            capture(logger, block)

        assert logger.handlers == [handler]
        assert logger.level == logging.INFO
        assert seen[0].messages() == ["one"]

    def test_extra_becomes_tags(self, stdlib_logger):
        """Test that extra attributes are captured as tags."""
        logger, _, _, _ = stdlib_logger

        with capture(logger) as logs:
            logger.info("created", extra={"user": {"id": 1, "name": "ann"}})

        (log_entry,) = logs.entries()
        assert log_entry.tags == {"user": {"id": 1, "name": "ann"}}
        assert log_entry.logger_name == "tests.capture.targets"
        assert logs.exists(tags={"user": {"id": 1}})

    def test_message_formatting(self, stdlib_logger):
        """Test that arguments are interpolated and bare messages kept as is."""
        logger, _, _, _ = stdlib_logger
        payload = {"not": "a string"}

        with capture(logger) as logs:
            logger.info("hello %s", "world")
            logger.info(payload)

        assert logs.messages() == ["hello world", payload]

    def test_child_loggers_propagate_into_capture(self, stdlib_logger):
        """Test that child logger records reach the captured parent."""
        logger, _, _, _ = stdlib_logger

        with capture(logger) as logs:
            logging.getLogger("tests.capture.targets.child").error("failed")

        assert logs.exists(level="error", message="failed")


class TestCaptureHandler:
    """Test cases for CaptureHandler record splitting."""

    def make_record(self, msg, args=(), **extra):
        record = logging.LogRecord("app", logging.INFO, __file__, 1, msg, args, None)
        record.__dict__.update(extra)
        return record

    def test_structlog_context(self):
        """Test that structlog context attached to records becomes tags."""
        record = self.make_record("event", _context={"job_id": 3}, extra_tag="x")
        message, tags = CaptureHandler.split_record(record)
        assert message == "event"
        assert tags == {"job_id": 3, "extra_tag": "x"}

    def test_wrapped_event_dict(self):
        """Test records carrying a structlog event dict as message."""
        record = self.make_record(
            {"event": "login", "user": "ann"}, _logger=object(), _name="info"
        )
        message, tags = CaptureHandler.split_record(record)
        assert message == "login"
        assert tags == {"user": "ann"}

    def test_emit_writes_entry(self):
        """Test that emit writes a LogEntry with the record timestamp."""
        buffer = EntryBuffer()
        handler = CaptureHandler(buffer)
        record = self.make_record("hello")

        handler.emit(record)

        (log_entry,) = buffer.entries()
        assert log_entry.severity == logging.INFO
        assert log_entry.timestamp.timestamp() == pytest.approx(record.created)


class TestAsTarget:
    """Test cases for target resolution."""

    def test_none_is_structlog(self):
        """Test that None selects the global structlog configuration."""
        assert isinstance(as_target(None), StructlogTarget)

    def test_stdlib_logger(self):
        """Test that stdlib loggers are wrapped."""
        target = as_target(logging.getLogger("x"))
        assert isinstance(target, StdlibTarget)
        assert target.logger.name == "x"

    def test_existing_target(self):
        """Test that targets are passed through."""
        target = StdlibTarget(logging.getLogger("x"))
        assert as_target(target) is target
        assert isinstance(target, LoggerTarget)


class TestMethodSeverity:
    """Test cases for mapping structlog method names to levels."""

    @pytest.mark.parametrize(
        "method_name,expected",
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("warning", logging.WARNING),
            ("warn", logging.WARNING),
            ("error", logging.ERROR),
            ("exception", logging.ERROR),
            ("critical", logging.CRITICAL),
            ("fatal", logging.CRITICAL),
            ("msg", logging.INFO),
            ("unknown", logging.NOTSET),
        ],
    )
    def test_mapping(self, method_name, expected):
        """Test known and unknown method names."""
        assert method_severity(method_name) == expected


class TestStructlogTarget:
    """Test cases for StructlogTarget settings."""

    def test_verbose_threshold_rounds_down(self):
        """Test that thresholds map to the nearest lower standard level."""
        target = StructlogTarget()
        assert target.verbose_threshold(1) is structlog.make_filtering_bound_logger(0)
        assert target.verbose_threshold(25) is structlog.make_filtering_bound_logger(
            logging.INFO
        )
