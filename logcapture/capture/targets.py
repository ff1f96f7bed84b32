"""
Adapters exposing a host logger's device, threshold and formatter.

A capture session only needs to read and replace those three settings.
``StructlogTarget`` maps them onto the global structlog configuration and
``StdlibTarget`` onto a ``logging.Logger``.
"""

import logging
from abc import abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

import structlog

from ..core.exceptions import ConfigurationError
from .buffer import EntryBuffer
from .models import LogEntry

# Levels structlog ships filtering bound loggers for
FILTER_LEVELS = (
    logging.NOTSET,
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)

# Attributes every LogRecord carries; anything else came from ``extra=``
RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# structlog method names that are not registered level names
METHOD_ALIASES = {
    "exception": logging.ERROR,
    "msg": logging.INFO,
}

# Bookkeeping extras added by structlog.stdlib
STRUCTLOG_RECORD_EXTRAS = frozenset({"_logger", "_name", "_from_structlog"})


def method_severity(method_name: str) -> int:
    """Map a structlog method name such as ``warning`` to its numeric level."""
    if method_name in METHOD_ALIASES:
        return METHOD_ALIASES[method_name]
    level = logging.getLevelName(method_name.upper())
    return level if isinstance(level, int) else logging.NOTSET


@runtime_checkable
class LoggerTarget(Protocol):
    """Protocol for loggers a capture session can redirect."""

    device: Any
    threshold: Any
    formatter: Any

    @abstractmethod
    def make_device(self, buffer: EntryBuffer) -> Any:
        """Build a device value that writes into ``buffer``."""
        ...

    @abstractmethod
    def verbose_threshold(self, min_level: int) -> Any:
        """Build a threshold value letting every level from ``min_level`` through."""
        ...

    @abstractmethod
    def empty_formatter(self) -> Any:
        """Build a formatter value that leaves entries untouched."""
        ...


class CaptureLogger:
    """structlog wrapped logger that turns every call into a LogEntry."""

    def __init__(self, buffer: EntryBuffer, name: Optional[str] = None):
        self.buffer = buffer
        self.name = name

    def __getattr__(self, method_name: str) -> Any:
        if method_name.startswith("_"):
            raise AttributeError(method_name)

        def write(*args: Any, **event_dict: Any) -> None:
            message = event_dict.pop("event", args[0] if args else None)
            self.buffer.write(
                LogEntry(
                    severity=method_severity(method_name),
                    message=message,
                    tags=event_dict,
                    logger_name=self.name,
                )
            )

        return write

    def __repr__(self) -> str:
        return f"<CaptureLogger(name={self.name!r})>"


class CaptureLoggerFactory:
    """structlog logger factory producing CaptureLogger instances."""

    def __init__(self, buffer: EntryBuffer):
        self.buffer = buffer

    def __call__(self, *args: Any) -> CaptureLogger:
        name = args[0] if args and isinstance(args[0], str) else None
        return CaptureLogger(self.buffer, name=name)


class StructlogTarget:
    """Global structlog configuration seen as a capture target.

    - device: ``logger_factory`` together with ``cache_logger_on_first_use``
      so loggers first used during capture do not keep the capture device
    - threshold: ``wrapper_class``
    - formatter: the ``processors`` chain
    """

    @property
    def device(self) -> Tuple[Any, bool]:
        config = structlog.get_config()
        return config["logger_factory"], config["cache_logger_on_first_use"]

    @device.setter
    def device(self, value: Tuple[Any, bool]) -> None:
        logger_factory, cache_logger_on_first_use = value
        structlog.configure(
            logger_factory=logger_factory,
            cache_logger_on_first_use=cache_logger_on_first_use,
        )

    @property
    def threshold(self) -> Any:
        return structlog.get_config()["wrapper_class"]

    @threshold.setter
    def threshold(self, wrapper_class: Any) -> None:
        structlog.configure(wrapper_class=wrapper_class)

    @property
    def formatter(self) -> Tuple[Any, Tuple[Any, ...]]:
        """The configured processors container together with its contents."""
        processors = structlog.get_config()["processors"]
        return processors, tuple(processors)

    @formatter.setter
    def formatter(self, value: Tuple[Any, Tuple[Any, ...]]) -> None:
        processors, contents = value
        # Keep a list instance intact to not break references held by bound
        # loggers; any other iterable is put back as it was configured.
        if isinstance(processors, list):
            processors[:] = contents
        structlog.configure(processors=processors)

    def make_device(self, buffer: EntryBuffer) -> Tuple[Any, bool]:
        return CaptureLoggerFactory(buffer), False

    def verbose_threshold(self, min_level: int) -> Any:
        level = max(lvl for lvl in FILTER_LEVELS if lvl <= max(min_level, 0))
        return structlog.make_filtering_bound_logger(level)

    def empty_formatter(self) -> Tuple[Any, Tuple[Any, ...]]:
        current = structlog.get_config()["processors"]
        processors = current if isinstance(current, list) else []
        # Context vars are part of the event, not of its formatting
        return processors, (structlog.contextvars.merge_contextvars,)

    def __repr__(self) -> str:
        return "StructlogTarget()"


class CaptureHandler(logging.Handler):
    """Logging handler that writes every record into an EntryBuffer."""

    def __init__(self, buffer: EntryBuffer, level: int = logging.NOTSET):
        """Initialize the capture handler.

        Args:
            buffer: Buffer receiving the captured entries.
            level: Minimum logging level to capture (default: NOTSET).
        """
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        """Capture a log record.

        Args:
            record: LogRecord to capture.
        """
        try:
            message, tags = self.split_record(record)
            self.buffer.write(
                LogEntry(
                    severity=record.levelno,
                    message=message,
                    tags=tags,
                    timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
                    logger_name=record.name,
                )
            )
        except Exception:
            self.handleError(record)

    @staticmethod
    def split_record(record: logging.LogRecord) -> Tuple[Any, Dict[str, Any]]:
        """Separate a record into its message and structured tags.

        Args:
            record: LogRecord to split.

        Returns:
            Tuple of (message, tags).
        """
        tags = {
            key: value
            for key, value in record.__dict__.items()
            if key not in RECORD_ATTRIBUTES and key not in STRUCTLOG_RECORD_EXTRAS
        }

        # structlog context attached by a stdlib bridge
        context = tags.pop("_context", None)
        if isinstance(context, dict):
            tags.update(context)

        # structlog's ProcessorFormatter.wrap_for_formatter passes the event dict as msg
        if isinstance(record.msg, dict) and "event" in record.msg:
            event_dict = dict(record.msg)
            message = event_dict.pop("event")
            event_dict.update(tags)
            return message, event_dict

        message = record.getMessage() if record.args else record.msg
        return message, tags


class StdlibTarget:
    """A ``logging.Logger`` seen as a capture target.

    - device: the logger's handlers together with its ``propagate`` flag
    - threshold: the logger's level
    - formatter: the formatters of the logger's handlers
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @property
    def device(self) -> Tuple[Tuple[logging.Handler, ...], bool]:
        return tuple(self.logger.handlers), self.logger.propagate

    @device.setter
    def device(self, value: Tuple[Tuple[logging.Handler, ...], bool]) -> None:
        handlers, propagate = value
        self.logger.handlers = list(handlers)
        self.logger.propagate = propagate

    @property
    def threshold(self) -> int:
        return self.logger.level

    @threshold.setter
    def threshold(self, level: int) -> None:
        self.logger.setLevel(level)

    @property
    def formatter(self) -> Tuple[Optional[logging.Formatter], ...]:
        return tuple(handler.formatter for handler in self.logger.handlers)

    @formatter.setter
    def formatter(self, formatters: Tuple[Optional[logging.Formatter], ...]) -> None:
        for handler, formatter in zip(self.logger.handlers, formatters):
            handler.setFormatter(formatter)

    def make_device(self, buffer: EntryBuffer) -> Tuple[Tuple[logging.Handler, ...], bool]:
        return (CaptureHandler(buffer),), False

    def verbose_threshold(self, min_level: int) -> int:
        return min_level

    def empty_formatter(self) -> Tuple[None, ...]:
        return tuple(None for _ in self.logger.handlers)

    def __repr__(self) -> str:
        return f"StdlibTarget({self.logger.name!r})"


def as_target(logger: Any = None) -> LoggerTarget:
    """
    Resolve what a caller passed to ``capture`` into a target.

    Args:
        logger: None for the global structlog configuration, a
            ``logging.Logger``, or an object implementing LoggerTarget

    Returns:
        Capture target

    Raises:
        ConfigurationError: If the object cannot be captured
    """
    if logger is None:
        return StructlogTarget()
    if isinstance(logger, logging.Logger):
        return StdlibTarget(logger)
    if isinstance(logger, LoggerTarget):
        return logger
    raise ConfigurationError(
        f"Cannot capture logs from {type(logger).__name__}",
        operation="capture",
    )
