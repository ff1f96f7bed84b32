"""Capture feature: sessions, buffer, query engine and matchers."""

from .buffer import EntryBuffer
from .matchers import (
    MISSING,
    Equals,
    Matcher,
    Pattern,
    Predicate,
    anything,
    instance_of,
    match_tags,
    match_value,
)
from .models import LogEntry
from .query import LogFilter, exists, extract
from .session import CaptureSession, capture
from .targets import (
    CaptureHandler,
    CaptureLogger,
    CaptureLoggerFactory,
    LoggerTarget,
    StdlibTarget,
    StructlogTarget,
    as_target,
)

__all__ = [
    # Session
    "capture",
    "CaptureSession",
    # Buffer
    "EntryBuffer",
    "LogEntry",
    # Query
    "LogFilter",
    "extract",
    "exists",
    # Matchers
    "MISSING",
    "Matcher",
    "Equals",
    "Pattern",
    "Predicate",
    "anything",
    "instance_of",
    "match_value",
    "match_tags",
    # Targets
    "LoggerTarget",
    "StructlogTarget",
    "StdlibTarget",
    "CaptureLogger",
    "CaptureLoggerFactory",
    "CaptureHandler",
    "as_target",
]
