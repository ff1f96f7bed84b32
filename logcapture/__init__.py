"""Capture structured log entries in memory and query them from tests."""

import logging

from .capture import (
    CaptureSession,
    EntryBuffer,
    Equals,
    LogEntry,
    LogFilter,
    Pattern,
    Predicate,
    StdlibTarget,
    StructlogTarget,
    anything,
    capture,
    instance_of,
)
from .core import ConfigurationError, LogCaptureError, UnknownLevelError

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "capture",
    "CaptureSession",
    "EntryBuffer",
    "LogEntry",
    "LogFilter",
    "Equals",
    "Pattern",
    "Predicate",
    "anything",
    "instance_of",
    "StructlogTarget",
    "StdlibTarget",
    "LogCaptureError",
    "ConfigurationError",
    "UnknownLevelError",
]
