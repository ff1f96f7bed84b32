"""Core infrastructure module.

This module exports configuration, logging, errors and severity lookup.
Never imports from the capture package - only from external libraries.
"""

from .config import CaptureSettings, get_settings, get_global_settings
from .exceptions import ConfigurationError, LogCaptureError, UnknownLevelError
from .logging import setup_logging
from .severity import level_name, resolve_level

__all__ = [
    # Config
    "CaptureSettings",
    "get_settings",
    "get_global_settings",
    # Exceptions
    "LogCaptureError",
    "ConfigurationError",
    "UnknownLevelError",
    # Logging
    "setup_logging",
    # Severity
    "resolve_level",
    "level_name",
]
