"""Severity label lookup backed by the standard library level registry.

structlog uses the same numeric levels as :mod:`logging`, so labels are
resolved through ``logging.getLevelName``. Levels registered with
``logging.addLevelName`` are picked up as well.
"""

import logging
from typing import Union

from .exceptions import ConfigurationError, UnknownLevelError

LevelSpec = Union[int, str]


def resolve_level(level: LevelSpec) -> int:
    """
    Normalize a level filter to its numeric severity.

    Args:
        level: Numeric level (e.g. ``logging.WARNING``) or a case-insensitive
            label (e.g. ``"warn"``, ``"INFO"``)

    Returns:
        Numeric severity

    Raises:
        UnknownLevelError: If the label is not a known level name
        ConfigurationError: If the level is neither an int nor a string
    """
    if isinstance(level, bool):
        raise ConfigurationError(
            f"Level must be an int or a label, got {level!r}",
            operation="resolve_level",
        )
    if isinstance(level, int):
        return int(level)
    if not isinstance(level, str):
        raise ConfigurationError(
            f"Level must be an int or a label, got {type(level).__name__}",
            operation="resolve_level",
        )

    resolved = logging.getLevelName(level.strip().upper())
    if isinstance(resolved, int):
        return resolved
    raise UnknownLevelError(level, operation="resolve_level")


def level_name(severity: int) -> str:
    """Return the lower-case label for a numeric severity."""
    return logging.getLevelName(severity).lower()
