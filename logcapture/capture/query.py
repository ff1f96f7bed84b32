"""
Query engine for captured log entries.

Filters are evaluated against a snapshot of entries in write order. Every
field left as None is a wildcard.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..core.exceptions import ConfigurationError
from ..core.severity import resolve_level
from .matchers import match_tags, match_value
from .models import LogEntry


@dataclass(frozen=True)
class LogFilter:
    """Query descriptor over level, message, tags and result limit."""

    level: Optional[Union[int, str]] = None
    message: Any = None
    tags: Optional[Mapping[Any, Any]] = None
    limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.limit is not None and (
            isinstance(self.limit, bool)
            or not isinstance(self.limit, int)
            or self.limit < 0
        ):
            raise ConfigurationError(
                f"limit must be a non-negative integer, got {self.limit!r}",
                operation="LogFilter",
            )
        if self.tags is not None and not isinstance(self.tags, Mapping):
            raise ConfigurationError(
                f"tags must be a mapping, got {type(self.tags).__name__}",
                operation="LogFilter",
            )


def _matched(
    entry: LogEntry, log_filter: LogFilter, severity: Optional[int]
) -> bool:
    if severity is not None and entry.severity != severity:
        return False
    return match_value(log_filter.message, entry.message) and match_tags(
        log_filter.tags, entry.tags
    )


def extract(entries: Iterable[LogEntry], log_filter: LogFilter) -> List[LogEntry]:
    """
    Return entries matching a filter, in write order.

    Args:
        entries: Captured entries in write order
        log_filter: Filter to apply

    Returns:
        Matching entries, at most ``log_filter.limit`` of them

    Raises:
        UnknownLevelError: If the level filter is an unknown label
    """
    severity = None
    if log_filter.level is not None:
        severity = resolve_level(log_filter.level)

    matches: List[LogEntry] = []
    if log_filter.limit == 0:
        return matches

    for entry in entries:
        if _matched(entry, log_filter, severity):
            matches.append(entry)
            if log_filter.limit is not None and len(matches) >= log_filter.limit:
                break
    return matches


def exists(entries: Iterable[LogEntry], log_filter: LogFilter) -> bool:
    """Return True if at least one entry matches the filter."""
    return bool(extract(entries, replace(log_filter, limit=1)))
