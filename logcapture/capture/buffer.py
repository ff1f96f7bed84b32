"""In-memory buffer that receives captured log entries.

The buffer is the capture device: loggers write entries into it while a
session is open, and tests query it afterwards.
"""

import threading
from collections import deque
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

from .models import LogEntry
from .query import LogFilter, exists, extract


class EntryBuffer:
    """Append-only store of captured entries in write order.

    With ``max_entries`` set the oldest entries are dropped once the
    buffer is full; by default it grows without bound.
    """

    def __init__(self, max_entries: Optional[int] = None):
        """Initialize with an empty deque, bounded if max_entries is set."""
        self.max_entries = max_entries
        self._entries: deque = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def write(self, entry: LogEntry) -> None:
        """Append an entry."""
        with self._lock:
            self._entries.append(entry)

    def clear(self) -> None:
        """Remove all captured entries."""
        with self._lock:
            self._entries.clear()

    def entries(self) -> Tuple[LogEntry, ...]:
        """Return a snapshot of the captured entries in write order."""
        with self._lock:
            return tuple(self._entries)

    @property
    def buffer(self) -> Tuple[LogEntry, ...]:
        """Captured entries in write order."""
        return self.entries()

    def messages(self) -> List[Any]:
        """Return the message of every captured entry in write order."""
        return [entry.message for entry in self.entries()]

    def extract(
        self,
        message: Any = None,
        level: Optional[Union[int, str]] = None,
        tags: Optional[Mapping[Any, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[LogEntry]:
        """
        Return the captured entries that match all of the given filters.

        Args:
            message: Literal, compiled pattern or matcher for the message
            level: Numeric level or case-insensitive label
            tags: Nested mapping of tag names to literals, patterns or matchers
            limit: Stop after this many matches

        Returns:
            Matching entries in write order

        Raises:
            UnknownLevelError: If ``level`` is an unknown label
            ConfigurationError: If ``limit`` or ``tags`` is malformed
        """
        log_filter = LogFilter(level=level, message=message, tags=tags, limit=limit)
        return extract(self.entries(), log_filter)

    def exists(
        self,
        message: Any = None,
        level: Optional[Union[int, str]] = None,
        tags: Optional[Mapping[Any, Any]] = None,
    ) -> bool:
        """Return True if any captured entry matches the given filters."""
        return exists(
            self.entries(), LogFilter(level=level, message=message, tags=tags)
        )

    def __contains__(self, log_filter: Union[LogFilter, Mapping[str, Any]]) -> bool:
        if not isinstance(log_filter, LogFilter):
            log_filter = LogFilter(**log_filter)
        return exists(self.entries(), log_filter)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries())

    def __repr__(self) -> str:
        return f"EntryBuffer(entries={len(self)})"
