"""Captured log entry model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..core.severity import level_name


@dataclass(frozen=True)
class LogEntry:
    """A single log call as seen by the capture device."""

    severity: int
    message: Any
    tags: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: Optional[str] = None

    @property
    def level(self) -> str:
        """Lower-case label of the entry severity."""
        return level_name(self.severity)

    def to_dict(self) -> Dict[str, Any]:
        """Return the entry as a plain dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level,
            "logger": self.logger_name,
            "message": self.message,
            "tags": dict(self.tags),
        }
