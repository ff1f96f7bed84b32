"""
Capture sessions.

A session redirects a logger into a fresh EntryBuffer, lowers its threshold
so every level is captured, removes formatting, and restores all three
settings when it closes, whether or not the captured code raised.
"""

import logging
from typing import Any, Callable, Optional

from ..core.config import get_global_settings
from .buffer import EntryBuffer
from .targets import LoggerTarget, as_target

logger = logging.getLogger(__name__)


class CaptureSession:
    """Scoped redirection of a logger into an EntryBuffer.

    Use it as a context manager (``with CaptureSession(target) as logs``)
    or call :meth:`run` with a block. Sessions are not reentrant and two
    sessions on the same logger must not be open at the same time.
    """

    def __init__(
        self,
        target: LoggerTarget,
        min_level: Optional[int] = None,
        max_entries: Optional[int] = None,
    ):
        """
        Initialize a capture session.

        Args:
            target: Logger target to redirect
            min_level: Threshold installed while capturing (defaults to the
                ``capture_min_level`` setting)
            max_entries: Bound on captured entries (unbounded by default)
        """
        settings = get_global_settings()
        self.target = target
        self.min_level = settings.capture_min_level if min_level is None else min_level
        self.buffer = EntryBuffer(max_entries=max_entries)
        self._saved: Optional[tuple] = None

    @property
    def active(self) -> bool:
        """True while the target is redirected into the buffer."""
        return self._saved is not None

    def open(self) -> EntryBuffer:
        """Save the target configuration and redirect it into the buffer."""
        if self.active:
            raise RuntimeError("Capture session is already open")

        logger.debug("Opening capture session for %r", self.target)
        target = self.target
        self._saved = (target.device, target.threshold, target.formatter)
        try:
            target.device = target.make_device(self.buffer)
            target.threshold = target.verbose_threshold(self.min_level)
            target.formatter = target.empty_formatter()
        except BaseException:
            self.close()
            raise
        return self.buffer

    def close(self) -> None:
        """Restore the saved target configuration."""
        if self._saved is None:
            return

        device, threshold, formatter = self._saved
        self._saved = None
        target = self.target
        target.device = device
        target.threshold = threshold
        target.formatter = formatter
        logger.debug(
            "Closed capture session for %r, %d entries captured",
            target,
            len(self.buffer),
        )

    def __enter__(self) -> EntryBuffer:
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def run(self, block: Callable[[EntryBuffer], Any]) -> EntryBuffer:
        """
        Capture everything logged while ``block`` runs.

        Args:
            block: Callable receiving the buffer

        Returns:
            The buffer, also after ``block`` raised and the error propagated
        """
        with self as buffer:
            block(buffer)
        return buffer


def capture(
    logger: Any = None,
    block: Optional[Callable[[EntryBuffer], Any]] = None,
    *,
    min_level: Optional[int] = None,
    max_entries: Optional[int] = None,
) -> Any:
    """
    Capture log entries written through a logger.

    With ``block`` the block is run with the buffer and the buffer is
    returned. Without it a session is returned for use in a ``with``
    statement, which yields the buffer::

        with capture() as logs:
            structlog.get_logger().info("created", user_id=1)
        assert logs.exists(level="info", tags={"user_id": 1})

    Args:
        logger: None for the global structlog configuration, a
            ``logging.Logger``, or a LoggerTarget
        block: Optional callable receiving the buffer
        min_level: Threshold installed while capturing
        max_entries: Bound on captured entries

    Returns:
        EntryBuffer when ``block`` is given, otherwise a CaptureSession

    Raises:
        ConfigurationError: If ``logger`` cannot be captured
    """
    session = CaptureSession(
        as_target(logger), min_level=min_level, max_entries=max_entries
    )
    if block is None:
        return session
    return session.run(block)
