"""Logging configuration using structlog.

Applications call ``setup_logging`` at startup; a capture session later
swaps the output of this configuration for an in-memory buffer and puts it
back when the session closes.
"""

import logging
from typing import Optional

import structlog

from .config import get_global_settings


def setup_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structlog over stdlib logging.

    :param log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
        defaults to the ``log_level`` setting
    :param json_logs: Render JSON lines instead of console output;
        defaults to the ``json_logs`` setting
    """
    settings = get_global_settings()
    level_name = (log_level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.json_logs

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
