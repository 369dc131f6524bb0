"""
Logging setup - TORP Scoring Engine
torp/logging_config.py

Routes structlog events through the stdlib root handler so that the
event-style loggers (engine, batch runner) and the plain ``logging`` loggers
(calculators) end up in one stream.
"""

import logging
import sys
from typing import Optional

import structlog

from torp.config import get_settings


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog from settings (or overrides)."""
    settings = get_settings()
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        stream=sys.stdout,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
