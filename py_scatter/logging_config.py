"""Structured logging setup."""

import logging
import sys
from typing import Optional

import structlog

from .config import EngineSettings, settings as default_settings


def configure_logging(engine_settings: Optional[EngineSettings] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        engine_settings: Settings providing ``log_level`` and ``log_format``;
            the module singleton is used when omitted.
    """
    engine_settings = engine_settings or default_settings
    level = getattr(logging, engine_settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if engine_settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
