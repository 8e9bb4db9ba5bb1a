"""
Structured logging configuration for RarePlants.

Routes both structlog and stdlib logging through one pipeline so that
infrastructure modules using ``logging.getLogger`` and application modules
using ``structlog.get_logger`` end up in the same output.
"""

import logging
import os
import sys
from typing import Optional

import structlog

from rareplants.infrastructure.logging.sanitization import StructlogSanitizer


def configure_logging(level: Optional[str] = None, environment: Optional[str] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name; defaults to LOG_LEVEL or INFO
        environment: Environment name; JSON output unless "development"
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    environment = (environment or os.getenv("ENVIRONMENT", "production")).lower()
    log_level = getattr(logging, level_name, logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        StructlogSanitizer(),
    ]

    if environment == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)
