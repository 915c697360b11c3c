"""Structured logging setup."""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog


def setup_logging(
    level: str = "INFO",
    log_format: str = "console",
    log_file: Optional[str | Path] = None,
) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Logging level name (unknown names fall back to INFO)
        log_format: "json" for JSON lines, anything else for console output
        log_file: Optional file to write logs to in addition to stderr
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=handlers,
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
