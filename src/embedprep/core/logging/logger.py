"""
Structured logging configuration for EmbedPrep.

This module integrates structlog for key-value logging while staying
compatible with standard Python logging, so an embedding service that imports
EmbedPrep keeps control of its own handlers.

Functions:
    setup_logging(): Initialize logging configuration
    get_logger(name): Get configured logger instance

Configuration:
    Logging behavior is controlled by the application settings:
    - LOG_LEVEL: Minimum log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - LOG_FORMAT: Output format (json/text)
    - LOG_FILE_PATH: Optional file output path
    - DEBUG / ENVIRONMENT: Rich console output for development

Example:
    >>> from embedprep.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Preprocessing completed", target_type="post", chunks=4)
"""

import logging
import sys
from pathlib import Path

import structlog
from rich.console import Console
from rich.logging import RichHandler

from embedprep.core.config.settings import settings


def setup_logging() -> None:
    """
    Initialize structlog and standard library logging.

    Selects a Rich console handler when DEBUG is set or the environment is
    "development", a plain stderr stream handler otherwise, and adds a file
    handler when LOG_FILE_PATH is configured.

    Example:
        >>> from embedprep.core.logging.logger import setup_logging
        >>> setup_logging()  # Call once at application startup
    """

    # Configure structlog processors
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT.lower() == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    handlers = []

    if settings.DEBUG or settings.ENVIRONMENT == "development":
        console = Console(stderr=True)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(rich_handler)
    else:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(stream_handler)

    if settings.LOG_FILE_PATH:
        file_path = Path(settings.LOG_FILE_PATH)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(file_handler)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        handlers=handlers,
        format="%(message)s",
    )

    # BeautifulSoup parser chatter
    logging.getLogger("bs4").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured structured logger instance.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Split text", strategy="semantic", segments=3)
        >>> request_logger = logger.bind(target_type="comment")
        >>> request_logger.info("Processing started")

    Note:
        If logging hasn't been configured yet, this function will
        call setup_logging() first.
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)
