"""
EmbedPrep Logging Module - Structured Application Logging.

Thin wrapper around structlog with Rich console output for development and
JSON output for production log aggregation.

Example:
    >>> from embedprep.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Chunks qualified", passed=3, failed=1)
"""

from .logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
