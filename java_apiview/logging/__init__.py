"""Logging infrastructure for Java APIView.

Key components:
    get_logger: Factory function for creating package loggers
    setup_logging: Initialize logging configuration from YAML or defaults
    LoggingConfig: Configuration class for logging settings

Example:
    >>> from java_apiview.logging import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Analysis started")
"""

from .logging_config import LoggingConfig, get_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "get_logger",
    "setup_logging",
]
