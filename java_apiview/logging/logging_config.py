"""Centralized logging configuration for Java APIView.

This module provides logging configuration management with YAML-based
configuration and programmatic setup with sensible defaults.

Key features:
- YAML configuration file support
- Environment variable overrides
- Automatic logger creation with proper formatting

Usage:
    >>> from java_apiview.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Processing started")

Environment variables:
    JAVA_APIVIEW_LOGGING_CONFIG: Path to custom logging.yml
    JAVA_APIVIEW_LOG_LEVEL: Default log level (INFO, DEBUG, etc.)
"""

import logging
import logging.config
import os
from pathlib import Path
from typing import Any

import yaml

# Default log levels for different components
DEFAULT_LOG_LEVELS = {
    "java_apiview": "INFO",
    "java_apiview.syntax": "INFO",
    "java_apiview.analyser": "INFO",
}


class LoggingConfig:
    """Manages logging configuration for the analyser.

    LoggingConfig provides centralized management of logging settings,
    supporting both file-based and programmatic configuration.

    Attributes:
        config_path: Path to YAML configuration file.
        _config: Cached configuration dictionary.

    Configuration precedence:
        1. Explicit config_path parameter
        2. JAVA_APIVIEW_LOGGING_CONFIG environment variable
        3. Default configuration

    Example:
        >>> config = LoggingConfig()
        >>> config.apply()
        >>>
        >>> config = LoggingConfig(Path("custom_logging.yml"))
        >>> config.apply()

    Note:
        Configuration is lazy-loaded and cached after first access.
    """

    def __init__(self, config_path: Path | None = None):
        """Initialize logging configuration.

        Args:
            config_path: Optional path to YAML configuration file.
                        If None, checks the environment and falls back
                        to the default configuration.
        """
        self.config_path = config_path or self._get_default_config_path()
        self._config: dict[str, Any] | None = None

    @staticmethod
    def _get_default_config_path() -> Path | None:
        """Get default config path from the JAVA_APIVIEW_LOGGING_CONFIG variable."""
        if env_path := os.environ.get("JAVA_APIVIEW_LOGGING_CONFIG"):
            return Path(env_path)
        return None

    def load_config(self) -> dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary containing logging configuration in Python
            logging.config.dictConfig format.

        Note:
            Configuration is cached after first load. Create a new
            LoggingConfig instance to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> dict[str, Any]:
        """Get default logging configuration.

        Records go to the error stream through a single handler on the root
        logger; the java_apiview logger only sets its level and propagates.

        Default format:
            "HH:MM:SS.mmm | LEVEL | logger.name - message"
        """
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "java_apiview": {
                    "level": os.environ.get("JAVA_APIVIEW_LOG_LEVEL", "INFO"),
                    "propagate": True,
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the logging configuration to Python's logging system."""
        config = self.load_config()
        logging.config.dictConfig(config)


# Global configuration instance
_logging_config: LoggingConfig | None = None


def setup_logging(config_path: Path | None = None, level: str | None = None):
    """Setup logging for Java APIView.

    Args:
        config_path: Optional path to YAML logging configuration file.
                    If None, uses environment variables or defaults.
        level: Optional log level override (INFO, DEBUG, WARNING, etc.).
              This overrides any level set in configuration or environment.

    Example:
        >>> setup_logging()
        >>> setup_logging(Path("/etc/apiview/logging.yml"))
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for analyser components.

    Automatically initializes logging if not already configured.

    Args:
        name: Logger name, typically __name__.
    """
    if _logging_config is None:
        setup_logging()

    return logging.getLogger(name)
