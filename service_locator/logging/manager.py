"""
Centralized Log Manager

Provides logging configuration for the service locator with:
- Human-readable colored console output
- Optional structured JSON output
- Registry context (service type, name, key, environment) on records

Usage:
    from service_locator.logging import setup_logging, get_logger

    setup_logging(level='DEBUG')
    logger = get_logger(__name__)
    logger.warning("No registration found", extra={'service_type': 'Database'})
"""

import os
import sys
import json
import logging
from datetime import datetime, timezone
from typing import Optional, Dict


# Extra record attributes attached by the locator facade
CONTEXT_FIELDS = ['service_type', 'registration_name', 'registration_key', 'environment']

DEFAULT_LEVEL_ENV = 'LOCATOR_LOG_LEVEL'


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Produces log entries in JSON format with standard fields.
    """

    def __init__(self, service_name: str = 'service_locator'):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'service': self.service_name,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.pathname:
            log_data['location'] = {
                'file': os.path.basename(record.pathname),
                'line': record.lineno,
                'function': record.funcName,
            }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = str(getattr(record, field))

        return json.dumps(log_data, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, '')
            if color:
                # Color only the level name
                message = message.replace(
                    record.levelname,
                    f'{color}{record.levelname}{self.RESET}'
                )

        return message


class LogManager:
    """
    Centralized log manager.

    Configures the ``service_locator`` logger hierarchy only; the root
    logger of the host application is left alone.
    """

    _instance: Optional['LogManager'] = None
    _initialized: bool = False

    ROOT_LOGGER = 'service_locator'

    def __new__(cls) -> 'LogManager':
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._service_name = 'service_locator'
        self._level = logging.INFO
        self._handlers: Dict[str, logging.Handler] = {}
        self._configured = False

        self._initialized = True

    @property
    def is_configured(self) -> bool:
        return self._configured

    def setup(
        self,
        service_name: str = 'service_locator',
        level: Optional[str] = None,
        json_format: bool = False,
        add_console: bool = True,
    ) -> None:
        """
        Configure logging for the locator.

        Args:
            service_name: Name reported in JSON log entries
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
                falls back to LOCATOR_LOG_LEVEL, then WARNING
            json_format: Use JSON format for console output
            add_console: Add a stderr handler
        """
        level = level or os.getenv(DEFAULT_LEVEL_ENV, 'WARNING')
        self._service_name = service_name
        self._level = getattr(logging, level.upper(), logging.WARNING)

        package_logger = logging.getLogger(self.ROOT_LOGGER)
        package_logger.setLevel(self._level)

        # Remove handlers installed by a previous setup() call
        for handler in self._handlers.values():
            package_logger.removeHandler(handler)
        self._handlers.clear()

        if add_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(self._level)
            if json_format:
                console_handler.setFormatter(JSONFormatter(service_name))
            else:
                console_handler.setFormatter(ConsoleFormatter())
            package_logger.addHandler(console_handler)
            self._handlers['console'] = console_handler

        self._configured = True
        package_logger.debug(f"Logging configured for '{service_name}' at level {level}")

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger with the given name.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Logger instance
        """
        return logging.getLogger(name)


# Module-level convenience functions
_manager: Optional[LogManager] = None


def setup_logging(
    service_name: str = 'service_locator',
    level: Optional[str] = None,
    json_format: bool = False,
) -> LogManager:
    """
    Set up logging for the locator.

    Args:
        service_name: Name of the service
        level: Log level
        json_format: Use JSON format

    Returns:
        LogManager instance
    """
    global _manager
    _manager = LogManager()
    _manager.setup(
        service_name=service_name,
        level=level,
        json_format=json_format,
    )
    return _manager


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Unlike setup_logging(), this never installs handlers; records propagate
    to whatever the host application configured.
    """
    global _manager
    if _manager is None:
        _manager = LogManager()
    return _manager.get_logger(name)
