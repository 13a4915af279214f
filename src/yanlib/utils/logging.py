"""Structured logging configuration using structlog.

Библиотека пишет только DEBUG-записи (проглоченные ошибки конверсии,
загрузка таблицы типов). Импорт библиотеки не меняет конфигурацию
structlog: её задаёт приложение, например через setup_logging.

Example:
    >>> from src.yanlib.config import LibrarySettings
    >>> from src.yanlib.utils.logging import setup_logging, get_logger
    >>> setup_logging(LibrarySettings(log_level="DEBUG"))
    >>> logger = get_logger(__name__)
    >>> logger.debug("conversion_failed", target="int", value="abc")
"""

import logging
import sys

import structlog
from structlog.types import Processor

from src.yanlib.config import LibrarySettings


def setup_logging(settings: LibrarySettings | None = None) -> None:
    """Configure structlog processors, renderer and level filtering.

    Args:
        settings: Library settings (log_level, log_json). Defaults are used
            when omitted.
    """
    settings = settings or LibrarySettings()
    log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.
    """
    return structlog.get_logger(module=name)
