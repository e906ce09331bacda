"""Logging configuration setup.

Library code only creates loggers; handlers are attached by the
application (or the CLI) through :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from relay_pagination.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str | None = None,
    capture_warnings: bool = True,
) -> None:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Emit JSON Lines instead of plain text.
        service_name: Static ``service`` field added to JSON records.
        capture_warnings: Forward Python warnings to logging system.

    Example:
        from relay_pagination.core.settings import get_logging_settings

        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    formatter: dict[str, Any]
    if json_logs:
        formatter = {
            "()": "relay_pagination.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name} if service_name else {},
        }
    else:
        formatter = {"format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s"}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": formatter},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {"level": log_level, "handlers": ["console"]},
        }
    )
    logging.captureWarnings(capture_warnings)
    logger.debug("Logging configured (level=%s, json=%s)", log_level, json_logs)


def setup_logging(log_settings: LoggingSettings | None = None) -> None:
    """Configure logging from settings.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
    """
    if log_settings is None:
        from relay_pagination.core.settings import get_logging_settings

        log_settings = get_logging_settings()
    configure_logging(**log_settings.to_logging_kwargs())
