"""Logging configuration setup.

Configures the standard library logging system with dictConfig:
- One console (stderr) handler on the root logger
- JSONL format for machine parsing, or a plain text format
- Child loggers (``logging.getLogger(__name__)``) propagate to root
- Optional level overrides per logger (e.g. the search package at DEBUG)
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tsearch.core.settings.logs import LoggingSettings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from tsearch.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "tsearch",
    logger_levels: Mapping[str, str] | None = None,
    capture_warnings: bool = True,
) -> None:
    """Configure console logging with dictConfig.

    Args:
        log_level: Root logger level.
        json_logs: Write JSON Lines instead of plain text.
        service_name: Static ``service`` field of JSON records.
        logger_levels: Level overrides per logger name, e.g.
            ``{"tsearch.core.database.search": "DEBUG"}`` to see compiled
            fragments without raising the root level.
        capture_warnings: Forward Python warnings to logging system.

    Example:
        from tsearch.core.settings import get_logging_settings

        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if capture_warnings:
        logging.captureWarnings(True)

    logging.config.dictConfig(
        build_logging_config(
            log_level=log_level,
            json_logs=json_logs,
            service_name=service_name,
            logger_levels=logger_levels,
        ),
    )
    logger.debug("Logging configured", extra={"json_logs": json_logs})


def build_logging_config(
    log_level: str,
    json_logs: bool,
    service_name: str,
    logger_levels: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build the dictConfig mapping: one stderr handler on the root logger."""
    if json_logs:
        formatter: dict[str, Any] = {
            "()": "tsearch.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
        }
    else:
        formatter = {"format": TEXT_FORMAT}

    # Overridden loggers keep propagating to the root handler
    loggers = {name: {"level": level.upper()} for name, level in (logger_levels or {}).items()}

    return {
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
        "loggers": loggers,
        "root": {"level": log_level.upper(), "handlers": ["console"]},
    }


__all__ = ["build_logging_config", "configure_logging", "setup_logging"]
