"""Logging infrastructure built on the standard library logging module."""

from tsearch.infra.logging.config import build_logging_config, configure_logging, setup_logging
from tsearch.infra.logging.formatters import JSONFormatter

__all__ = ["JSONFormatter", "build_logging_config", "configure_logging", "setup_logging"]
