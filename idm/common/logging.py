"""
Logging configuration helpers.
The service logs through the standard library; this module applies the level and format once per process.
"""

from __future__ import annotations

import logging

from idm.common.settings import get_settings

_LOGGING_CONFIGURED = False

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEVELOP_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"


def configure_logging() -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = get_settings()
    level_name = settings.LOG_LEVEL.upper()
    level = getattr(logging, level_name, logging.INFO)
    log_format = _DEFAULT_FORMAT

    if settings.LOG_DEVELOP_MODE:
        level = logging.DEBUG
        log_format = _DEVELOP_FORMAT

    logging.basicConfig(level=level, format=log_format)
    logging.getLogger("idm").debug("logging configured level=%s", logging.getLevelName(level))
    _LOGGING_CONFIGURED = True
