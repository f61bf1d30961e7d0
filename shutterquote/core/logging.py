"""Logging configuration for the quotation service."""

from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any, Dict

from shutterquote.core.config import get_settings


def setup_logging() -> None:
    settings = get_settings()
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.LOG_LEVEL,
                "formatter": "simple",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "shutterquote": {
                "level": settings.LOG_LEVEL,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {"level": "INFO"},
        },
    }
    logging.config.dictConfig(config)
    # reportlab is chatty at DEBUG
    logging.getLogger("reportlab").setLevel(logging.WARNING)
