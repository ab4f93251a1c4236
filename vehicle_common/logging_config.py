"""Logging setup applied once by each entry point."""

from __future__ import annotations

import logging.config
from typing import Any, Dict


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "class": "rich.logging.RichHandler",
                "formatter": "default",
                "level": "DEBUG",
                "rich_tracebacks": True,
                "show_time": True,
                "show_path": False,
                "log_time_format": "%Y-%m-%d %H:%M:%S",
            },
        },
        "loggers": {
            "werkzeug": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "sqlalchemy.engine": {"handlers": ["default"], "level": "WARNING", "propagate": False},
            "": {"handlers": ["default"], "level": level},
        },
    }


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(build_logging_config(level))
