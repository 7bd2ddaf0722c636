#!/usr/bin/env python3

import logging
import logging.config
from pythonjsonlogger import jsonlogger


def setup_logging(level: str = "WARNING", json_output: bool = False):
    """Setup logging configuration for the checker.

    Report output goes to stdout, so log records are written to stderr.
    """
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
            },
            "text": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_output else "text",
                "stream": "ext://sys.stderr"
            }
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False
            },
            "niem_check": {
                "handlers": ["console"],
                "level": level.upper(),
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
