"""Logging setup for the API process."""

import logging
import logging.config

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-45s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the application.

    Args:
        level: Log level name for the application loggers.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "prompt_refiner_api": {
                    "handlers": ["console"],
                    "level": level.upper(),
                    "propagate": False,
                },
                # SDK request logs are noisy at INFO
                "httpx": {"level": "WARNING"},
            },
        }
    )
