import os
from logging.config import dictConfig
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure process logging; ``KLB_LOG_LEVEL`` applies when no level is given."""
    resolved = (level or os.getenv("KLB_LOG_LEVEL", "INFO")).upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": DEFAULT_LOG_FORMAT,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["default"],
                "level": resolved,
            },
            "loggers": {
                "klb.telemetry": {
                    "level": os.getenv("KLB_TELEMETRY_LOG_LEVEL", resolved).upper(),
                },
            },
        }
    )
