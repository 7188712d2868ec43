import logging
import logging.config
import os
from datetime import datetime
from typing import Any, Dict

from goods_transport.core.config import settings

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 10

# Channel name -> minimum level written to logs/<channel>/<channel>-<date>.log
FILE_CHANNELS = {
    "app": settings.LOG_LEVEL,
    "error": "ERROR",
    "access": "INFO",
    "audit": "INFO",
}


def _file_handler(log_dir: str, channel: str, level: str, formatter: str, stamp: str) -> Dict[str, Any]:
    os.makedirs(os.path.join(log_dir, channel), exist_ok=True)
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": os.path.join(log_dir, channel, f"{channel}-{stamp}.log"),
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": LOG_BACKUPS,
        "encoding": "utf-8",
    }


def build_logging_config(log_dir: str, to_files: bool = True) -> Dict[str, Any]:
    """
    dictConfig for the service.

    Four channels: application log, errors only, HTTP access lines and the
    audit trail of approval and money movements ("audit" logger). With
    to_files=False everything goes to the console.
    """
    stamp = datetime.now().strftime("%Y-%m-%d")
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    }
    if to_files:
        for channel, level in FILE_CHANNELS.items():
            formatter = "detailed" if channel in ("app", "error") else "plain"
            handlers[f"{channel}_file"] = _file_handler(log_dir, channel, level, formatter, stamp)

    def route(*channels: str) -> list:
        if not to_files:
            return ["console"]
        return [f"{channel}_file" for channel in channels]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "plain": {
                "format": "%(asctime)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "level": settings.LOG_LEVEL,
                "handlers": ["console"] + (route("app", "error") if to_files else []),
                "propagate": False,
            },
            "access": {"level": "INFO", "handlers": route("access"), "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": route("access"), "propagate": False},
            "audit": {"level": "INFO", "handlers": route("audit", "app"), "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING", "handlers": route("app"), "propagate": False},
        },
    }


def setup_logging():
    logging.config.dictConfig(build_logging_config(settings.LOG_DIR, settings.LOG_TO_FILE))
    logging.getLogger(__name__).info(
        f"Logging configured (level {settings.LOG_LEVEL}, files {'on' if settings.LOG_TO_FILE else 'off'})"
    )
