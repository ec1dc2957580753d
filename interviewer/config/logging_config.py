# interviewer/config/logging_config.py
"""
Console logging for the whole service plus one rotating file per component.

    setup_base_logging()            # once, from main.py
    logger = get_logger("stores")   # -> <LOGS_DIR>/stores.log

Level and rotation come from settings (LOG_LEVEL, LOG_FILE_MAX_BYTES,
LOG_FILE_BACKUPS). Log directories are resolved when a logger is first
requested, not at import.
"""
import logging
import logging.config
import logging.handlers
import sys
from typing import Optional

from interviewer.config import settings

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request at INFO/DEBUG.
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "google_genai", "langchain_google_genai")


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"console": {"format": CONSOLE_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "console",
                "stream": sys.stdout,
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
        "root": {"level": "DEBUG", "handlers": ["console"]},
    }


def setup_base_logging(level: Optional[str] = None) -> None:
    """Install the console handler on the root logger. Call once at startup."""
    logging.config.dictConfig(_dict_config((level or settings.LOG_LEVEL).upper()))


def _handler_name(component: str) -> str:
    return f"{component}-file"


def _component_file_handler(component: str) -> logging.Handler:
    settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        settings.LOGS_DIR / f"{component}.log",
        maxBytes=settings.LOG_FILE_MAX_BYTES,
        backupCount=settings.LOG_FILE_BACKUPS,
        encoding="utf-8",
        delay=True,
    )
    handler.set_name(_handler_name(component))
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, FILE_DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """
    Return the component logger, attaching its file handler on first use.
    Records still propagate to the root console handler.
    """
    logger = logging.getLogger(name)
    if not any(h.get_name() == _handler_name(name) for h in logger.handlers):
        logger.addHandler(_component_file_handler(name))
    return logger
