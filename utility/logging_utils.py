# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-08-30
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "crm_assistant"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

MESSAGE_COLORS = {
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "light_red",
    "CRITICAL": "red",
}


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y")


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        fmt=(
            "%(log_color)s%(asctime)s [%(levelname)s] "
            "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
        ),
        datefmt=DATE_FORMAT,
        log_colors=LEVEL_COLORS,
        secondary_log_colors={"message": MESSAGE_COLORS},
        style="%",
    ))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("CRM_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("CRM_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
        datefmt=DATE_FORMAT,
    ))
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """
    Configure a named logger once: coloured console output, plus a rotating
    file when CRM_LOG_TO_FILE is set. Level comes from CRM_LOG_LEVEL.
    """
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if _truthy(os.getenv("CRM_LOG_TO_FILE", "0")):
        logger.addHandler(_file_handler(Path(os.getenv("CRM_LOG_FILE", "./logs/crm_assistant.log"))))

    level_name = os.getenv("CRM_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Generic logger that does not include a class name.
    """
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      crm_assistant.search.CRMFuzzyMatcher.CRMFuzzyMatcher
      crm_assistant.services.CRMSearchService.CRMSearchService
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")
