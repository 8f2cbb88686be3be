# core/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

_configured = False

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Loggers of this project; levels set through set_level() apply to these
STORE_LOGGERS = ("core", "stores", "storectl")


def _level_from_name(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def build_handlers(
    log_to_stdout: bool,
    log_file: str | None,
    max_bytes: int = 2 * 1024 * 1024,
    backups: int = 3,
) -> List[logging.Handler]:
    """
    Create the stdout and rotating-file handlers for store logging. A log
    file that cannot be opened is reported on stderr and skipped. Handlers
    carry no level of their own; logger levels decide what is emitted.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = []

    if log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(
                RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backups)
            )
        except OSError as e:
            sys.stderr.write(f"Failed to initialize file logging at {log_file}: {e}\n")

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging():
    global _configured
    if _configured:
        return

    level = _level_from_name(os.getenv("LOG_LEVEL", "INFO"))
    log_to_stdout = os.getenv("LOG_TO_STDOUT", "true").lower() == "true"
    log_to_file = os.getenv("LOG_TO_FILE", "false").lower() == "true"
    log_file = os.getenv("LOG_FILE", "data/storefront.log")

    root = logging.getLogger()
    root.setLevel(level)

    # Embedding applications may already own the root handlers
    if not root.handlers:
        for handler in build_handlers(
            log_to_stdout,
            log_file if log_to_file else None,
            max_bytes=int(os.getenv("LOG_MAX_BYTES", str(2 * 1024 * 1024))),
            backups=int(os.getenv("LOG_BACKUPS", "3")),
        ):
            root.addHandler(handler)

    _configured = True


def set_level(name: str) -> int:
    """Apply a level such as "DEBUG" to the store loggers; returns it."""
    setup_logging()
    level = _level_from_name(name)
    for logger_name in STORE_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)
    return level


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
