"""Logging configuration for the project document service.

Every module logs through a child of the "projectdocs" logger. The parent
gets a formatted console handler on import; setup_logging() adds a rotating
file under the workspace logs directory when that directory is writable.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from projectdocs.settings import settings

ROOT_LOGGER_NAME = "projectdocs"

LOG_FORMAT = "[%(asctime)s.%(msecs)03d][%(levelname)s][%(name)s:%(lineno)d]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _configure_root_logger() -> logging.Logger:
    """Attach the console handler to the package logger once."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    has_console = any(type(h) is logging.StreamHandler for h in root_logger.handlers)
    if not has_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(_formatter())
        root_logger.addHandler(console_handler)
        root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
        # Records still reach the root logger (pytest caplog)
        root_logger.propagate = True
    return root_logger


def _writable_logs_dir() -> Path | None:
    logs_root = settings.get_logs_root()
    try:
        logs_root.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return logs_root


def setup_logging(log_name: str = "projectdocs") -> logging.Logger:
    """
    Configure console and rotating file output.

    Log file path pattern: {workspace}/logs/{log_name}.log
    Without a writable logs directory only console output is configured.

    Args:
        log_name: File name of the log (without .log extension)

    Returns:
        Logger named projectdocs.{log_name}
    """
    root_logger = _configure_root_logger()
    log_dir = _writable_logs_dir()

    if log_dir is not None:
        log_file = str(log_dir / f"{log_name}.log")
        already_attached = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_file for h in root_logger.handlers
        )
        if not already_attached:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(_formatter())
            root_logger.addHandler(file_handler)
            root_logger.info(f"Log file handler added: {log_file}")

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{log_name}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the projectdocs namespace.

    Args:
        name: Logger name, typically __name__ of the calling module
    """
    _configure_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


_configure_root_logger()
