"""
Logging Utilities

Registers the TRACE level used by the method-call interceptor and installs the
rotating file and console handlers on the root logger.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from constants import LogConfig, ServerDefaults

TRACE = LogConfig.TRACE

logging.addLevelName(TRACE, 'TRACE')


def configure_logging(log_dir: Path, level: int = logging.INFO) -> Path:
    """
    Configure root logging with a rotating file handler and a console handler.

    Args:
        log_dir: Directory receiving the log file (created if missing)
        level: Root log level, TRACE included

    Returns:
        Path of the log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / ServerDefaults.LOG_FILENAME

    log_formatter = logging.Formatter(LogConfig.FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LogConfig.MAX_BYTES,
        backupCount=LogConfig.BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        if getattr(handler, '_hostocars_handler', False):
            root_logger.removeHandler(handler)
            handler.close()
    for handler in (file_handler, console_handler):
        handler._hostocars_handler = True
        root_logger.addHandler(handler)

    return log_file
