"""
Logging configuration for the smallsh process

Component loggers are plain named loggers ('Shell', 'ProcessSpawner', ...).
An interactive shell must keep the terminal clean, so by default only
WARNING and above go to stderr. With a log file configured, everything at the
configured level goes to a rotating file instead.
"""
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import ShellConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(name)s - %(levelname)s - %(message)s'

MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


def configure_logging(config: ShellConfig) -> logging.Handler:
    """Attach one handler to the root logger and return it"""
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    handler: Optional[logging.Handler]
    if config.log_file:
        handler = RotatingFileHandler(
            config.log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8',
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
    return handler
