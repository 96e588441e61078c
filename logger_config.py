"""Logging for the Medication Reminder.

Every module logs through ``setup_logger``: one rotating file shared by the
run plus the console, which is what the scheduler captures. The log
directory and level come from the environment so cron and CI hosts can
redirect them without touching code.

    REMINDER_LOG_DIR    directory for reminder.log (default: ./logs beside this file)
    REMINDER_LOG_LEVEL  logging level name (default: INFO)
"""

import logging
from logging.handlers import RotatingFileHandler
import os

LOG_FORMAT = '[%(asctime)s] %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Transport chatter that would otherwise repeat every request line
NOISY_LOGGERS = ('httpx', 'httpcore')


def log_dir() -> str:
    default = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs')
    return os.environ.get('REMINDER_LOG_DIR', default)


def log_level() -> int:
    name = os.environ.get('REMINDER_LOG_LEVEL', 'INFO').upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str, log_file: str = 'reminder.log') -> logging.Logger:
    """Return a logger writing to the console and a rotating file.

    Args:
        name: Logger name (usually __name__)
        log_file: File name inside the log directory

    Returns:
        Configured logger; calling again for the same name adds no handlers
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = log_level()
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    directory = log_dir()
    os.makedirs(directory, exist_ok=True)

    handlers = [
        RotatingFileHandler(
            os.path.join(directory, log_file),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding='utf-8'
        ),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def quiet_noisy_loggers():
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


quiet_noisy_loggers()
