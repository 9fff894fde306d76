import logging
import sys
from ramp_convert.config import settings # Use absolute import

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

# Get the desired level from settings, default to INFO if invalid or not found
log_level_str = getattr(settings, 'LOGGING_LEVEL', 'INFO').upper()
log_level = LOG_LEVEL_MAP.get(log_level_str, logging.INFO)

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Console Handler, shared by every module logger
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)


def get_logger(name):
    """
    Gets a logger instance configured with the application's settings.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # get_logger may be called repeatedly for the same name
    if not logger.handlers:
        logger.addHandler(console_handler)

    logger.propagate = False

    return logger


def set_level(level_name):
    """Changes the level of every logger handed out so far (used by the UI's verbose toggle)."""
    global log_level
    log_level = LOG_LEVEL_MAP.get(str(level_name).upper(), logging.INFO)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and console_handler in logger.handlers:
            logger.setLevel(log_level)
    return log_level
