import os
import logging
from datetime import datetime
from typing import Dict, Optional

from config import LOG_DIR

REQUEST_LOGGER = "request-logger"
STACK_LOGGER = "stack-logger"
INDEPENDENT_LOGGER = "independent-logger"

# the loggers whose level can be read and changed at runtime
LOGGERS: Dict[str, logging.Logger] = {}

os.makedirs(LOG_DIR, exist_ok=True)


class RequestFormatter(logging.Formatter):
    """`dd-mm-YYYY HH:MM:SS.mmm LEVEL: message | request #N`"""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s: %(message)s")

    def formatTime(self, record, datefmt=None):
        created = datetime.fromtimestamp(record.created)
        return f"{created:%d-%m-%Y %H:%M:%S}.{int(record.msecs):03d}"

    def format(self, record):
        line = super().format(record)
        request_number = getattr(record, "request_number", None)
        if request_number is None:
            return line
        return f"{line} | request #{request_number}"


def register_logger(name: str, log_file: str, level: int, to_stdout: bool = False) -> logging.Logger:
    """
    Create a calculator logger writing to LOG_DIR/log_file, and optionally to stdout.
    Registering the same name again returns the existing logger untouched.
    """
    if name in LOGGERS:
        return LOGGERS[name]

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    handlers = [logging.FileHandler(os.path.join(LOG_DIR, log_file), mode="a")]
    if to_stdout:
        handlers.append(logging.StreamHandler())
    formatter = RequestFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    LOGGERS[name] = logger
    return logger


def get_logger_level(name: str) -> Optional[str]:
    """Level of one of the calculator loggers, None for any other name."""
    if name not in LOGGERS:
        return None
    return logging.getLevelName(LOGGERS[name].level)


def set_logger_level(name: str, level_name: str) -> bool:
    if name not in LOGGERS:
        return False
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        return False
    LOGGERS[name].setLevel(level)
    return True


request_logger = register_logger(REQUEST_LOGGER, "requests.log", logging.INFO, to_stdout=True)
stack_logger = register_logger(STACK_LOGGER, "stack.log", logging.INFO)
independent_logger = register_logger(INDEPENDENT_LOGGER, "independent.log", logging.DEBUG)
