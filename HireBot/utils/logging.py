# -*- coding: utf-8 -*-
"""Console logging: records below WARNING go to stdout, the rest to stderr."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s %(lineno)d: %(message)s"
DATE_FORMAT = "[%d/%m/%Y %H:%M]"


class LessThanFilter(logging.Filter):
    """Pass only records strictly below ``exclusive_maximum``."""

    def __init__(self, exclusive_maximum: int, name: str = ""):
        super().__init__(name)
        self.max_level = exclusive_maximum

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def _stream_handler(stream, level: int, name: str) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.set_name(name)
    handler.setLevel(level)
    return handler


def create_logger(level: str = "INFO", name: str = None) -> logging.Logger:
    """
    Attach the stdout/stderr handler pair to logger ``name`` and set its level.
    Calling it again for the same logger replaces the pair instead of stacking it.

    :param level: str
    :param name: str
    """
    logging.getLogger().setLevel(logging.NOTSET)

    logger = get_logger(name)
    for handler in [h for h in logger.handlers if h.get_name() in ("stdout", "stderr")]:
        logger.removeHandler(handler)

    stdout_handler = _stream_handler(sys.stdout, logging.DEBUG, "stdout")
    stdout_handler.addFilter(LessThanFilter(logging.WARNING))
    logger.addHandler(stdout_handler)
    logger.addHandler(_stream_handler(sys.stderr, logging.WARNING, "stderr"))

    logger.setLevel(level.upper())
    logger.info(f"Setting loglevel to {level} for Logger {name}.")
    return logger


def get_logger(name: str = None) -> logging.Logger:
    return logging.getLogger(name)
