"""Logging setup for airport_runway_sim.

The package is silent by default (a NullHandler sits on its logger). Turn
messages on explicitly:

    from airport_runway_sim import enable_console_logging
    enable_console_logging(level="DEBUG")

or through the environment with configure_from_env():

    RUNWAY_SIM_LOGGING: log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

import logging
import os


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOGGER_NAME = "airport_runway_sim"
ENV_LEVEL = "RUNWAY_SIM_LOGGING"


def _get_level(level):
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger():
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers():
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def enable_console_logging(level="INFO", format=DEFAULT_FORMAT, date_format=DEFAULT_DATE_FORMAT):
    """Log to stderr at the given level. Returns the handler it installed."""
    _clear_handlers()
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    handler = logging.StreamHandler()
    handler.setLevel(_get_level(level))
    handler.setFormatter(logging.Formatter(format, date_format))

    logger.addHandler(handler)
    return handler


def disable_logging():
    _clear_handlers()
    _get_logger().setLevel(logging.CRITICAL + 1)


def configure_from_env(default_level=None):
    """Console logging at $RUNWAY_SIM_LOGGING, else default_level, else stay silent."""
    level = os.environ.get(ENV_LEVEL, default_level)
    if level is None:
        return None
    return enable_console_logging(level=level)
