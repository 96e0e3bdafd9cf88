import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "compose_azure"


def setup_logger(debug_mode=False, stream=None):
    """
    Configure the package logger.

    Log records go to stderr; stdout carries nothing but protocol messages.

    Args:
        debug_mode (bool, optional): Log at DEBUG instead of INFO. Defaults to False.
        stream (optional): Target stream. Defaults to sys.stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(name)s: %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )
    handler.setFormatter(formatter)

    # Re-running setup (e.g. switching to debug mode) replaces the handler.
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def format_stack_trace(error: BaseException) -> str:
    """Render the traceback of an exception, chained causes included."""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()
