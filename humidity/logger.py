import logging
import os
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "humidity"


def setup_logger(debug_mode=False):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)
    else:
        for existing in logger.handlers:
            existing.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    return logger


def get_debug_mode() -> bool:
    return DEBUG_MODE


def print_stack_trace():
    """
    Log the current exception's stack trace if debug mode is enabled.
    """
    if get_debug_mode():
        error_msg = traceback.format_exc()
        logger.error(error_msg)


def configure_logger(debug_mode: bool) -> None:
    """Re-setup the shared logger, e.g. once settings have been loaded."""
    global DEBUG_MODE
    DEBUG_MODE = debug_mode
    setup_logger(debug_mode=DEBUG_MODE)
    if DEBUG_MODE:
        logger.debug("Debug mode is active.")


# Logger defaults to INFO unless HUMIDITY_DEBUG is set or reconfigured later.
DEBUG_MODE = os.environ.get("HUMIDITY_DEBUG", "").lower() in ("1", "true", "yes")
logger = setup_logger(debug_mode=DEBUG_MODE)
