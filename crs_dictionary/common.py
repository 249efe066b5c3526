"""
Common utilities for the dictionary creator.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbose=False):
    """Route package logs to stderr. Verbose switches to DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("crs_dictionary")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
