"""
Logging Configuration.

This module provides the package-wide logger factory. Every module obtains
its logger with ``logger = get_logger(__name__)`` so that output format and
destination are consistent across the distance strategies.
"""

import logging
import sys


# Configure root logger for the package
def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the distance strategies.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
