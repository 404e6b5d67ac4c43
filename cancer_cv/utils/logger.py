"""Logging configuration for the cross-validation study."""

import logging
import sys

_ROOT = "cancer_cv"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Create a configured logger instance."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        fmt = logging.Formatter(
            "[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        # Handlers live on each named logger; don't echo through the root.
        logger.propagate = False
    return logger


def set_level(level: int) -> None:
    """Change the level of every logger created under the package namespace."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (
            name == _ROOT or name.startswith(_ROOT + ".")
        ):
            logger.setLevel(level)
