"""Simple logging utilities for palettekit."""

import logging
import sys


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger with a stderr handler (idempotent)."""
    logger = logging.getLogger("palettekit")
    level = logging.DEBUG if verbose else logging.WARNING

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    logger.setLevel(level)

    return logger
