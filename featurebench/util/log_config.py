"""
Logging configuration for featurebench.

Provides centralized logging setup with clean, concise terminal output.
Recorder reports and chapter output are printed; everything diagnostic goes
through these loggers.
"""
import logging
import sys
from pathlib import Path
from typing import Optional


DEFAULT_LEVEL = logging.INFO


def setup_logger(
    name: str,
    level: int = DEFAULT_LEVEL,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt='[%(levelname)s] %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        file_formatter = logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def set_package_level(level: int) -> None:
    """
    Change the level of every featurebench logger created so far.

    Used by the CLI's --verbose / --quiet switches after the modules have
    already called setup_logger at import time.
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith("featurebench") or not isinstance(logger, logging.Logger):
            continue
        logger.setLevel(level)
        for handler in logger.handlers:
            if isinstance(handler, logging.FileHandler):
                continue
            handler.setLevel(level)
