"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional


DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'WARNING', log_file: Optional[str] = None, log_format: Optional[str] = None):
    """
    Setup logging configuration

    Search results go to stdout, so log records are written to stderr.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        log_format: Log message format (optional)
    """
    if log_format is None:
        log_format = DEFAULT_FORMAT

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    # Drop handlers left by an earlier call
    for handler in list(root.handlers):
        if getattr(handler, "_string_searcher", False):
            root.removeHandler(handler)
            handler.close()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    console_handler._string_searcher = True
    root.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        file_handler._string_searcher = True
        root.addHandler(file_handler)

    logging.debug("Logging configured successfully")


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance

    Args:
        name: Logger name (typically the component name)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
