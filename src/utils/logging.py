"""Logging utility with verbosity levels and optional file logging."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging with verbosity levels and optional file output.

    Console output goes to stderr so stdout stays free for command output.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Optional log file path, always written at DEBUG level

    Returns:
        Configured logger instance
    """
    if verbosity <= 0:
        log_level = logging.WARNING
    elif verbosity == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_format)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized. Verbosity: {verbosity}, Log file: {log_file}")

    return logger


MAX_VERBOSITY = 2


def is_verbosity_flag(arg: str) -> bool:
    """True for -v, -vv, ... and --verbose."""
    return arg == "--verbose" or (len(arg) > 1 and arg[0] == "-" and set(arg[1:]) == {"v"})


def parse_verbosity(args: List[str]) -> int:
    """
    Sum verbosity flags from command line arguments.

    Repeated flags add up ("-v -v" equals "-vv"); anything above DEBUG is capped.

    Args:
        args: Command line arguments

    Returns:
        Verbosity level (0-2)
    """
    verbosity = 0
    for arg in args:
        if arg == "--verbose":
            verbosity += 1
        elif is_verbosity_flag(arg):
            verbosity += len(arg) - 1
    return min(verbosity, MAX_VERBOSITY)
