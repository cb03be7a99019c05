"""
================================================================================
Global Logging Configuration
================================================================================

Centralized Loguru setup shared by the CLI, the harness and the pytest suites.

Features:
    - One stderr sink with a consistent format
    - Optional rotating file sink
    - Level and file taken from config/harness.yaml unless given explicitly

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from uiharness.framework.config_loader import ConfigLoader

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    verbose: bool = False,
    force: bool = False,
) -> None:
    """
    Initializes the global Loguru logger.

    Call once at the start of a run. Later calls are ignored unless
    ``force`` is set (the CLI forces so that --log-level always wins).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to logging.level.
        log_file: Optional log file path. Defaults to logging.file.
        verbose: Use the detailed format with module/function/line on stderr.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    config = ConfigLoader()
    log_level = (level or config.get("logging.level", "INFO")).upper()
    log_file = log_file or config.get("logging.file")

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=LOG_FORMAT if verbose else CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=LOG_FORMAT.replace("{level: <8}", "{level}"),
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
            compression="zip",
            encoding="utf-8",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized (level={log_level}, file={log_file or 'none'})")


def reset_logger() -> None:
    """Allow init_logger to run again (used by tests)."""
    global _logger_initialized
    _logger_initialized = False


__all__ = ["init_logger", "reset_logger", "LOG_FORMAT", "CONSOLE_FORMAT"]
