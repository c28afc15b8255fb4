"""
loguru setup for fixguard.

stderr sink unless FIXGUARD_MACHINE_MODE is set; rotating file sink under
~/.fixguard/logs when FIXGUARD_FILE_LOGGING is set.
"""

import os
import sys
from pathlib import Path

from loguru import logger

LOG_DIR = Path.home() / ".fixguard" / "logs"
CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"

_configured = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None):
    """
    Install fixguard's sinks. Later calls are no-ops until reset_logging().

    Args:
        level: Console level
        suppress_console: Defaults to FIXGUARD_MACHINE_MODE
        enable_file_logging: Defaults to FIXGUARD_FILE_LOGGING
    """
    global _configured
    if _configured:
        return
    _configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("FIXGUARD_MACHINE_MODE")
    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("FIXGUARD_FILE_LOGGING")
    if enable_file_logging:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(LOG_DIR / "fixguard.log", level="DEBUG", rotation="5 MB", retention=3, catch=True)


def reset_logging():
    """Allow setup_logging() to run again (tests, --verbose)."""
    global _configured
    _configured = False


setup_logging()
