"""
Logging configuration.

Usage:
    from src.utils.logger import logger, setup_logging

    setup_logging("DEBUG")
    logger.info("Your message")
"""

import sys
from typing import Optional

from loguru import logger

_configured = False


def setup_logging(log_level: Optional[str] = None, force: bool = False):
    """
    Configure a stderr sink for the loguru logger.

    Args:
        log_level: Minimum log level; defaults to Settings.LOG_LEVEL
        force: Replace an existing configuration
    """
    global _configured

    if _configured and not force:
        return

    if log_level is None:
        from src.config import settings

        log_level = settings.LOG_LEVEL

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    _configured = True


__all__ = ["logger", "setup_logging"]
