"""
Logger module for rbridge

Components accept any ``Logger`` implementation so hosts can drop in their
own. ``session_logger`` is the shared console logger used when none is given.

Usage:
    from rbridge.logger import Logger, ConsoleLogger

    logger = ConsoleLogger()
    logger.info("Connected to Rserve", host="localhost", port=6311)
"""

import logging

from rbridge.config import Config

from .interface import Logger
from .default_logger import DefaultLogger
from .console_logger import ConsoleLogger

# Shared logger instance for modules that just need basic console logging
session_logger: Logger = ConsoleLogger(level=logging.getLevelName(Config.get_log_level()))

__all__ = [
    "Logger",
    "DefaultLogger",
    "ConsoleLogger",
    "session_logger",
]
