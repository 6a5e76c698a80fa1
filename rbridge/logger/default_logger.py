"""Logger backed by a plain ``logging`` logger.

Handler and level setup is left to the host application.
"""

import logging
from typing import Any, Optional

from .interface import Logger


def _format(message: str, fields: dict) -> str:
    if not fields:
        return message
    extras = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"{message} {extras}"


class DefaultLogger(Logger):
    """Forwards to ``logging.getLogger(name)``."""

    def __init__(self, name: str = "rbridge", logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(name)

    def _log(self, level: int, message: str, fields: dict) -> None:
        exc_info = fields.pop("exc_info", None)
        self._logger.log(level, _format(message, fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)
