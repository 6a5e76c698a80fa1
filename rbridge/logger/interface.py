"""Logger interface.

Components receive a ``Logger`` and call it with a message plus optional
structured fields, e.g. ``logger.info("render.start", job_id=job_id)``.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract logger accepted by every rbridge component."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
