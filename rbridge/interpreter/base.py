"""Interpreter contract between notebook hosts and language backends."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from rbridge.models import FormType, InterpreterContext, InterpreterResult
from rbridge.interpreter.scheduler import FIFOScheduler


class Interpreter(ABC):
    """Base class for interpreters.

    The host constructs an instance, calls ``open()`` once, then submits
    ``interpret()`` and ``completion()`` calls through ``get_scheduler()``,
    and finally calls ``close()``.
    """

    def __init__(self, properties: Optional[Mapping[str, Any]] = None):
        self.properties: Dict[str, Any] = dict(properties or {})
        self._scheduler: Optional[FIFOScheduler] = None

    @abstractmethod
    def open(self) -> None:
        """Acquire backend resources."""

    @abstractmethod
    def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    def interpret(self, code: str, context: InterpreterContext) -> InterpreterResult:
        """Run ``code`` for the paragraph described by ``context``."""

    @abstractmethod
    def get_form_type(self) -> FormType:
        """Kind of dynamic form this interpreter supports."""

    def completion(self, buffer: str, cursor: int) -> List[str]:
        return []

    def cancel(self, context: InterpreterContext) -> None:
        """Cancellation is not supported; running calls finish normally."""

    def get_progress(self, context: InterpreterContext) -> int:
        return 0

    def get_scheduler(self) -> FIFOScheduler:
        if self._scheduler is None:
            self._scheduler = FIFOScheduler(f"{type(self).__name__}{id(self)}")
        return self._scheduler

    def shutdown_scheduler(self) -> None:
        """Stop the scheduler's worker thread. Calls already queued still run."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
