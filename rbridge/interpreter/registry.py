"""Explicit interpreter registry.

Nothing registers itself on import; hosts build a registry (or take
``default_registry()``) and create interpreters by name.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from rbridge.exceptions import RBridgeError
from rbridge.interpreter.base import Interpreter
from rbridge.interpreter.r_interpreter import create_r_interpreter
from rbridge.interpreter.widget import create_widget_interpreter

InterpreterFactory = Callable[[Optional[Mapping[str, Any]]], Interpreter]


class InterpreterNotFoundError(RBridgeError):
    """Raised when no factory is registered under the requested name."""

    def __init__(self, name: str, available: List[str]):
        available_text = f" Available interpreters: {', '.join(available)}." if available else ""
        super().__init__(
            code="INTERPRETER_NOT_FOUND",
            message=f"Interpreter '{name}' is not registered.{available_text}",
            details={"name": name, "available": available},
        )


class InterpreterRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, InterpreterFactory] = {}

    def register(self, name: str, factory: InterpreterFactory) -> None:
        if name in self._factories:
            raise ValueError(f"Interpreter '{name}' is already registered")
        self._factories[name] = factory

    def names(self) -> List[str]:
        return sorted(self._factories)

    def create(self, name: str, properties: Optional[Mapping[str, Any]] = None) -> Interpreter:
        factory = self._factories.get(name)
        if factory is None:
            raise InterpreterNotFoundError(name, self.names())
        return factory(properties)


def default_registry() -> InterpreterRegistry:
    """Registry with the R interpreter as ``r`` and the widget stub as ``wso2ml``."""
    registry = InterpreterRegistry()
    registry.register("r", create_r_interpreter)
    registry.register("wso2ml", create_widget_interpreter)
    return registry
