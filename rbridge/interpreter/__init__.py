"""Notebook interpreters: the R/Rserve interpreter and the widget stub."""

from rbridge.interpreter.base import Interpreter
from rbridge.models import FormType, InterpreterContext, InterpreterResult, ResultCode
from rbridge.interpreter.r_interpreter import RInterpreter, create_r_interpreter
from rbridge.interpreter.registry import (
    InterpreterNotFoundError,
    InterpreterRegistry,
    default_registry,
)
from rbridge.interpreter.scheduler import FIFOScheduler
from rbridge.interpreter.widget import WidgetInterpreter, create_widget_interpreter

__all__ = [
    "Interpreter",
    "FormType",
    "InterpreterContext",
    "InterpreterResult",
    "ResultCode",
    "RInterpreter",
    "create_r_interpreter",
    "InterpreterNotFoundError",
    "InterpreterRegistry",
    "default_registry",
    "FIFOScheduler",
    "WidgetInterpreter",
    "create_widget_interpreter",
]
