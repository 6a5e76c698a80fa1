"""Placeholder ML widget interpreter.

Answers every paragraph with the same static HTML snippet.
"""

from typing import Any, Mapping, Optional

from rbridge.interpreter.base import Interpreter
from rbridge.models import HTML_DIRECTIVE, FormType, InterpreterContext, InterpreterResult

CANNED_MARKUP = "<h3>Test</h3>"


class WidgetInterpreter(Interpreter):
    def open(self) -> None:
        pass

    def close(self) -> None:
        self.shutdown_scheduler()

    def interpret(self, code: str, context: InterpreterContext) -> InterpreterResult:
        return InterpreterResult.success(f"{HTML_DIRECTIVE} {CANNED_MARKUP}")

    def get_form_type(self) -> FormType:
        return FormType.SIMPLE


def create_widget_interpreter(properties: Optional[Mapping[str, Any]] = None) -> WidgetInterpreter:
    return WidgetInterpreter(properties)
