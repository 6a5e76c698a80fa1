"""Interpreter result and context models using Pydantic v2."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

# Prefix telling the notebook the payload is HTML markup
HTML_DIRECTIVE = "%html"


class ResultCode(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class FormType(str, Enum):
    """Kind of dynamic input form an interpreter supports."""

    NATIVE = "NATIVE"
    SIMPLE = "SIMPLE"
    NONE = "NONE"


class InterpreterContext(BaseModel):
    """What the host knows about the paragraph being run."""

    paragraph_id: str = Field(..., min_length=1)
    note_id: Optional[str] = None
    paragraph_title: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)


class InterpreterResult(BaseModel):
    """Outcome of one interpret() call."""

    code: ResultCode
    message: str = ""

    @classmethod
    def success(cls, message: str) -> "InterpreterResult":
        return cls(code=ResultCode.SUCCESS, message=message)

    @classmethod
    def error(cls, message: str) -> "InterpreterResult":
        return cls(code=ResultCode.ERROR, message=message)

    @classmethod
    def html(cls, markup: str) -> "InterpreterResult":
        return cls(code=ResultCode.SUCCESS, message=f"{HTML_DIRECTIVE}\n{markup}")

    @property
    def ok(self) -> bool:
        return self.code == ResultCode.SUCCESS
