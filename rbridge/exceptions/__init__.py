"""Custom exceptions for the Rserve session, render pipeline and completion.

All exceptions carry a ``code`` and ``details`` alongside the message.
"""

from rbridge.exceptions.base import RBridgeError
from rbridge.exceptions.session import (
    SessionError,
    SessionConnectionError,
    NoConnectionError,
    EvalError,
    ResultShapeError,
)
from rbridge.exceptions.render import (
    RenderError,
    RenderIOError,
    FragmentExtractionError,
)

__all__ = [
    "RBridgeError",
    "SessionError",
    "SessionConnectionError",
    "NoConnectionError",
    "EvalError",
    "ResultShapeError",
    "RenderError",
    "RenderIOError",
    "FragmentExtractionError",
]
