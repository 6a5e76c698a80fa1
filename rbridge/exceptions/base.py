"""Base exception for rbridge.

Every error carries a machine-readable ``code`` and a ``details`` dict in
addition to its human-readable message, so hosts can log or display it
without parsing the text.
"""

from typing import Any, Dict, Optional


class RBridgeError(Exception):
    """Root of all rbridge exceptions."""

    def __init__(self, message: str, code: str = "RBRIDGE_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.code, "message": self.message, "details": self.details}
