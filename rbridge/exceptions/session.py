"""Session and remote evaluation exceptions."""

from typing import Any, Dict, Optional

from rbridge.exceptions.base import RBridgeError


class SessionError(RBridgeError):
    """Base exception for Rserve session errors."""

    pass


class SessionConnectionError(SessionError):
    """Raised when no Rserve instance is reachable."""

    def __init__(self, host: str, port: int, reason: str):
        super().__init__(
            code="CONNECTION_FAILED",
            message=f"No Rserve instance available at {host}:{port}: {reason}",
            details={"host": host, "port": port, "reason": reason},
        )
        self.host = host
        self.port = port
        self.reason = reason


class NoConnectionError(SessionError):
    """Raised when an operation is attempted on a session that is not connected."""

    def __init__(self, state: str, reason: Optional[str] = None):
        details: Dict[str, Any] = {"state": state}
        if reason:
            details["reason"] = reason
        super().__init__(code="NO_CONNECTION", message="No connection to Rserve", details=details)
        self.state = state


class EvalError(SessionError):
    """Raised when the remote expression fails."""

    def __init__(self, expression: str, message: str):
        super().__init__(code="EVAL_ERROR", message=message, details={"expression": expression})
        self.expression = expression


class ResultShapeError(SessionError):
    """Raised when a remote value cannot be read as a string or list of strings."""

    def __init__(self, expression: str, value_type: str):
        super().__init__(
            code="RESULT_SHAPE_ERROR",
            message=f"Result of '{expression}' has unexpected type {value_type}",
            details={"expression": expression, "value_type": value_type},
        )
        self.expression = expression
        self.value_type = value_type
