"""Persistent connection to a remote Rserve instance."""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

import numpy as np
import pyRserve
from pyRserve.rexceptions import PyRserveError, REvalError

from rbridge.config import DEFAULT_RSERVE_HOST, DEFAULT_RSERVE_PORT
from rbridge.exceptions import (
    EvalError,
    NoConnectionError,
    ResultShapeError,
    SessionConnectionError,
)
from rbridge.logger import Logger, session_logger


@dataclass(frozen=True)
class Disconnected:
    """No connection has been opened, or it was shut down."""

    name = "disconnected"


@dataclass(frozen=True)
class Connected:
    """Live connection; ``handle`` is the pyRserve connection object."""

    handle: Any
    name = "connected"


@dataclass(frozen=True)
class Failed:
    """The last connection attempt failed."""

    reason: str
    name = "failed"


SessionState = Union[Disconnected, Connected, Failed]

Connector = Callable[..., Any]


def _as_strings(expression: str, value: Any) -> List[str]:
    """Coerce an evaluated R value to a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, bytes):
        return [value.decode("utf-8")]
    if isinstance(value, np.ndarray):
        items = value.ravel().tolist()
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise ResultShapeError(expression, type(value).__name__)

    strings = []
    for item in items:
        if isinstance(item, bytes):
            item = item.decode("utf-8")
        if not isinstance(item, str):
            raise ResultShapeError(expression, f"{type(value).__name__}[{type(item).__name__}]")
        strings.append(item)
    return strings


class SessionConnection:
    """Owns the single Rserve connection of one interpreter instance.

    The connection is always in exactly one of three states (Disconnected,
    Connected, Failed). Evaluation is only allowed while Connected; any other
    state raises ``NoConnectionError`` before anything is sent.
    """

    def __init__(
        self,
        host: str = DEFAULT_RSERVE_HOST,
        port: int = DEFAULT_RSERVE_PORT,
        logger: Optional[Logger] = None,
        connector: Optional[Connector] = None,
    ):
        """
        Initialize an unconnected session.

        Args:
            host: Rserve host
            port: Rserve port
            logger: Logger instance (uses the shared session logger if None)
            connector: Callable returning a connection object; defaults to
                ``pyRserve.connect``
        """
        self.host = host
        self.port = port
        self.logger = logger or session_logger
        self._connector = connector or pyRserve.connect
        self._state: SessionState = Disconnected()

    @property
    def state(self) -> SessionState:
        return self._state

    def connect(self) -> None:
        """Open the connection.

        Raises:
            SessionConnectionError: If no Rserve instance is reachable
        """
        if self.is_alive():
            self.logger.debug("Rserve connection already open", host=self.host, port=self.port)
            return

        try:
            handle = self._connector(host=self.host, port=self.port)
        except (PyRserveError, OSError) as e:
            self._state = Failed(reason=str(e))
            self.logger.error("No Rserve instance available!", host=self.host, port=self.port, error=str(e))
            raise SessionConnectionError(self.host, self.port, str(e)) from e

        self._state = Connected(handle=handle)
        self.logger.info("Connected to an Rserve instance", host=self.host, port=self.port)

    def is_alive(self) -> bool:
        """Whether a connection is present and reports itself open."""
        if not isinstance(self._state, Connected):
            return False
        return not getattr(self._state.handle, "isClosed", False)

    def _require_handle(self) -> Any:
        state = self._state
        if isinstance(state, Connected) and self.is_alive():
            return state.handle
        reason = state.reason if isinstance(state, Failed) else None
        raise NoConnectionError(state.name, reason)

    def evaluate_void(self, expression: str) -> None:
        """Evaluate ``expression`` for its side effects only.

        Raises:
            NoConnectionError: If the session is not connected
            EvalError: If R reports an error
        """
        handle = self._require_handle()
        self.logger.debug("Rserve voidEval", expression=expression)
        try:
            handle.voidEval(expression)
        except (REvalError, PyRserveError, OSError) as e:
            raise EvalError(expression, str(e)) from e

    def evaluate(self, expression: str) -> List[str]:
        """Evaluate ``expression`` and return its value as a list of strings.

        Raises:
            NoConnectionError: If the session is not connected
            EvalError: If R reports an error
            ResultShapeError: If the value is not character data
        """
        handle = self._require_handle()
        self.logger.debug("Rserve eval", expression=expression)
        try:
            value = handle.eval(expression)
        except (REvalError, PyRserveError, OSError) as e:
            raise EvalError(expression, str(e)) from e
        return _as_strings(expression, value)

    def shutdown(self) -> None:
        """Ask the remote session to terminate. Errors are logged, not raised."""
        state = self._state
        self._state = Disconnected()
        if not isinstance(state, Connected):
            return

        try:
            state.handle.shutdown()
            self.logger.info("Shutting down Rserve", host=self.host, port=self.port)
        except (PyRserveError, OSError) as e:
            self.logger.warning("Rserve shutdown failed", host=self.host, port=self.port, error=str(e))
        finally:
            self._close_socket(state.handle)

    def _close_socket(self, handle) -> None:
        # A successful shutdown closes the socket itself
        if handle.isClosed:
            return
        try:
            handle.close()
        except (PyRserveError, OSError) as e:
            self.logger.warning("Could not close Rserve socket", host=self.host, port=self.port, error=str(e))
