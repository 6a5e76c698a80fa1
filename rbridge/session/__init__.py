"""Rserve session: connection, command templating and bootstrap."""

from rbridge.session.connection import (
    Connected,
    Disconnected,
    Failed,
    SessionConnection,
    SessionState,
)
from rbridge.session.bootstrap import BootstrapStatus, SessionBootstrapper

__all__ = [
    "Connected",
    "Disconnected",
    "Failed",
    "SessionConnection",
    "SessionState",
    "BootstrapStatus",
    "SessionBootstrapper",
]
