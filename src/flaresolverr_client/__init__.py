"""
flaresolverr-client — async Python client for FlareSolverr.

Command dispatch over POST /v1 plus client-side session lifecycle
management with idle-TTL auto-expiry.
"""

from flaresolverr_client.client import AsyncFlareSolverr
from flaresolverr_client.dispatcher import CommandDispatcher
from flaresolverr_client.session import SessionManager, SessionState
from flaresolverr_client.errors import (
    FlareSolverrError,
    InvalidTTLError,
    RemoteError,
    SessionDestroyedError,
    TransportError,
)
from flaresolverr_client.models.commands import Command
from flaresolverr_client.models.common import Status

__version__ = "0.1.0"
__all__ = [
    "AsyncFlareSolverr",
    "CommandDispatcher",
    "SessionManager",
    "SessionState",
    "FlareSolverrError",
    "InvalidTTLError",
    "RemoteError",
    "SessionDestroyedError",
    "TransportError",
    "Command",
    "Status",
]
