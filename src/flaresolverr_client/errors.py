"""
FlareSolverr client error types.

Every failure the library raises is a FlareSolverrError subclass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from flaresolverr_client.models.responses import ErrorResponse


class FlareSolverrError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class InvalidTTLError(FlareSolverrError, ValueError):
    """Raised for a negative or NaN session TTL, before any state exists."""

    def __init__(self, message: str = "TTL must be a positive number"):
        super().__init__("invalid_ttl", message)


class SessionDestroyedError(FlareSolverrError):
    def __init__(self, session_id: str):
        super().__init__("session_destroyed", "Session already destroyed", {"session": session_id})
        self.session_id = session_id


class RemoteError(FlareSolverrError):
    """The service answered with an error envelope."""

    def __init__(self, message: str, response: "ErrorResponse"):
        super().__init__("remote_error", message, response.model_dump(by_alias=True))
        self.response = response


class TransportError(FlareSolverrError):
    """No structured response was available (network failure, bad body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("transport_error", message)
        self.status_code = status_code
