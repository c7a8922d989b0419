"""
Response envelopes for GET /, GET /health and POST /v1.

Timestamps are epoch milliseconds, as sent by the service.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from flaresolverr_client.models.common import Cookie, Status

SESSION_CREATED = "Session created successfully."
SESSION_EXISTS = "Session already exists."
SESSION_REMOVED = "The session has been removed."


def format_timestamp(ms: Optional[float]) -> str:
    """Render an epoch-milliseconds timestamp as a local calendar string.

    Values the platform cannot represent are returned as the raw number.
    """
    if ms is None:
        return "unknown"
    try:
        return datetime.fromtimestamp(ms / 1000).astimezone().strftime("%a %b %d %Y %H:%M:%S %Z")
    except (OverflowError, OSError, ValueError):
        return str(ms)


class IndexResponse(BaseModel):
    """GET / payload."""
    msg: str = ""
    version: str = ""
    user_agent: str = Field(default="", alias="userAgent")

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    status: Status = Status.OK


class V1ResponseBase(BaseModel):
    status: Status
    message: str = ""
    start_timestamp: Optional[int] = Field(default=None, alias="startTimestamp")
    end_timestamp: Optional[int] = Field(default=None, alias="endTimestamp")
    version: str = ""

    model_config = {"populate_by_name": True, "extra": "allow"}

    @property
    def ok(self) -> bool:
        return self.status == Status.OK


class ErrorResponse(V1ResponseBase):
    pass


class CreateSessionResponse(V1ResponseBase):
    session: str

    @property
    def is_new(self) -> bool:
        """False when the requested session id already existed server-side."""
        return self.message != SESSION_EXISTS


class ListSessionsResponse(V1ResponseBase):
    sessions: list[str] = []


class DestroySessionResponse(V1ResponseBase):
    pass


class Solution(BaseModel):
    """Navigation/challenge result. headers and response are absent for cookie-only requests."""
    url: str
    status: int
    headers: Optional[dict[str, Optional[str]]] = None
    response: Optional[str] = None
    cookies: list[Cookie] = []
    user_agent: str = Field(default="", alias="userAgent")

    model_config = {"populate_by_name": True, "extra": "allow"}


class RequestResponse(V1ResponseBase):
    """request.get / request.post success payload."""
    solution: Solution


V1Response = Union[
    CreateSessionResponse,
    ListSessionsResponse,
    DestroySessionResponse,
    RequestResponse,
    ErrorResponse,
]
