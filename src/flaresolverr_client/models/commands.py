"""
POST /v1 commands and their request payloads.

Every command maps to exactly one request model and one response model.
The ``cmd`` tag itself is never part of a payload; the dispatcher adds it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field, field_serializer, field_validator

from flaresolverr_client.models.common import Cookie, Proxy
from flaresolverr_client.models.responses import (
    CreateSessionResponse,
    DestroySessionResponse,
    ListSessionsResponse,
    RequestResponse,
    V1ResponseBase,
)


class Command(str, Enum):
    CREATE_SESSION = "sessions.create"
    LIST_SESSIONS = "sessions.list"
    DESTROY_SESSION = "sessions.destroy"
    REQUEST_GET = "request.get"
    REQUEST_POST = "request.post"


class V1Request(BaseModel):
    max_timeout: Optional[int] = Field(default=None, alias="maxTimeout")

    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"max_timeout"})


class CreateSessionRequest(V1Request):
    session: Optional[str] = None  # generated server-side when omitted
    proxy: Optional[Proxy] = None


class ListSessionsRequest(V1Request):
    pass


class DestroySessionRequest(V1Request):
    session: str


class BrowserRequest(V1Request):
    url: str
    session: Optional[str] = None  # a temporary browser is used when omitted
    session_ttl_minutes: Optional[int] = None
    cookies: Optional[list[Cookie]] = None
    return_only_cookies: Optional[bool] = Field(default=None, alias="returnOnlyCookies")
    proxy: Optional[Proxy] = None


class GetRequest(BrowserRequest):
    pass


class PostField(BaseModel):
    name: str
    value: str


class PostRequest(BrowserRequest):
    post_data: list[PostField] = Field(alias="postData")

    @field_validator("post_data", mode="before")
    @classmethod
    def split_mapping(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return [{"name": k, "value": v} for k, v in value.items()]
        return value

    @field_serializer("post_data")
    def urlencode_fields(self, fields: list[PostField]) -> str:
        # the service only accepts an x-www-form-urlencoded string
        return urlencode([(f.name, f.value) for f in fields])


REQUEST_MODELS: dict[Command, type[V1Request]] = {
    Command.CREATE_SESSION: CreateSessionRequest,
    Command.LIST_SESSIONS: ListSessionsRequest,
    Command.DESTROY_SESSION: DestroySessionRequest,
    Command.REQUEST_GET: GetRequest,
    Command.REQUEST_POST: PostRequest,
}

RESPONSE_MODELS: dict[Command, type[V1ResponseBase]] = {
    Command.CREATE_SESSION: CreateSessionResponse,
    Command.LIST_SESSIONS: ListSessionsResponse,
    Command.DESTROY_SESSION: DestroySessionResponse,
    Command.REQUEST_GET: RequestResponse,
    Command.REQUEST_POST: RequestResponse,
}
