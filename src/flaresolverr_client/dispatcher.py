"""
Command dispatcher — one request type over POST /v1.

``execute`` sends ``{"cmd": ..., "maxTimeout": ..., **payload}`` and parses
the reply into the command's response model. Every failure surfaces as a
FlareSolverrError:

- HTTP error carrying an error envelope -> RemoteError (with timestamps
  and version in the message)
- anything else (network, non-JSON body, bad envelope) -> TransportError

No retries; one attempt per call.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping, Optional, TypeVar, Union, overload

import httpx
from pydantic import BaseModel, ValidationError

from flaresolverr_client.errors import FlareSolverrError, RemoteError, TransportError
from flaresolverr_client.models.commands import (
    REQUEST_MODELS,
    RESPONSE_MODELS,
    Command,
    CreateSessionRequest,
    DestroySessionRequest,
    GetRequest,
    ListSessionsRequest,
    PostRequest,
    V1Request,
)
from flaresolverr_client.models.common import Status
from flaresolverr_client.models.responses import (
    CreateSessionResponse,
    DestroySessionResponse,
    ErrorResponse,
    HealthResponse,
    IndexResponse,
    ListSessionsResponse,
    RequestResponse,
    V1Response,
    format_timestamp,
)
from flaresolverr_client.transport.http import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_MAX_TIMEOUT = 60000  # ms
# Extra HTTP read time on top of maxTimeout so the service times out first.
TIMEOUT_GRACE_S = 10.0
ERROR_PREFIX = "[FlareSolverr Error]"
# httpx raises RuntimeError when the client has already been closed.
TRANSPORT_ERRORS = (httpx.HTTPError, ValueError, RuntimeError)

M = TypeVar("M", bound=BaseModel)
Payload = Union[V1Request, Mapping[str, Any], None]


def format_remote_error(envelope: ErrorResponse) -> str:
    return (
        f"{ERROR_PREFIX} {envelope.status.value}: {envelope.message or 'Unknown error'}\n"
        f"-> Start at: {format_timestamp(envelope.start_timestamp)}\n"
        f"-> End at: {format_timestamp(envelope.end_timestamp)}\n"
        f"-> Version: {envelope.version}"
    )


def translate_error(error: Exception) -> FlareSolverrError:
    """Normalize a transport-level failure into RemoteError or TransportError."""
    if isinstance(error, httpx.HTTPStatusError):
        resp = error.response
        try:
            envelope = ErrorResponse.model_validate(resp.json())
        except (ValueError, ValidationError):
            return TransportError(
                f"{ERROR_PREFIX} HTTP {resp.status_code}: {resp.text[:200] or 'Unknown error'}",
                status_code=resp.status_code,
            )
        return RemoteError(format_remote_error(envelope), envelope)
    return TransportError(f"{ERROR_PREFIX} {str(error) or type(error).__name__}")


def ensure_ok(response: Union[M, ErrorResponse]) -> M:
    """Raise RemoteError for an error envelope that arrived on HTTP success."""
    if isinstance(response, ErrorResponse):
        raise RemoteError(format_remote_error(response), response)
    return response


class CommandDispatcher:
    def __init__(self, http: HttpClient, max_timeout: int = DEFAULT_MAX_TIMEOUT):
        self._http = http
        self.max_timeout = max_timeout

    @overload
    async def execute(
        self, cmd: Literal[Command.CREATE_SESSION],
        payload: Union[CreateSessionRequest, Mapping[str, Any], None] = ..., max_timeout: Optional[int] = ...,
    ) -> Union[CreateSessionResponse, ErrorResponse]: ...

    @overload
    async def execute(
        self, cmd: Literal[Command.LIST_SESSIONS],
        payload: Union[ListSessionsRequest, Mapping[str, Any], None] = ..., max_timeout: Optional[int] = ...,
    ) -> Union[ListSessionsResponse, ErrorResponse]: ...

    @overload
    async def execute(
        self, cmd: Literal[Command.DESTROY_SESSION],
        payload: Union[DestroySessionRequest, Mapping[str, Any]], max_timeout: Optional[int] = ...,
    ) -> Union[DestroySessionResponse, ErrorResponse]: ...

    @overload
    async def execute(
        self, cmd: Literal[Command.REQUEST_GET],
        payload: Union[GetRequest, Mapping[str, Any]], max_timeout: Optional[int] = ...,
    ) -> Union[RequestResponse, ErrorResponse]: ...

    @overload
    async def execute(
        self, cmd: Literal[Command.REQUEST_POST],
        payload: Union[PostRequest, Mapping[str, Any]], max_timeout: Optional[int] = ...,
    ) -> Union[RequestResponse, ErrorResponse]: ...

    async def execute(self, cmd: Command, payload: Payload = None, max_timeout: Optional[int] = None) -> V1Response:
        """Send one command. An error envelope on HTTP success is returned as ErrorResponse."""
        cmd = Command(cmd)
        request = self._coerce(cmd, payload)
        effective = next(t for t in (request.max_timeout, max_timeout, self.max_timeout) if t is not None)
        body = {"cmd": cmd.value, "maxTimeout": effective, **request.to_wire()}

        logger.debug("Sending %s (maxTimeout=%sms)", cmd.value, effective)
        try:
            data = await self._http.post("/v1", body, timeout=effective / 1000 + TIMEOUT_GRACE_S)
        except TRANSPORT_ERRORS as e:
            raise translate_error(e) from e

        if isinstance(data, dict) and data.get("status") == Status.ERROR.value:
            return self._validate(ErrorResponse, data)
        return self._validate(RESPONSE_MODELS[cmd], data)  # type: ignore[return-value]

    async def index(self) -> IndexResponse:
        """GET / — version and browser user-agent."""
        try:
            data = await self._http.get("/")
        except TRANSPORT_ERRORS as e:
            raise translate_error(e) from e
        return self._validate(IndexResponse, data)

    async def health(self) -> HealthResponse:
        """GET /health"""
        try:
            data = await self._http.get("/health")
        except TRANSPORT_ERRORS as e:
            raise translate_error(e) from e
        return self._validate(HealthResponse, data)

    @staticmethod
    def _coerce(cmd: Command, payload: Payload) -> V1Request:
        expected = REQUEST_MODELS[cmd]
        if isinstance(payload, V1Request):
            if not isinstance(payload, expected):
                raise TypeError(f"{cmd.value} expects {expected.__name__}, got {type(payload).__name__}")
            return payload
        return expected.model_validate(dict(payload or {}))

    @staticmethod
    def _validate(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"{ERROR_PREFIX} Unexpected response shape for {model.__name__}: {e}") from e
