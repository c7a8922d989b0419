"""
AsyncFlareSolverr — main SDK client.
"""

from typing import Any, Literal, Mapping, Optional, Sequence, Union, overload

import httpx

from flaresolverr_client.dispatcher import DEFAULT_MAX_TIMEOUT, TIMEOUT_GRACE_S, CommandDispatcher, ensure_ok
from flaresolverr_client.models.commands import (
    Command,
    CreateSessionRequest,
    DestroySessionRequest,
    GetRequest,
    ListSessionsRequest,
    PostField,
    PostRequest,
)
from flaresolverr_client.models.responses import (
    CreateSessionResponse,
    DestroySessionResponse,
    ErrorResponse,
    HealthResponse,
    IndexResponse,
    ListSessionsResponse,
    RequestResponse,
)
from flaresolverr_client.session import CookieArg, ProxyArg, SessionManager, validate_ttl
from flaresolverr_client.transport.http import DEFAULT_BASE_URL, HttpClient


class AsyncFlareSolverr:
    """Async FlareSolverr client.

    ``max_timeout`` (ms) is sent with every command that does not set its own.
    ``transport`` replaces the httpx transport, e.g. with httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        max_timeout: int = DEFAULT_MAX_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http = HttpClient(base_url=base_url, timeout=max_timeout / 1000 + TIMEOUT_GRACE_S, transport=transport)
        self.dispatcher = CommandDispatcher(self.http, max_timeout=max_timeout)

    async def __aenter__(self) -> "AsyncFlareSolverr":
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        await self.close()

    @property
    def base_url(self) -> str:
        return self.http.base_url

    async def close(self) -> None:
        await self.http.close()

    async def index(self) -> IndexResponse:
        """GET / — version and user-agent."""
        return await self.dispatcher.index()

    async def health(self) -> HealthResponse:
        """GET /health"""
        return await self.dispatcher.health()

    @overload
    async def create_session(
        self, session: Optional[str] = ..., *, proxy: Optional[ProxyArg] = ...,
        ttl: None = ..., wrap: Literal[False] = ..., max_timeout: Optional[int] = ...,
    ) -> Union[CreateSessionResponse, ErrorResponse]: ...

    @overload
    async def create_session(
        self, session: Optional[str] = ..., *, proxy: Optional[ProxyArg] = ...,
        ttl: Optional[float] = ..., wrap: bool = ..., max_timeout: Optional[int] = ...,
    ) -> Union[CreateSessionResponse, ErrorResponse, SessionManager]: ...

    async def create_session(
        self,
        session: Optional[str] = None,
        *,
        proxy: Optional[ProxyArg] = None,
        ttl: Optional[float] = None,
        wrap: bool = False,
        max_timeout: Optional[int] = None,
    ) -> Union[CreateSessionResponse, ErrorResponse, SessionManager]:
        """Create a persistent browser session — POST /v1 (cmd: sessions.create).

        Returns a SessionManager when ``wrap`` is set or ``ttl`` (seconds) is
        truthy, the raw response otherwise. The TTL is checked before
        anything is sent.
        """
        validate_ttl(ttl)
        res = await self.dispatcher.execute(
            Command.CREATE_SESSION,
            CreateSessionRequest(session=session, proxy=proxy, max_timeout=max_timeout),
        )
        if not (wrap or ttl):
            return res
        created = ensure_ok(res)
        return SessionManager(created.session, self.dispatcher, ttl=ttl, created=created)

    def session(self, session_id: str, ttl: Optional[float] = None) -> SessionManager:
        """Wrap an already existing session id."""
        return SessionManager(session_id, self.dispatcher, ttl=ttl)

    async def list_sessions(self, max_timeout: Optional[int] = None) -> Union[ListSessionsResponse, ErrorResponse]:
        """List active session ids — POST /v1 (cmd: sessions.list)."""
        return await self.dispatcher.execute(Command.LIST_SESSIONS, ListSessionsRequest(max_timeout=max_timeout))

    async def destroy_session(
        self, session: str, max_timeout: Optional[int] = None,
    ) -> Union[DestroySessionResponse, ErrorResponse]:
        """Destroy a session by id — POST /v1 (cmd: sessions.destroy)."""
        return await self.dispatcher.execute(
            Command.DESTROY_SESSION, DestroySessionRequest(session=session, max_timeout=max_timeout),
        )

    async def request_get(
        self,
        url: str,
        *,
        session: Optional[str] = None,
        session_ttl_minutes: Optional[int] = None,
        cookies: Optional[Sequence[CookieArg]] = None,
        return_only_cookies: Optional[bool] = None,
        proxy: Optional[ProxyArg] = None,
        max_timeout: Optional[int] = None,
    ) -> Union[RequestResponse, ErrorResponse]:
        """Load ``url`` in the browser — POST /v1 (cmd: request.get)."""
        return await self.dispatcher.execute(Command.REQUEST_GET, GetRequest(
            url=url,
            session=session,
            session_ttl_minutes=session_ttl_minutes,
            cookies=cookies,
            return_only_cookies=return_only_cookies,
            proxy=proxy,
            max_timeout=max_timeout,
        ))

    async def request_post(
        self,
        url: str,
        post_data: Union[Mapping[str, str], Sequence[Union[PostField, Mapping[str, str]]]],
        *,
        session: Optional[str] = None,
        session_ttl_minutes: Optional[int] = None,
        cookies: Optional[Sequence[CookieArg]] = None,
        return_only_cookies: Optional[bool] = None,
        proxy: Optional[ProxyArg] = None,
        max_timeout: Optional[int] = None,
    ) -> Union[RequestResponse, ErrorResponse]:
        """POST form fields to ``url`` in the browser — POST /v1 (cmd: request.post)."""
        return await self.dispatcher.execute(Command.REQUEST_POST, PostRequest(
            url=url,
            post_data=post_data,
            session=session,
            session_ttl_minutes=session_ttl_minutes,
            cookies=cookies,
            return_only_cookies=return_only_cookies,
            proxy=proxy,
            max_timeout=max_timeout,
        ))
