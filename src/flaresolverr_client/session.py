"""
Session lifecycle manager — one server-side browser session seen from the client.

A SessionManager injects its session id into every scoped command and
optionally enforces an idle TTL (seconds). The idle timer is debounced:
every successful scoped call pushes the deadline to ``now + ttl``. When it
fires, the session is marked destroyed locally, destroy hooks run in
registration order, and a best-effort ``sessions.destroy`` is sent in the
background.

The timer is an asyncio loop callback, so expiry and foreground calls never
interleave inside their synchronous sections. A reply that lands after
expiry does not re-arm the timer.
"""

from __future__ import annotations

import asyncio
import logging
import math
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from flaresolverr_client.dispatcher import CommandDispatcher, ensure_ok
from flaresolverr_client.errors import FlareSolverrError, InvalidTTLError, SessionDestroyedError
from flaresolverr_client.models.commands import (
    BrowserRequest,
    Command,
    DestroySessionRequest,
    GetRequest,
    PostField,
    PostRequest,
)
from flaresolverr_client.models.common import Cookie, Proxy
from flaresolverr_client.models.responses import (
    CreateSessionResponse,
    DestroySessionResponse,
    RequestResponse,
)

logger = logging.getLogger(__name__)

DestroyHook = Callable[[], Any]
CookieArg = Union[Cookie, Mapping[str, Any]]
ProxyArg = Union[Proxy, Mapping[str, Any]]


class SessionState(str, Enum):
    ACTIVE = "active"
    DESTROYED = "destroyed"


def validate_ttl(ttl: Optional[float]) -> Optional[float]:
    """Return the idle timeout in seconds, or None when the session never expires.

    Falsy, 0 and +inf disable expiry. Negative values and NaN raise InvalidTTLError.
    """
    if not ttl:
        return None
    if math.isnan(ttl) or ttl < 0:
        raise InvalidTTLError()
    if math.isinf(ttl):
        return None
    return float(ttl)


class SessionManager:
    """Client-side handle for one FlareSolverr browser session.

    ``ttl`` is in seconds. Arming a timer needs a running event loop, so a
    manager with a finite TTL must be created from async code.
    """

    def __init__(
        self,
        session_id: str,
        dispatcher: CommandDispatcher,
        ttl: Optional[float] = None,
        created: Optional[CreateSessionResponse] = None,
    ):
        self._idle_timeout = validate_ttl(ttl)
        self._session_id = session_id
        self._dispatcher = dispatcher
        self._ttl = ttl
        self._state = SessionState.ACTIVE
        self._hooks: list[DestroyHook] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self._deadline: Optional[float] = None
        self._expiry_task: Optional[asyncio.Task[None]] = None
        self.created = created
        if self._idle_timeout is not None:
            self._reset_timer()

    def __repr__(self) -> str:
        return f"SessionManager(session_id={self._session_id!r}, state={self._state.value!r})"

    async def __aenter__(self) -> "SessionManager":
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        if not self.is_destroyed:
            await self.destroy()

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def ttl(self) -> Optional[float]:
        return self._ttl

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_destroyed(self) -> bool:
        return self._state is SessionState.DESTROYED

    # -- destroy hooks -------------------------------------------------

    def add_destroy_hook(self, hook: DestroyHook) -> Callable[[], None]:
        """Register a no-argument callback run once on destroy. Returns a remover.

        Registering the same object twice is a no-op. On an already destroyed
        session the hook runs immediately instead.
        """
        if self.is_destroyed:
            self._run_hook(hook)
            return lambda: None
        if not any(h is hook for h in self._hooks):
            self._hooks.append(hook)

        def remove() -> None:
            self.remove_destroy_hook(hook)
        return remove

    def remove_destroy_hook(self, hook: DestroyHook) -> None:
        """Unregister by identity; unknown hooks are ignored."""
        self._hooks = [h for h in self._hooks if h is not hook]

    # -- scoped commands -----------------------------------------------

    async def destroy(self, max_timeout: Optional[int] = None) -> DestroySessionResponse:
        """Destroy this session — POST /v1 (cmd: sessions.destroy).

        On failure the session stays active, its idle deadline is restored
        (unless a request made meanwhile armed a newer one) and the error
        propagates, so the call can be retried.
        """
        self._ensure_active()
        deadline = self._deadline
        self._cancel_timer()
        try:
            res = ensure_ok(await self._dispatcher.execute(
                Command.DESTROY_SESSION,
                DestroySessionRequest(session=self._session_id, max_timeout=max_timeout),
            ))
        except FlareSolverrError:
            if not self.is_destroyed and deadline is not None and self._timer is None:
                self._schedule(deadline)
            raise
        self._mark_destroyed()
        return res

    async def request_get(
        self,
        url: str,
        *,
        cookies: Optional[Sequence[CookieArg]] = None,
        return_only_cookies: Optional[bool] = None,
        proxy: Optional[ProxyArg] = None,
        session_ttl_minutes: Optional[int] = None,
        max_timeout: Optional[int] = None,
    ) -> RequestResponse:
        """GET ``url`` through this session's browser — POST /v1 (cmd: request.get)."""
        self._ensure_active()
        request = GetRequest(
            url=url,
            session=self._session_id,
            session_ttl_minutes=self._keepalive_minutes(session_ttl_minutes),
            cookies=cookies,
            return_only_cookies=return_only_cookies,
            proxy=proxy,
            max_timeout=max_timeout,
        )
        return await self._send(Command.REQUEST_GET, request)

    async def request_post(
        self,
        url: str,
        post_data: Union[Mapping[str, str], Sequence[Union[PostField, Mapping[str, str]]]],
        *,
        cookies: Optional[Sequence[CookieArg]] = None,
        return_only_cookies: Optional[bool] = None,
        proxy: Optional[ProxyArg] = None,
        session_ttl_minutes: Optional[int] = None,
        max_timeout: Optional[int] = None,
    ) -> RequestResponse:
        """POST form fields to ``url`` through this session's browser — POST /v1 (cmd: request.post)."""
        self._ensure_active()
        request = PostRequest(
            url=url,
            post_data=post_data,
            session=self._session_id,
            session_ttl_minutes=self._keepalive_minutes(session_ttl_minutes),
            cookies=cookies,
            return_only_cookies=return_only_cookies,
            proxy=proxy,
            max_timeout=max_timeout,
        )
        return await self._send(Command.REQUEST_POST, request)

    async def _send(self, cmd: Command, request: BrowserRequest) -> RequestResponse:
        res = ensure_ok(await self._dispatcher.execute(cmd, request))  # type: ignore[call-overload]
        # expiry may have fired while the request was in flight
        if not self.is_destroyed and self._idle_timeout is not None:
            self._reset_timer()
        return res

    def _keepalive_minutes(self, explicit: Optional[int]) -> Optional[int]:
        if explicit is not None or self._idle_timeout is None:
            return explicit
        return math.ceil(self._idle_timeout / 60)

    def _ensure_active(self) -> None:
        if self.is_destroyed:
            raise SessionDestroyedError(self._session_id)

    # -- idle timer ----------------------------------------------------

    def _reset_timer(self) -> None:
        if self._idle_timeout is None:
            return
        self._schedule(asyncio.get_running_loop().time() + self._idle_timeout)

    def _schedule(self, deadline: float) -> None:
        self._cancel_timer()
        self._deadline = deadline
        self._timer = asyncio.get_running_loop().call_at(deadline, self._on_idle)
        logger.debug("Session %s idle timer armed (%.3fs)", self._session_id, self._idle_timeout)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_idle(self) -> None:
        self._timer = None
        if self.is_destroyed:
            return
        logger.debug("Session %s idle for %ss, expiring", self._session_id, self._idle_timeout)
        self._mark_destroyed()
        self._expiry_task = asyncio.get_running_loop().create_task(self._destroy_expired())

    async def _destroy_expired(self) -> None:
        try:
            ensure_ok(await self._dispatcher.execute(
                Command.DESTROY_SESSION, DestroySessionRequest(session=self._session_id),
            ))
        except Exception as e:
            logger.warning("Failed to destroy expired session %s: %s", self._session_id, e)

    # -- state transition ----------------------------------------------

    def _mark_destroyed(self) -> None:
        if self.is_destroyed:
            return
        self._state = SessionState.DESTROYED
        self._cancel_timer()
        self._deadline = None
        hooks, self._hooks = self._hooks, []
        for hook in hooks:
            self._run_hook(hook)

    def _run_hook(self, hook: DestroyHook) -> None:
        try:
            hook()
        except Exception:
            logger.exception("Destroy hook %r for session %s failed", hook, self._session_id)
