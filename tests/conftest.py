"""Shared fixtures: an in-memory FlareSolverr served through httpx.MockTransport."""

import asyncio
import json
import uuid
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio

from flaresolverr_client import AsyncFlareSolverr

BASE_URL = "http://flaresolverr.test"
VERSION = "3.3.21"
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) Chrome/120.0.0.0"
START_MS = 1700000000000
END_MS = 1700000001500


def envelope(status: str = "ok", message: str = "", **extra: Any) -> dict[str, Any]:
    return {
        "status": status,
        "message": message,
        "startTimestamp": START_MS,
        "endTimestamp": END_MS,
        "version": VERSION,
        **extra,
    }


class FakeFlareSolverr:
    """Minimal FlareSolverr: keeps a session set and records every /v1 body."""

    def __init__(self) -> None:
        self.sessions: list[str] = []
        self.commands: list[dict[str, Any]] = []
        self.overrides: list[tuple[Optional[str], httpx.Response]] = []
        self.delays: dict[str, float] = {}

    def queue(self, response: httpx.Response, cmd: Optional[str] = None) -> None:
        """Answer the next /v1 call (or the next ``cmd`` call) with ``response``."""
        self.overrides.append((cmd, response))

    def queue_error(self, message: str, status_code: int = 500, cmd: Optional[str] = None, **extra: Any) -> None:
        self.queue(httpx.Response(status_code, json=envelope("error", message, **extra)), cmd)

    def _take_override(self, cmd: str) -> Optional[httpx.Response]:
        for i, (target, response) in enumerate(self.overrides):
            if target is None or target == cmd:
                del self.overrides[i]
                return response
        return None

    def sent(self, cmd: str) -> list[dict[str, Any]]:
        return [c for c in self.commands if c["cmd"] == cmd]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/":
            return httpx.Response(200, json={"msg": "FlareSolverr is ready!", "version": VERSION, "userAgent": USER_AGENT})
        if request.method == "GET" and request.url.path == "/health":
            return httpx.Response(200, json={"status": "ok"})

        body = json.loads(request.content)
        self.commands.append(body)
        cmd = body["cmd"]
        if self.delays.get(cmd):
            await asyncio.sleep(self.delays[cmd])
        override = self._take_override(cmd)
        if override is not None:
            return override
        return httpx.Response(200, json=self._reply(cmd, body))

    def _reply(self, cmd: str, body: dict[str, Any]) -> dict[str, Any]:
        if cmd == "sessions.create":
            sid = body.get("session") or str(uuid.uuid4())
            if sid in self.sessions:
                return envelope(message="Session already exists.", session=sid)
            self.sessions.append(sid)
            return envelope(message="Session created successfully.", session=sid)
        if cmd == "sessions.list":
            return envelope(sessions=list(self.sessions))
        if cmd == "sessions.destroy":
            if body["session"] not in self.sessions:
                return envelope("error", "This session does not exist.")
            self.sessions.remove(body["session"])
            return envelope(message="The session has been removed.")
        solution: dict[str, Any] = {
            "url": body["url"],
            "status": 200,
            "cookies": [{"name": "cf_clearance", "value": "abc", "domain": ".example.com", "httpOnly": True}],
            "userAgent": USER_AGENT,
        }
        if not body.get("returnOnlyCookies"):
            solution["headers"] = {"content-type": "text/html"}
            solution["response"] = "<html><body>ok</body></html>"
        return envelope(message="Challenge not detected!", solution=solution)


@pytest.fixture
def server() -> FakeFlareSolverr:
    return FakeFlareSolverr()


def make_client(server: FakeFlareSolverr, **kwargs: Any) -> AsyncFlareSolverr:
    return AsyncFlareSolverr(base_url=BASE_URL, transport=httpx.MockTransport(server.handle), **kwargs)


@pytest_asyncio.fixture
async def client(server: FakeFlareSolverr):
    c = make_client(server)
    yield c
    await c.close()


@pytest.fixture
def make_session(client: AsyncFlareSolverr, server: FakeFlareSolverr):
    """Register ``session_id`` server-side and wrap it."""
    def _make(session_id: str = "s1", ttl: Optional[float] = None):
        server.sessions.append(session_id)
        return client.session(session_id, ttl=ttl)
    return _make
