"""
Integration tests against a real FlareSolverr instance.

Requires environment variables:
  FLARESOLVERR_INTEGRATION  — set to anything to enable
  FLARESOLVERR_URL          — (optional) defaults to http://localhost:8191

Run: FLARESOLVERR_INTEGRATION=1 pytest tests/integration/ -v
"""

import asyncio
import os
import uuid

import pytest

from flaresolverr_client import AsyncFlareSolverr, SessionDestroyedError, SessionManager

SKIP = not os.environ.get("FLARESOLVERR_INTEGRATION")
BASE_URL = os.environ.get("FLARESOLVERR_URL", "http://localhost:8191")
TARGET_URL = os.environ.get("FLARESOLVERR_TARGET_URL", "https://example.com")

pytestmark = pytest.mark.skipif(SKIP, reason="FLARESOLVERR_INTEGRATION not set")


def make_client() -> AsyncFlareSolverr:
    return AsyncFlareSolverr(base_url=BASE_URL)


class TestStatus:

    @pytest.mark.asyncio
    async def test_index_and_health(self):
        async with make_client() as client:
            info = await client.index()
            assert info.version
            assert info.user_agent
            health = await client.health()
            assert health.status == "ok"


class TestSessionLifecycle:

    @pytest.mark.asyncio
    async def test_create_list_request_destroy(self):
        async with make_client() as client:
            sid = f"it-{uuid.uuid4().hex[:8]}"
            session = await client.create_session(sid, wrap=True)
            assert isinstance(session, SessionManager)
            assert session.created.is_new

            listed = await client.list_sessions()
            assert sid in listed.sessions

            res = await session.request_get(TARGET_URL)
            assert res.solution.status == 200
            assert res.solution.user_agent

            destroyed = await session.destroy()
            assert destroyed.message == "The session has been removed."
            with pytest.raises(SessionDestroyedError):
                await session.request_get(TARGET_URL)

    @pytest.mark.asyncio
    async def test_idle_ttl_destroys_remote_session(self):
        async with make_client() as client:
            session = await client.create_session(ttl=1)
            await asyncio.sleep(1.5)
            assert session.is_destroyed
            await session._expiry_task
            listed = await client.list_sessions()
            assert session.session_id not in listed.sessions
