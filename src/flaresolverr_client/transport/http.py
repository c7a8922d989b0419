"""
HTTP transport for the FlareSolverr API.

Thin wrapper over httpx.AsyncClient. Non-2xx replies raise
httpx.HTTPStatusError, network failures raise httpx.HTTPError; error
translation is the dispatcher's job.
"""

from typing import Any, Optional

import httpx

DEFAULT_BASE_URL = "http://localhost:8191"
USER_AGENT = "flaresolverr-client/0.1.0"


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get(self, path: str) -> Any:
        resp = await self._client.get(path)
        resp.raise_for_status()
        return resp.json()

    async def post(self, path: str, body: Optional[dict[str, Any]] = None, timeout: Optional[float] = None) -> Any:
        if timeout is None:
            resp = await self._client.post(path, json=body)
        else:
            resp = await self._client.post(path, json=body, timeout=timeout)
        resp.raise_for_status()
        return resp.json()

    async def close(self) -> None:
        await self._client.aclose()
