from __future__ import annotations

from typing import Any

import httpx
import structlog

from panelbot import __version__
from panelbot.core.errors import FetchError

logger = structlog.get_logger()

DEFAULT_USER_AGENT = f"panelbot/{__version__}"


class BaseHTTPClient:
    """Base HTTP client: one attempt per call, transport failures become FetchError."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        """Override to provide custom headers."""
        return {"Accept": "application/json", "User-Agent": self._user_agent}

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}{path}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute a single HTTP request and return the raw response."""
        url = self._url(path)
        req_headers = self._headers()
        if headers:
            req_headers.update(headers)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=req_headers,
                )
        except httpx.HTTPError as exc:
            logger.warning("http_network_error", method=method, url=url, error=str(exc))
            raise FetchError(f"Request to {url} failed: {exc}", {"method": method}) from exc

    async def get_json(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute GET request and decode the JSON body, whatever the status."""
        response = await self._request("GET", path, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "http_unparsable_body",
                url=str(response.request.url),
                status=response.status_code,
            )
            raise FetchError(
                f"Unparsable response from {response.request.url}",
                {"status": response.status_code},
            ) from exc

    async def get_bytes(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> tuple[bytes, str]:
        """Execute GET request and return the body with its content type."""
        response = await self._request("GET", path, headers=headers)
        if response.status_code != 200:
            raise FetchError(
                f"GET {response.request.url} returned HTTP {response.status_code}",
                {"status": response.status_code},
            )
        content_type = response.headers.get("Content-Type", "application/octet-stream")
        return response.content, content_type

    async def post_json(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute POST request with a JSON body."""
        req_headers = {"Content-Type": "application/json"}
        if headers:
            req_headers.update(headers)
        return await self._request("POST", path, json=json, headers=req_headers)
