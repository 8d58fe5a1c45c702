from __future__ import annotations

import structlog

from panelbot.clients.base import BaseHTTPClient
from panelbot.core.errors import DeliveryFailure

logger = structlog.get_logger()

ACCESS_ERROR = "Access Error"


class ImageProxyClient(BaseHTTPClient):
    """Client for the image proxy that republishes rendered panels."""

    def __init__(
        self,
        host: str,
        api_key: str | None = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(host, timeout=timeout)
        self._api_key = api_key

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def publish(self, render_url: str) -> str:
        """Ask the proxy to fetch ``render_url`` and return its public image URL.

        Raises:
            DeliveryFailure: on any non-200 answer or a missing ``pubImg`` field
        """
        response = await self.post_json("/grafana-images", json={"imageUrl": render_url})
        if response.status_code != 200:
            raise DeliveryFailure(
                ACCESS_ERROR,
                f"Image proxy returned HTTP {response.status_code}",
                {"status": response.status_code},
            )
        try:
            public_url = response.json().get("pubImg")
        except (ValueError, AttributeError):
            public_url = None
        if not public_url:
            raise DeliveryFailure(ACCESS_ERROR, "Image proxy response has no pubImg")
        return str(public_url)
