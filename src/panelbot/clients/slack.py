from __future__ import annotations

import structlog

from panelbot.clients.base import BaseHTTPClient
from panelbot.core.errors import FetchError

logger = structlog.get_logger()


class SlackNotifier(BaseHTTPClient):
    """Slack Web API client used to post command replies to a channel."""

    def __init__(
        self,
        token: str | None,
        *,
        base_url: str = "https://slack.com/api",
        timeout: float = 30.0,
    ) -> None:
        super().__init__(base_url, timeout=timeout)
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["Content-Type"] = "application/json; charset=utf-8"
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def post_message(self, channel: str, text: str) -> None:
        if not self._token:
            logger.warning("slack_token_missing", channel=channel)
            return
        response = await self.post_json("/chat.postMessage", json={"channel": channel, "text": text})
        try:
            body = response.json() if response.content else {}
        except ValueError as exc:
            raise FetchError(
                "Unparsable response from Slack",
                {"channel": channel, "status": response.status_code},
            ) from exc
        if not isinstance(body, dict):
            body = {}
        if response.status_code != 200 or not body.get("ok", False):
            raise FetchError(
                "Slack rejected message",
                {"channel": channel, "error": body.get("error", response.status_code)},
            )
