from __future__ import annotations

import structlog

from panelbot.clients.image_proxy import ACCESS_ERROR, ImageProxyClient
from panelbot.core.errors import DeliveryFailure, FetchError
from panelbot.dashboards.models import Delivered, DeliveryOutcome, Failed, PanelURLs

logger = structlog.get_logger()


class PassThroughStrategy:
    """Reply with the render URL itself; no extra I/O."""

    name = "passthrough"

    async def deliver(self, urls: PanelURLs) -> DeliveryOutcome:
        return Delivered(urls.render_url)


class ImageProxyStrategy:
    """Hand the render URL to the image proxy and reply with its public URL."""

    name = "image_proxy"

    def __init__(self, client: ImageProxyClient) -> None:
        self._client = client

    async def deliver(self, urls: PanelURLs) -> DeliveryOutcome:
        try:
            public_url = await self._client.publish(urls.render_url)
        except DeliveryFailure as exc:
            logger.warning("panel_delivery_failed", strategy=self.name, error=exc.message, **exc.details)
            return Failed(exc.reason, urls.link_url)
        except FetchError as exc:
            logger.warning("panel_delivery_failed", strategy=self.name, error=exc.message)
            return Failed(ACCESS_ERROR, urls.link_url)
        return Delivered(public_url)
