"""
Delivery strategy selection and dispatch.

The strategy is chosen once from settings, in precedence order:
1. S3 upload, when bucket and both keys are configured
2. Image proxy, when enabled
3. Pass-through of the render URL
"""

from __future__ import annotations

import structlog

from panelbot.clients.grafana import GrafanaClient
from panelbot.clients.image_proxy import ImageProxyClient
from panelbot.config import Settings
from panelbot.core.errors import ConfigurationError
from panelbot.dashboards.models import DeliveryOutcome, PanelURLs
from panelbot.delivery.base import DeliveryStrategy
from panelbot.delivery.s3 import S3Strategy
from panelbot.delivery.strategies import ImageProxyStrategy, PassThroughStrategy

logger = structlog.get_logger()


def select_strategy(settings: Settings, grafana: GrafanaClient) -> DeliveryStrategy:
    if settings.s3_enabled:
        return S3Strategy(
            grafana,
            bucket=settings.s3_bucket or "",
            access_key_id=settings.s3_access_key_id or "",
            secret_access_key=settings.s3_secret_access_key or "",
            prefix=settings.s3_prefix,
            region=settings.s3_region,
        )
    if settings.use_images_proxy:
        if not settings.images_host:
            raise ConfigurationError(
                "Image proxy enabled but no images host configured",
                {"setting": "PANELBOT_IMAGES_HOST"},
            )
        client = ImageProxyClient(
            settings.images_host,
            settings.images_api_key,
            timeout=settings.http_timeout,
        )
        return ImageProxyStrategy(client)
    return PassThroughStrategy()


class DeliveryDispatcher:
    """Runs every panel through the one strategy chosen at startup."""

    def __init__(self, strategy: DeliveryStrategy) -> None:
        self._strategy = strategy

    @classmethod
    def from_settings(cls, settings: Settings, grafana: GrafanaClient) -> "DeliveryDispatcher":
        dispatcher = cls(select_strategy(settings, grafana))
        logger.info("delivery_strategy_selected", strategy=dispatcher.strategy_name)
        return dispatcher

    @property
    def strategy_name(self) -> str:
        return self._strategy.name

    async def deliver(self, urls: PanelURLs) -> DeliveryOutcome:
        return await self._strategy.deliver(urls)
