"""Upload rendered panels to S3 and reply with their public URL."""

from __future__ import annotations

import secrets
from typing import Callable

import aioboto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from panelbot.clients.grafana import GrafanaClient
from panelbot.core.errors import FetchError
from panelbot.dashboards.models import Delivered, DeliveryOutcome, Failed, PanelURLs

logger = structlog.get_logger()

UPLOAD_ERROR = "Upload Error"
DEFAULT_PREFIX = "grafana"
DEFAULT_REGIONS = {"us-east-1", "us-standard"}


def random_key(prefix: str | None = None) -> str:
    """``<prefix>/<40 hex chars>.png``; uniqueness is probabilistic."""
    return f"{prefix or DEFAULT_PREFIX}/{secrets.token_hex(20)}.png"


def public_url(bucket: str, key: str, region: str | None = None) -> str:
    if not region or region in DEFAULT_REGIONS:
        return f"https://{bucket}.s3.amazonaws.com/{key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


class S3Strategy:
    name = "s3"

    def __init__(
        self,
        grafana: GrafanaClient,
        *,
        bucket: str,
        access_key_id: str,
        secret_access_key: str,
        prefix: str | None = None,
        region: str = "us-east-1",
        key_factory: Callable[[str | None], str] = random_key,
    ) -> None:
        self._grafana = grafana
        self._bucket = bucket
        self._prefix = prefix
        self._region = region
        self._key_factory = key_factory
        self._session = aioboto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name="us-east-1" if region in DEFAULT_REGIONS else region,
        )

    async def deliver(self, urls: PanelURLs) -> DeliveryOutcome:
        try:
            body, content_type = await self._grafana.fetch_image(urls.render_url)
        except FetchError as exc:
            logger.warning("panel_image_fetch_failed", url=urls.render_url, error=exc.message)
            return Failed(UPLOAD_ERROR, urls.link_url)

        key = self._key_factory(self._prefix)
        try:
            async with self._session.client("s3") as client:
                response = await client.put_object(
                    Bucket=self._bucket,
                    Key=key,
                    Body=body,
                    ContentLength=len(body),
                    ContentType=content_type,
                    ACL="public-read",
                )
        except (BotoCoreError, ClientError) as exc:
            logger.warning("panel_upload_failed", bucket=self._bucket, key=key, error=str(exc))
            return Failed(UPLOAD_ERROR, urls.link_url)

        status = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status != 200:
            logger.warning("panel_upload_failed", bucket=self._bucket, key=key, status=status)
            return Failed(UPLOAD_ERROR, urls.link_url)

        logger.info("panel_uploaded", bucket=self._bucket, key=key, bytes=len(body))
        return Delivered(public_url(self._bucket, key, self._region))
