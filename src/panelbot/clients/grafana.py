"""
Grafana HTTP API client.

Fetches dashboard definitions and listings and normalizes the historical
JSON shapes into the canonical models in ``panelbot.dashboards.models``.
Nothing downstream of this module branches on the schema version.
"""

from __future__ import annotations

from typing import Any

import structlog

from panelbot.clients.base import BaseHTTPClient
from panelbot.core.errors import DashboardServiceError, FetchError
from panelbot.dashboards.models import (
    RENDER_SEGMENT_CURRENT,
    RENDER_SEGMENT_LEGACY,
    DashboardDefinition,
    DashboardSummary,
    Panel,
    Row,
    TemplateVariable,
)
from panelbot.dashboards.urls import slug_path

logger = structlog.get_logger()


def _raise_for_service_message(payload: Any) -> None:
    if isinstance(payload, dict) and "message" in payload:
        raise DashboardServiceError(str(payload["message"]))


def _unexpected(what: str, value: Any) -> FetchError:
    return FetchError(f"Unexpected dashboard payload: {what}", {"type": type(value).__name__})


def _current_value(variable: dict[str, Any]) -> str:
    current = variable.get("current")
    if not isinstance(current, dict):
        return ""
    value = current.get("text")
    if value is None:
        value = current.get("value")
    if isinstance(value, list):
        return "+".join(str(v) for v in value)
    return "" if value is None else str(value)


def _parse_panel(raw: dict[str, Any]) -> Panel:
    try:
        panel_id = int(raw.get("id") or 0)
    except (TypeError, ValueError):
        panel_id = 0
    return Panel(id=panel_id, title=str(raw.get("title") or ""))


def _parse_row(row: dict[str, Any]) -> Row:
    raw_panels = row.get("panels") or []
    if not isinstance(raw_panels, list):
        raise _unexpected("panels", raw_panels)
    # Non-object panel entries are skipped and take no ordinal
    return Row(panels=tuple(_parse_panel(p) for p in raw_panels if isinstance(p, dict)))


def _parse_rows(model: dict[str, Any]) -> tuple[Row, ...]:
    raw_rows = model.get("rows")
    if not raw_rows and model.get("panels"):
        # Flat panel layout: treat the whole dashboard as one row
        raw_rows = [{"panels": model["panels"]}]
    raw_rows = raw_rows or []
    if not isinstance(raw_rows, list):
        raise _unexpected("rows", raw_rows)
    return tuple(_parse_row(row) for row in raw_rows if isinstance(row, dict))


def _parse_templating(model: dict[str, Any]) -> tuple[TemplateVariable, ...]:
    templating = model.get("templating") or []
    if isinstance(templating, dict):
        templating = templating.get("list") or []
    if not isinstance(templating, list):
        raise _unexpected("templating", templating)
    return tuple(
        TemplateVariable(name=str(var["name"]), current_value=_current_value(var))
        for var in templating
        if isinstance(var, dict) and var.get("name")
    )


def normalize_dashboard(payload: Any) -> DashboardDefinition:
    """Build the canonical definition from either dashboard JSON shape.

    Entries that are not JSON objects are skipped; containers of the wrong
    type reject the whole payload.

    Raises:
        DashboardServiceError: if the payload carries a ``message`` field
        FetchError: if the payload is not a dashboard object
    """
    _raise_for_service_message(payload)
    if not isinstance(payload, dict):
        raise _unexpected("root", payload)

    if "dashboard" in payload:
        model = payload["dashboard"] or {}
        render_segment = RENDER_SEGMENT_CURRENT
    else:
        model = payload.get("model") or {}
        render_segment = RENDER_SEGMENT_LEGACY
    if not isinstance(model, dict):
        raise _unexpected("model", model)

    return DashboardDefinition(
        rows=_parse_rows(model),
        templating=_parse_templating(model),
        render_segment=render_segment,
    )


def _summary_slug(entry: dict[str, Any]) -> str:
    uri = entry.get("uri")
    if isinstance(uri, str) and uri:
        return uri[len("db/"):] if uri.startswith("db/") else uri
    return str(entry.get("slug") or entry.get("uid") or "")


def _summary_tags(entry: dict[str, Any]) -> tuple[str, ...]:
    tags = entry.get("tags")
    return tuple(str(t) for t in tags) if isinstance(tags, list) else ()


def normalize_search(payload: Any) -> list[DashboardSummary]:
    """Normalize a search response, bare list or ``{"dashboards": [...]}``."""
    _raise_for_service_message(payload)
    if isinstance(payload, dict):
        payload = payload.get("dashboards") or []
    if not isinstance(payload, list):
        raise FetchError("Unexpected search payload", {"type": type(payload).__name__})

    return [
        DashboardSummary(
            slug=_summary_slug(entry),
            title=str(entry.get("title") or ""),
            tags=_summary_tags(entry),
        )
        for entry in payload
        if isinstance(entry, dict) and entry.get("type") != "dash-folder"
    ]


class GrafanaClient(BaseHTTPClient):
    """Read-only Grafana API client."""

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

    async def fetch_dashboard(self, slug: str) -> DashboardDefinition:
        payload = await self.get_json(f"/api/dashboards/db/{slug_path(slug)}")
        definition = normalize_dashboard(payload)
        logger.info(
            "dashboard_fetched",
            slug=slug,
            rows=len(definition.rows),
            panels=definition.panel_count,
            render_segment=definition.render_segment,
        )
        return definition

    async def search_dashboards(
        self,
        query: str | None = None,
        tag: str | None = None,
    ) -> list[DashboardSummary]:
        params: dict[str, Any] = {}
        if query:
            params["query"] = query
        if tag:
            params["tag"] = tag
        payload = await self.get_json("/api/search", params=params or None)
        return normalize_search(payload)

    async def list_dashboards(self, tag: str | None = None) -> list[DashboardSummary]:
        return await self.search_dashboards(tag=tag)

    async def fetch_image(self, render_url: str) -> tuple[bytes, str]:
        """Download a rendered panel image (authenticated like API calls)."""
        return await self.get_bytes(render_url, headers={"Accept": "image/png"})
