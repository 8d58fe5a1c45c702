"""Render and link URLs for dashboard panels."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

from panelbot.dashboards.models import PanelURLs, TimeRange

RENDER_WIDTH = 1000
RENDER_HEIGHT = 500


def slug_path(slug: str) -> str:
    return quote(slug, safe="")


def variables_query(variables: Sequence[str]) -> str:
    # Raw key=value tokens are forwarded verbatim
    return "".join(f"&var-{token}" for token in variables)


def build_render_url(
    host: str,
    render_segment: str,
    slug: str,
    panel_id: int,
    time_range: TimeRange,
    variables: Sequence[str] = (),
) -> str:
    return (
        f"{host.rstrip('/')}/render/{render_segment}/db/{slug_path(slug)}/"
        f"?panelId={panel_id}&width={RENDER_WIDTH}&height={RENDER_HEIGHT}"
        f"&from={time_range.from_}&to={time_range.to}{variables_query(variables)}"
    )


def build_link_url(
    host: str,
    slug: str,
    panel_id: int,
    time_range: TimeRange,
    variables: Sequence[str] = (),
) -> str:
    return (
        f"{host.rstrip('/')}/dashboard/db/{slug_path(slug)}/"
        f"?panelId={panel_id}&fullscreen"
        f"&from={time_range.from_}&to={time_range.to}{variables_query(variables)}"
    )


def build_panel_urls(
    host: str,
    render_segment: str,
    slug: str,
    panel_id: int,
    time_range: TimeRange,
    variables: Sequence[str] = (),
) -> PanelURLs:
    return PanelURLs(
        render_url=build_render_url(host, render_segment, slug, panel_id, time_range, variables),
        link_url=build_link_url(host, slug, panel_id, time_range, variables),
    )
