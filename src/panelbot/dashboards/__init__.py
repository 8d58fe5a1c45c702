"""Dashboard commands: parsing, panel selection, titles and URLs.

Pure functions over canonical dashboard models; no network I/O happens here.
"""

from panelbot.dashboards.models import (
    ById,
    ByName,
    DashboardDefinition,
    DashboardQuery,
    DashboardSummary,
    Delivered,
    Failed,
    Panel,
    PanelReport,
    PanelURLs,
    Row,
    SelectedPanel,
    TemplateVariable,
    TimeRange,
)
from panelbot.dashboards.parser import parse_command
from panelbot.dashboards.resolver import TemplateResolver
from panelbot.dashboards.selector import select_panels
from panelbot.dashboards.urls import build_link_url, build_panel_urls, build_render_url

__all__ = [
    # Models
    "ById",
    "ByName",
    "DashboardDefinition",
    "DashboardQuery",
    "DashboardSummary",
    "Delivered",
    "Failed",
    "Panel",
    "PanelReport",
    "PanelURLs",
    "Row",
    "SelectedPanel",
    "TemplateVariable",
    "TimeRange",
    # Pipeline steps
    "parse_command",
    "select_panels",
    "TemplateResolver",
    "build_link_url",
    "build_panel_urls",
    "build_render_url",
]
