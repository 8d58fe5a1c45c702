"""Dashboard data models.

Typed views over Grafana dashboard JSON, command queries and delivery
outcomes. All models are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

DEFAULT_TIME_FROM = "now-6h"
DEFAULT_TIME_TO = "now"

# Render API path segments, keyed by the dashboard JSON shape they belong to.
RENDER_SEGMENT_CURRENT = "dashboard-solo"
RENDER_SEGMENT_LEGACY = "dashboard/solo"


@dataclass(frozen=True)
class ById:
    """Select the panel at a 1-based traversal ordinal."""

    ordinal: int


@dataclass(frozen=True)
class ByName:
    """Select panels whose title contains ``text`` (lower-cased)."""

    text: str


Selector = Union[None, ById, ByName]


@dataclass(frozen=True)
class TimeRange:
    from_: str = DEFAULT_TIME_FROM
    to: str = DEFAULT_TIME_TO


@dataclass(frozen=True)
class DashboardQuery:
    """A parsed ``db`` command."""

    slug: str
    selector: Selector = None
    time_range: TimeRange = field(default_factory=TimeRange)
    variables: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Panel:
    id: int
    title: str


@dataclass(frozen=True)
class Row:
    panels: Tuple[Panel, ...] = ()


@dataclass(frozen=True)
class TemplateVariable:
    name: str
    current_value: str


@dataclass(frozen=True)
class DashboardDefinition:
    """Canonical dashboard view, independent of the JSON schema it came from."""

    rows: Tuple[Row, ...] = ()
    templating: Tuple[TemplateVariable, ...] = ()
    render_segment: str = RENDER_SEGMENT_CURRENT

    @property
    def panel_count(self) -> int:
        return sum(len(row.panels) for row in self.rows)


@dataclass(frozen=True)
class DashboardSummary:
    """One entry of a dashboard listing."""

    slug: str
    title: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SelectedPanel:
    ordinal: int
    panel: Panel


SelectionResult = Tuple[SelectedPanel, ...]


@dataclass(frozen=True)
class PanelURLs:
    render_url: str
    link_url: str


@dataclass(frozen=True)
class Delivered:
    display_url: str


@dataclass(frozen=True)
class Failed:
    reason: str
    fallback_link: str


DeliveryOutcome = Union[Delivered, Failed]


@dataclass(frozen=True)
class PanelReport:
    """Delivery result for one selected panel, ready to send as a reply."""

    ordinal: int
    title: str
    urls: PanelURLs
    outcome: DeliveryOutcome

    @property
    def delivered(self) -> bool:
        return isinstance(self.outcome, Delivered)

    def to_message(self) -> str:
        if isinstance(self.outcome, Delivered):
            return f"{self.title}: {self.outcome.display_url} - {self.urls.link_url}"
        return f"{self.title} - [{self.outcome.reason}] - {self.outcome.fallback_link}"
