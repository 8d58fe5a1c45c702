"""Flatten dashboard rows into numbered panels and filter them."""

from __future__ import annotations

from typing import Iterator

from panelbot.dashboards.models import (
    ById,
    ByName,
    DashboardDefinition,
    SelectedPanel,
    SelectionResult,
    Selector,
)


def iter_numbered_panels(definition: DashboardDefinition) -> Iterator[SelectedPanel]:
    """Yield panels in row order with ordinals that continue across rows."""
    ordinal = 0
    for row in definition.rows:
        for panel in row.panels:
            ordinal += 1
            yield SelectedPanel(ordinal=ordinal, panel=panel)


def matches(selector: Selector, item: SelectedPanel) -> bool:
    if selector is None:
        return True
    if isinstance(selector, ById):
        # Ordinal, not the panel's own id field
        return item.ordinal == selector.ordinal
    if isinstance(selector, ByName):
        return selector.text.lower() in item.panel.title.lower()
    raise TypeError(f"Unknown selector: {selector!r}")


def select_panels(definition: DashboardDefinition, selector: Selector) -> SelectionResult:
    return tuple(item for item in iter_numbered_panels(definition) if matches(selector, item))
