from __future__ import annotations

from typing import Protocol

from panelbot.dashboards.models import DeliveryOutcome, PanelURLs


class DeliveryStrategy(Protocol):
    """Makes one rendered panel available to the requester.

    Implementations report per-panel failures as a ``Failed`` outcome instead
    of raising, so one panel never aborts the rest of a command.
    """

    name: str

    async def deliver(self, urls: PanelURLs) -> DeliveryOutcome:
        ...
