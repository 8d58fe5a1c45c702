"""
Chat command handling.

Turns a command string into reply messages:

    db <slug>[:<selector>] [<from>] [<to>] [<key>=<value> ...]
    list [<tag>]
    search <query>

Replies are yielded in order, one per selected panel for ``db``. Every
expected failure becomes a reply; nothing escapes ``handle()``.
"""

from __future__ import annotations

import re
from typing import AsyncIterator, Sequence

import structlog

from panelbot.clients.grafana import GrafanaClient
from panelbot.config import Settings
from panelbot.core.errors import (
    DashboardServiceError,
    InvalidCommand,
    PanelBotError,
    format_error_message,
)
from panelbot.dashboards.models import (
    ById,
    ByName,
    DashboardQuery,
    DashboardSummary,
    PanelReport,
    Selector,
)
from panelbot.dashboards.parser import parse_command
from panelbot.dashboards.resolver import TemplateResolver
from panelbot.dashboards.selector import select_panels
from panelbot.dashboards.urls import build_panel_urls
from panelbot.delivery.dispatcher import DeliveryDispatcher
from panelbot.logging import command_context

logger = structlog.get_logger()

DB_COMMAND = re.compile(r"^(?:graf\s+)?db(?:\s+(?P<tail>.*))?$", re.IGNORECASE | re.DOTALL)
LIST_COMMAND = re.compile(r"^(?:graf\s+)?list(?:\s+(?P<tag>\S+))?$", re.IGNORECASE)
SEARCH_COMMAND = re.compile(r"^(?:graf\s+)?search\s+(?P<query>.+)$", re.IGNORECASE)


def describe_selector(selector: Selector) -> str:
    if isinstance(selector, ById):
        return str(selector.ordinal)
    if isinstance(selector, ByName):
        return selector.text
    return ""


def format_listing(header: str, dashboards: Sequence[DashboardSummary]) -> str:
    if not dashboards:
        return "No dashboards found."
    lines = [header]
    lines.extend(f"- {d.slug}: {d.title}" for d in dashboards)
    return "\n".join(lines)


class CommandBot:
    """Runs chat commands against Grafana and a delivery strategy."""

    def __init__(self, settings: Settings, grafana: GrafanaClient, dispatcher: DeliveryDispatcher) -> None:
        self._settings = settings
        self._grafana = grafana
        self._dispatcher = dispatcher

    @classmethod
    def from_settings(cls, settings: Settings) -> "CommandBot":
        grafana = GrafanaClient(
            settings.grafana_host,
            settings.grafana_api_key,
            timeout=settings.http_timeout,
        )
        return cls(settings, grafana, DeliveryDispatcher.from_settings(settings, grafana))

    async def run_query(self, query: DashboardQuery) -> AsyncIterator[PanelReport]:
        """Fetch the dashboard and deliver each selected panel, in ordinal order.

        Raises:
            FetchError: if the dashboard cannot be fetched
            DashboardServiceError: if Grafana answers with an error message
        """
        definition = await self._grafana.fetch_dashboard(query.slug)
        resolver = TemplateResolver.for_dashboard(definition)
        selected = select_panels(definition, query.selector)
        logger.info("panels_selected", slug=query.slug, count=len(selected))

        for item in selected:
            urls = build_panel_urls(
                self._settings.grafana_host,
                definition.render_segment,
                query.slug,
                item.panel.id,
                query.time_range,
                query.variables,
            )
            outcome = await self._dispatcher.deliver(urls)
            report = PanelReport(
                ordinal=item.ordinal,
                title=resolver.resolve(item.panel.title),
                urls=urls,
                outcome=outcome,
            )
            if not report.delivered:
                logger.warning("panel_delivery_failed", slug=query.slug, ordinal=item.ordinal)
            yield report

    async def _dashboard_replies(self, tail: str) -> AsyncIterator[str]:
        query = parse_command(tail)
        delivered = 0
        async for report in self.run_query(query):
            delivered += 1
            yield report.to_message()
        if not delivered and query.selector is None:
            yield f"Dashboard {query.slug} has no panels."
        elif not delivered:
            yield f'No panels matched "{describe_selector(query.selector)}" in {query.slug}.'

    async def handle(self, text: str) -> AsyncIterator[str]:
        """Yield reply messages for one command."""
        command = text.strip()
        with command_context(command=command) as log:
            try:
                match = DB_COMMAND.match(command)
                if match:
                    async for message in self._dashboard_replies(match.group("tail") or ""):
                        yield message
                    return

                match = LIST_COMMAND.match(command)
                if match:
                    dashboards = await self._grafana.list_dashboards(tag=match.group("tag"))
                    yield format_listing("Available dashboards:", dashboards)
                    return

                match = SEARCH_COMMAND.match(command)
                if match:
                    query = match.group("query").strip()
                    dashboards = await self._grafana.search_dashboards(query=query)
                    yield format_listing(f'Dashboards matching "{query}":', dashboards)
                    return

                raise InvalidCommand("Unknown command", {"command": command})
            except PanelBotError as exc:
                log.warning("command_failed", error_type=type(exc).__name__, error=exc.message)
                if isinstance(exc, DashboardServiceError):
                    yield exc.message
                else:
                    yield f"{type(exc).__name__}: {format_error_message(exc)}"
