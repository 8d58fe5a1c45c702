"""Parse the tail of a ``db`` command into a DashboardQuery."""

from __future__ import annotations

from panelbot.core.errors import InvalidCommand
from panelbot.dashboards.models import (
    DEFAULT_TIME_FROM,
    DEFAULT_TIME_TO,
    ById,
    ByName,
    DashboardQuery,
    Selector,
    TimeRange,
)


def parse_selector(raw: str) -> Selector:
    """Plain ASCII digits select by ordinal, anything else by lower-cased title substring."""
    if not raw:
        return None
    if raw.isascii() and raw.isdigit():
        return ById(int(raw))
    return ByName(raw.lower())


def parse_command(text: str) -> DashboardQuery:
    """Parse ``slug[:selector] [from] [to] [key=value ...]``.

    The first two tokens without ``=`` fill the time range wherever they appear
    among the variables; further plain tokens are ignored.

    Raises:
        InvalidCommand: if the slug is empty
    """
    tokens = text.split()
    if not tokens:
        raise InvalidCommand("Missing dashboard slug", {"command": text.strip()})

    slug, _, raw_selector = tokens[0].partition(":")
    slug = slug.strip()
    if not slug:
        raise InvalidCommand("Missing dashboard slug", {"command": text.strip()})

    times: list[str] = []
    variables: list[str] = []
    for token in tokens[1:]:
        if "=" in token:
            variables.append(token)
        elif len(times) < 2:
            times.append(token)

    time_range = TimeRange(
        from_=times[0] if times else DEFAULT_TIME_FROM,
        to=times[1] if len(times) > 1 else DEFAULT_TIME_TO,
    )
    return DashboardQuery(
        slug=slug,
        selector=parse_selector(raw_selector),
        time_range=time_range,
        variables=tuple(variables),
    )
