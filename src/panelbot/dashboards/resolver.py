"""
Template variable resolution for panel titles.

Panel titles may reference dashboard variables as ``$name``. The resolver maps
each ``$name`` to the variable's current value; tokens without a binding are
left exactly as written.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from panelbot.dashboards.models import DashboardDefinition, TemplateVariable

TOKEN_PATTERN = re.compile(r"\$\w+")


class TemplateResolver:
    """Substitute ``$variable`` tokens using an ordered name -> value mapping."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = dict(mapping)

    @classmethod
    def from_variables(cls, variables: Iterable[TemplateVariable]) -> "TemplateResolver":
        return cls({f"${var.name}": var.current_value for var in variables})

    @classmethod
    def for_dashboard(cls, definition: DashboardDefinition) -> "TemplateResolver":
        return cls.from_variables(definition.templating)

    @property
    def mapping(self) -> dict[str, str]:
        return dict(self._mapping)

    def resolve(self, title: str) -> str:
        return TOKEN_PATTERN.sub(lambda m: self._mapping.get(m.group(0), m.group(0)), title)
