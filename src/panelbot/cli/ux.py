"""
Terminal output helpers built on rich.

Respects NO_COLOR and FORCE_COLOR; falls back to plain text when piped.
"""

from __future__ import annotations

import os

from rich.console import Console
from rich.theme import Theme

# Nord color palette (https://www.nordtheme.com/)
PANELBOT_THEME = Theme(
    {
        "error": "#BF616A bold",
    }
)

console = Console(
    theme=PANELBOT_THEME,
    force_terminal=os.environ.get("FORCE_COLOR") is not None,
    no_color=os.environ.get("NO_COLOR") is not None,
)


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗ {message}[/error]")


def reply(message: str) -> None:
    """Print a bot reply verbatim; URLs may contain markup characters."""
    console.print(message, markup=False, highlight=False, soft_wrap=True)
