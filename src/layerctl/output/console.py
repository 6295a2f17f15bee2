"""Rich Console factory and theme for layerctl output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LAYERCTL_THEME = Theme(
    {
        "lc.ok": "bold green",
        "lc.fail": "bold red",
        "lc.error": "bold red",
        "lc.warning": "bold yellow",
        "lc.op": "bold cyan",
        "lc.key": "dim",
        "lc.path": "dim",
        "lc.module": "bold blue",
        "lc.reason": "magenta",
        "lc.layer.controller": "cyan",
        "lc.layer.service": "green",
        "lc.layer.repository": "yellow",
        "lc.layer.entity": "red",
        "lc.layer.unclassified": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=LAYERCTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_layer(layer: str) -> str:
    """Rich style name for a layer, or empty for unstyled layers."""
    name = f"lc.layer.{layer}"
    return name if name in LAYERCTL_THEME.styles else ""
