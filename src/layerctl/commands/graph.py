"""Command: module dependency summary."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from layerctl.commands._base import LayerCommand

if TYPE_CHECKING:
    from layerctl.commands._context import AppContext


@click.command(
    cls=LayerCommand,
    examples="""\
  layerctl graph src
  layerctl -v graph src
  layerctl --json graph src""",
)
@click.argument("root", type=click.Path(path_type=Path))
@click.pass_obj
def graph(app: AppContext, root: Path) -> None:
    """Show which modules depend on which, and any module cycles."""
    from layerctl.services.graph import GraphService

    app.emit(GraphService(app.workspace).modules(root))
