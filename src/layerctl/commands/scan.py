"""Command: show how each unit in a tree is classified."""

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
  layerctl scan src
  layerctl --json scan src
  layerctl -q scan src""",
)
@click.argument("root", type=click.Path(path_type=Path))
@click.pass_obj
def scan(app: AppContext, root: Path) -> None:
    """List modules, layers, and unclassified units under ROOT."""
    from layerctl.services.scan import ScanService

    app.emit(ScanService(app.workspace).scan(root))
