"""Command: check a source tree against the layering rules."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from layerctl.commands._base import LayerCommand

if TYPE_CHECKING:
    from layerctl.commands._context import AppContext

# Exit status when the tree has at least one violation.
EXIT_VIOLATIONS = 1


@click.command(
    cls=LayerCommand,
    examples="""\
  layerctl validate src
  layerctl --json validate src/modules
  layerctl -v validate .
  layerctl -q validate src""",
)
@click.argument("root", type=click.Path(path_type=Path))
@click.pass_obj
def validate(app: AppContext, root: Path) -> None:
    """Report references that break the module/layer rules.

    Exit status: 0 clean, 1 violations found, 2 scan error.
    """
    from layerctl.services.validate import ValidateService

    result = ValidateService(app.workspace).validate(root)
    app.emit(result, exit_code=EXIT_VIOLATIONS if result.data.get("count") else 0)
