"""Command: scaffold a module with the canonical layer folders."""

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
  layerctl scaffold src orders
  layerctl scaffold src/modules billing --init-files
  layerctl --json scaffold . users --no-readme""",
)
@click.argument("root", type=click.Path(path_type=Path))
@click.argument("module")
@click.option(
    "--init-files/--no-init-files",
    default=None,
    help="Write __init__.py into the module and each layer folder.",
)
@click.option("--readme/--no-readme", default=None, help="Write a module README.md.")
@click.pass_obj
def scaffold(
    app: AppContext,
    root: Path,
    module: str,
    init_files: bool | None,
    readme: bool | None,
) -> None:
    """Create MODULE under ROOT with controllers, services, repositories, ... folders.

    Re-running on an existing module creates only what is missing.
    Exit status: 0 success, 2 scaffold error.
    """
    from layerctl.services.scaffold import ScaffoldService

    svc = ScaffoldService(app.workspace)
    app.emit(svc.scaffold(root, module, readme=readme, init_files=init_files))
