"""Subcommand modules for layerctl.

Provides register_commands() which uses deferred imports to keep
``layerctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from layerctl.commands.graph import graph
    from layerctl.commands.scaffold import scaffold
    from layerctl.commands.scan import scan
    from layerctl.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(scaffold)
    cli.add_command(scan)
    cli.add_command(graph)
