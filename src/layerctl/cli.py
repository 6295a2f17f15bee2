"""layerctl entry point: global flags, settings, and subcommand registration."""

from __future__ import annotations

from typing import Any

import click

from layerctl import __version__
from layerctl.commands import register_commands
from layerctl.commands._base import LayerGroup
from layerctl.commands._context import AppContext
from layerctl.config.settings import LayerSettings


@click.group(
    cls=LayerGroup,
    invoke_without_command=True,
    examples="""\
  layerctl validate src
  layerctl --json validate src | jq '.data.lines[]'
  layerctl -c ci/layerctl.toml validate src
  layerctl scaffold src billing""",
)
@click.version_option(__version__, prog_name="layerctl")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only violation lines or unit ids.")
@click.option("-v", "--verbose", is_flag=True, help="Show provenance, timings, and debug logs.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read this config file instead of searching for layerctl.toml.",
)
@click.option("--no-plugins", is_flag=True, help="Use only the built-in extractors.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, no_plugins: bool, **flags: Any) -> None:
    """layerctl — validate and scaffold modular backend layouts."""
    overrides: dict[str, Any] = dict(flags)
    if no_plugins:
        overrides["plugins"] = {"enabled": False}
    ctx.obj = AppContext(LayerSettings.from_cli(config_path=config_path, **overrides))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
