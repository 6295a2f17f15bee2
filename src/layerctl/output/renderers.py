"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from layerctl.output.console import create_console, get_output, style_for_layer

if TYPE_CHECKING:
    from rich.console import Console

    from layerctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "validate":
        return "\n".join(result.data.get("lines", []))
    if result.op == "scan":
        return "\n".join(str(item["unit"]) for item in result.data.get("items", []))
    if result.op == "scaffold":
        return "\n".join(result.data.get("created", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="lc.ok"), Text(f"  {result.op}", style="lc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="lc.key")
    v = Text(str(value), style="lc.path" if key in ("root", "path") else "")
    console.print(k, v, sep="", soft_wrap=True)


def _layer_text(module: str, layer: str) -> Text:
    return Text.assemble((module, "lc.module"), "/", (layer, style_for_layer(layer)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}", markup=False)


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span_data.get('name', '?')}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})")
    if span_data.get("error"):
        line.append(f"  raised {span_data['error']}", style="lc.error")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="lc.error"),
        Text(f"  {result.op}", style="lc.op"),
        Text(f" — {msg}"),
        sep="",
        soft_wrap=True,
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


# ── Validate ──────────────────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One line per violation, then a summary."""
    d = result.data
    violations = d.get("violations", [])
    units = d.get("units", 0)
    modules = len(d.get("modules", []))

    if not violations:
        console.print(
            Text("OK", style="lc.ok"),
            Text("  validate", style="lc.op"),
            Text(f" — no violations ({units} units, {modules} modules)"),
            sep="",
        )
        if verbose:
            _render_meta(console, result)
        return

    for v in violations:
        line = Text.assemble(
            _layer_text(v["source_module"], v["source_layer"]),
            " -> ",
            _layer_text(v["target_module"], v["target_layer"]),
            ": ",
            (v["reason"], "lc.reason"),
        )
        console.print(line, soft_wrap=True)
        if verbose:
            for source_unit, target_unit in v.get("provenance", []):
                console.print(Text(f"    {source_unit} -> {target_unit}", style="dim"))

    console.print()
    console.print(
        Text("FAIL", style="lc.fail"),
        Text(f"  {len(violations)} violation(s) in {units} units, {modules} modules"),
        sep="",
    )
    if verbose:
        _render_meta(console, result)


# ── Scan ──────────────────────────────────────────────────────────────


def _render_scan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "root", d.get("root", ""))
    _field(console, "modules", ", ".join(d.get("modules", [])) or "-")

    items = d.get("items", [])
    if items:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Module", style="lc.module", no_wrap=True)
        table.add_column("Layer")
        table.add_column("Unit", style="lc.path", overflow="fold")
        for item in items:
            layer = str(item["layer"])
            table.add_row(
                str(item["module"]), Text(layer, style=style_for_layer(layer)), item["unit"]
            )
        console.print(table)

    by_layer = d.get("by_layer", {})
    if by_layer:
        console.print("  " + ", ".join(f"{k}={v}" for k, v in by_layer.items()), markup=False)
    for unit in d.get("unclassified", []):
        console.print(Text("  unclassified: ", style="lc.warning"), Text(unit), sep="")
    if verbose:
        for path in d.get("shared", []):
            console.print(Text(f"  shared: {path}", style="dim"))
        _render_meta(console, result)


# ── Module graph ──────────────────────────────────────────────────────


def _render_module_graph(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "root", d.get("root", ""))
    _field(console, "references", d.get("references", 0))

    edges = d.get("edges", [])
    if edges:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Module", style="lc.module", no_wrap=True)
        table.add_column("Depends on", style="lc.module", no_wrap=True)
        table.add_column("Refs", justify="right")
        for edge in edges:
            table.add_row(edge["source"], edge["target"], str(edge["weight"]))
        console.print(table)
    else:
        console.print("  no cross-module dependencies")

    for cycle in d.get("cycles", []):
        console.print(
            Text("  cycle: ", style="lc.warning"), Text(" -> ".join([*cycle, cycle[0]])), sep=""
        )
    if verbose:
        for edge in d.get("layer_edges", []):
            console.print(Text(f"    {edge}", style="dim"))
        _render_meta(console, result)


# ── Scaffold ──────────────────────────────────────────────────────────


def _render_scaffold(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "module", d.get("module", ""))
    _field(console, "path", d.get("path", ""))
    _field(console, "created", ", ".join(d.get("created", [])) or "-")
    _field(console, "existing", ", ".join(d.get("existing", [])) or "-")
    if d.get("files_created"):
        _field(console, "files", ", ".join(d["files_created"]))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "validate": _render_validate,
    "scan": _render_scan,
    "module_graph": _render_module_graph,
    "scaffold": _render_scaffold,
}
