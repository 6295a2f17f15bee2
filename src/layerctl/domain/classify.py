"""Unit classification — map a root-relative path to (module, layer).

Pure functions, no filesystem access. The scanner feeds every discovered
file through :func:`classify`, so the result depends only on the path and
never on traversal order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath

from layerctl.domain.types import DEFAULT_ENTRY_POINTS, DEFAULT_RESERVED, LAYER_FOLDERS, Layer


@dataclass(frozen=True)
class Classification:
    """Where a unit belongs. ``module`` is None for shared files."""

    module: str | None
    layer: Layer


SHARED = Classification(module=None, layer=Layer.UNCLASSIFIED)


def build_layer_table(aliases: Mapping[str, str] | None = None) -> dict[str, Layer]:
    """Fixed folder table extended by configured ``folder -> layer`` aliases.

    Raises ValueError for an alias pointing at an unknown layer.
    """
    table = dict(LAYER_FOLDERS)
    for folder, layer_name in (aliases or {}).items():
        try:
            table[folder] = Layer(layer_name)
        except ValueError:
            msg = f"Unknown layer {layer_name!r} for folder alias {folder!r}"
            raise ValueError(msg) from None
    return table


def is_module_name(
    name: str,
    *,
    reserved: Iterable[str] = DEFAULT_RESERVED,
    entry_points: Iterable[str] = DEFAULT_ENTRY_POINTS,
) -> bool:
    """Whether a top-level folder name denotes a module."""
    if name in set(reserved):
        return False
    return name not in set(entry_points)


def classify(
    rel_path: str | PurePosixPath,
    *,
    layer_table: Mapping[str, Layer] | None = None,
    reserved: Iterable[str] = DEFAULT_RESERVED,
    entry_points: Iterable[str] = DEFAULT_ENTRY_POINTS,
) -> Classification:
    """Classify a root-relative file path.

    Examples:
        >>> classify("orders/services/orders_service.py")
        Classification(module='orders', layer=<Layer.SERVICE: 'service'>)
        >>> classify("orders/services/internal/helper.py").layer
        <Layer.UNCLASSIFIED: 'unclassified'>
        >>> classify("main.py") is SHARED
        True
    """
    parts = PurePosixPath(rel_path).parts
    # Files at the root are entry points.
    if len(parts) < 2:
        return SHARED
    module = parts[0]
    if not is_module_name(module, reserved=reserved, entry_points=entry_points):
        return SHARED

    table = layer_table if layer_table is not None else LAYER_FOLDERS
    if len(parts) == 2:
        # Directly inside the module folder: no layer folder.
        return Classification(module=module, layer=Layer.UNCLASSIFIED)
    parent = parts[-2]
    return Classification(module=module, layer=table.get(parent, Layer.UNCLASSIFIED))
