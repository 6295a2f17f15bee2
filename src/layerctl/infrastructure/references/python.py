"""Python import extraction via :mod:`ast`.

Handles ``import a.b``, ``from a.b import c`` and relative
``from ..x import y``. Dotted names map to ``a/b.py`` or
``a/b/__init__.py`` under the scan root.
"""

from __future__ import annotations

import ast
from pathlib import PurePosixPath

from layerctl.domain.models import SourceUnit
from layerctl.infrastructure.references.base import UnitIndex


def module_candidates(parts: list[str]) -> list[PurePosixPath]:
    """Candidate file paths for a dotted module name, best match first.

    The full name is tried first. Then leading components are dropped so a
    tree scanned below its package root still resolves
    (``app.orders.services.x`` scanned at ``app/``). Stripped variants keep
    at least two components to avoid matching bare third-party names.

    Examples:
        >>> [str(p) for p in module_candidates(["orders", "services"])]
        ['orders/services.py', 'orders/services/__init__.py']
    """
    out: list[PurePosixPath] = []
    for start in range(len(parts)):
        sub = parts[start:]
        if start > 0 and len(sub) < 2:
            break
        base = PurePosixPath(*sub)
        out.append(base.parent / f"{base.name}.py")
        out.append(base / "__init__.py")
    return out


def _relative_base(unit: SourceUnit, level: int) -> list[str] | None:
    """Package parts a relative import of *level* dots starts from."""
    package = list(PurePosixPath(unit.unit_id).parent.parts)
    ups = level - 1
    if ups > len(package):
        return None
    return package[: len(package) - ups] if ups else package


class PythonExtractor:
    """Reference extractor for ``.py`` files."""

    name = "python"
    suffixes: tuple[str, ...] = (".py",)

    def extract(self, unit: SourceUnit, source: str, index: UnitIndex) -> list[str]:
        tree = ast.parse(source, filename=unit.unit_id)
        targets: list[str] = []
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    hit = index.resolve(module_candidates(alias.name.split(".")))
                    if hit:
                        targets.append(hit)
            elif isinstance(node, ast.ImportFrom):
                targets.extend(self._from_import(unit, node, index))
        return targets

    def _from_import(self, unit: SourceUnit, node: ast.ImportFrom, index: UnitIndex) -> list[str]:
        module_parts = node.module.split(".") if node.module else []
        if node.level:
            base = _relative_base(unit, node.level)
            if base is None:
                return []
            prefix = [*base, *module_parts]
            # Relative imports are anchored: never strip leading components.
            resolve = self._resolve_anchored
        else:
            prefix = module_parts
            resolve = self._resolve_absolute

        hits: list[str] = []
        for alias in node.names:
            # ``from pkg import sub`` may name a submodule; fall back to pkg.
            hit = None
            if alias.name != "*":
                hit = resolve([*prefix, alias.name], index)
            if hit is None and prefix:
                hit = resolve(prefix, index)
            if hit:
                hits.append(hit)
        return hits

    @staticmethod
    def _resolve_absolute(parts: list[str], index: UnitIndex) -> str | None:
        return index.resolve(module_candidates(parts))

    @staticmethod
    def _resolve_anchored(parts: list[str], index: UnitIndex) -> str | None:
        if not parts:
            return None
        base = PurePosixPath(*parts)
        return index.resolve([base.parent / f"{base.name}.py", base / "__init__.py"])
