"""JavaScript/TypeScript import extraction.

Regex based: ``import x from '...'``, ``export { y } from '...'``,
side-effect ``import '...'``, ``require('...')`` and ``import('...')``.
Only relative specifiers resolve; bare package names are external.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import PurePosixPath

from layerctl.domain.models import SourceUnit
from layerctl.infrastructure.references.base import UnitIndex

# String literals come first so quote-embedded ``/*`` or ``//`` never opens a comment.
_TOKENS = re.compile(
    r"""'(?:\\.|[^'\\\n])*'"""
    r'''|"(?:\\.|[^"\\\n])*"'''
    r"|`(?:\\.|[^`\\])*`"
    r"|//[^\n]*"
    r"|/\*.*?\*/",
    re.DOTALL,
)

_SPECIFIER_PATTERNS = (
    re.compile(r"""\bfrom\s+['"]([^'"\n]+)['"]"""),
    re.compile(r"""\bimport\s+['"]([^'"\n]+)['"]"""),
    re.compile(r"""\b(?:require|import)\s*\(\s*['"]([^'"\n]+)['"]\s*\)"""),
)

# TS sources compiled to ESM import siblings as ``./x.js``.
_COMPILED_TWINS = {".js": (".ts", ".tsx"), ".jsx": (".tsx",)}


def find_specifiers(source: str) -> list[str]:
    """Return import specifiers in source order (duplicates kept)."""
    text = _TOKENS.sub(_drop_comment, source)
    found: list[tuple[int, str]] = []
    for pattern in _SPECIFIER_PATTERNS:
        found.extend((m.start(), m.group(1)) for m in pattern.finditer(text))
    return [spec for _pos, spec in sorted(found)]


def _drop_comment(match: re.Match[str]) -> str:
    token = match.group(0)
    if token.startswith("/"):
        return " "
    return token


class JavaScriptExtractor:
    """Reference extractor for JS/TS sources."""

    name = "javascript"
    suffixes: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

    def extract(self, unit: SourceUnit, source: str, index: UnitIndex) -> list[str]:
        targets: list[str] = []
        for spec in find_specifiers(source):
            hit = self.resolve(unit, spec, index)
            if hit:
                targets.append(hit)
        return targets

    def resolve(self, unit: SourceUnit, spec: str, index: UnitIndex) -> str | None:
        if spec not in (".", "..") and not spec.startswith(("./", "../")):
            return None
        base_dir = PurePosixPath(unit.unit_id).parent
        joined = posixpath.normpath(posixpath.join(str(base_dir), spec))
        if joined == ".." or joined.startswith("../"):
            return None
        return index.resolve(self._candidates(PurePosixPath(joined)))

    def _candidates(self, target: PurePosixPath) -> list[PurePosixPath]:
        out: list[PurePosixPath] = []
        if target.suffix in self.suffixes:
            out.append(target)
            for twin in _COMPILED_TWINS.get(target.suffix, ()):
                out.append(target.with_suffix(twin))
        out.extend(target.parent / f"{target.name}{suffix}" for suffix in self.suffixes)
        out.extend(target / f"index{suffix}" for suffix in self.suffixes)
        return out
