"""Extractor protocol, unit lookup index, and the collection loop."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from layerctl.domain.errors import ScanError
from layerctl.domain.models import SourceUnit

logger = logging.getLogger(__name__)


class UnitIndex:
    """Lookup of scanned units by root-relative POSIX path."""

    def __init__(self, units: Iterable[SourceUnit]) -> None:
        self._by_id: dict[str, SourceUnit] = {u.unit_id: u for u in units}

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, unit_id: str) -> SourceUnit | None:
        return self._by_id.get(unit_id)

    def resolve(self, candidates: Iterable[PurePosixPath | str]) -> str | None:
        """Return the first candidate path that is a scanned unit."""
        for candidate in candidates:
            key = str(candidate)
            if key in self._by_id:
                return key
        return None


@runtime_checkable
class ReferenceExtractor(Protocol):
    """Turns one unit's source text into the unit ids it references."""

    name: str
    suffixes: tuple[str, ...]

    def extract(self, unit: SourceUnit, source: str, index: UnitIndex) -> list[str]:
        """Return resolved target unit ids. May raise SyntaxError/ValueError."""
        ...


def extractor_table(extractors: Iterable[ReferenceExtractor]) -> dict[str, ReferenceExtractor]:
    """Map file suffix -> extractor. The first extractor claiming a suffix wins."""
    table: dict[str, ReferenceExtractor] = {}
    for extractor in extractors:
        for suffix in extractor.suffixes:
            table.setdefault(suffix, extractor)
    return table


def collect_references(
    units: Iterable[SourceUnit],
    extractors: Mapping[str, ReferenceExtractor],
    *,
    warnings: list[str] | None = None,
) -> dict[str, list[str]]:
    """Read every unit and return ``{unit_id: [target unit ids]}``.

    Targets are deduplicated, sorted, and exclude the unit itself.
    Unparseable sources become warnings; read failures raise ScanError.
    """
    unit_list = list(units)
    index = UnitIndex(unit_list)
    refs: dict[str, list[str]] = {}
    for unit in unit_list:
        extractor = extractors.get(PurePosixPath(unit.unit_id).suffix)
        if extractor is None:
            refs[unit.unit_id] = []
            continue
        try:
            source = Path(unit.path).read_text(encoding="utf-8")
        except UnicodeDecodeError:
            _warn(warnings, f"Skipped non-UTF-8 source {unit.unit_id}")
            refs[unit.unit_id] = []
            continue
        except OSError as exc:
            msg = f"Cannot read {unit.unit_id}: {exc.strerror or exc}"
            raise ScanError(msg, path=unit.path) from exc

        try:
            targets = extractor.extract(unit, source, index)
        except (SyntaxError, ValueError) as exc:
            _warn(warnings, f"Could not parse {unit.unit_id} ({extractor.name}): {exc}")
            targets = []
        refs[unit.unit_id] = sorted({t for t in targets if t != unit.unit_id})
    return refs


def _warn(warnings: list[str] | None, message: str) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
