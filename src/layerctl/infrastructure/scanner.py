"""ProjectScanner — one read-only traversal of a source tree.

Discovers source files under a root, classifies each one via
:func:`layerctl.domain.classify.classify`, and returns a sorted
:class:`ScanResult`. Any directory that cannot be listed aborts the scan
with :class:`ScanError`; unclassified units are kept and reported.

Top-level directories are disjoint subtrees, so with ``workers > 1`` they
are walked concurrently and merged by sorting.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath

from layerctl.config.models import ScanConfig
from layerctl.domain.classify import build_layer_table, classify
from layerctl.domain.errors import ScanError
from layerctl.domain.models import ScanResult, SourceUnit

logger = logging.getLogger(__name__)


def _raise_scan_error(exc: OSError) -> None:
    msg = f"Cannot read {exc.filename}: {exc.strerror or exc}"
    raise ScanError(msg, path=exc.filename) from exc


class ProjectScanner:
    """Walks a root directory and classifies every source file found."""

    def __init__(self, config: ScanConfig | None = None) -> None:
        self._config = config or ScanConfig()
        self._layer_table = build_layer_table(self._config.layer_aliases)
        self._suffixes = frozenset(self._config.suffixes)
        self._exclude = frozenset(self._config.exclude)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def scan(self, root: Path) -> ScanResult:
        """Scan *root* and return its units in ``(module, layer, unit_id)`` order.

        Raises:
            ScanError: *root* is missing, not a directory, or unreadable.
        """
        root = self._check_root(root)
        top_files, top_dirs = self._list_top_level(root)

        if self._config.workers > 1 and len(top_dirs) > 1:
            with ThreadPoolExecutor(max_workers=self._config.workers) as pool:
                nested = list(pool.map(lambda d: self._walk(root, d), top_dirs))
        else:
            nested = [self._walk(root, d) for d in top_dirs]

        rel_paths = [*top_files, *(p for chunk in nested for p in chunk)]
        result = self._classify_all(root, rel_paths)
        logger.debug(
            "scan complete: root=%s units=%d shared=%d",
            root,
            len(result.units),
            len(result.shared),
        )
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_root(root: Path) -> Path:
        if not root.exists():
            raise ScanError(f"Root path does not exist: {root}", path=root)
        if not root.is_dir():
            raise ScanError(f"Root path is not a directory: {root}", path=root)
        if not os.access(root, os.R_OK | os.X_OK):
            raise ScanError(f"Root path is not readable: {root}", path=root)
        return root.resolve()

    def _skip_dir(self, name: str) -> bool:
        return name.startswith(".") or name in self._exclude

    def _is_source(self, name: str) -> bool:
        return PurePosixPath(name).suffix in self._suffixes

    def _list_top_level(self, root: Path) -> tuple[list[str], list[str]]:
        files: list[str] = []
        dirs: list[str] = []
        try:
            with os.scandir(root) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        if not self._skip_dir(entry.name):
                            dirs.append(entry.name)
                    elif entry.is_file() and self._is_source(entry.name):
                        files.append(entry.name)
        except OSError as exc:
            _raise_scan_error(exc)
        return sorted(files), sorted(dirs)

    def _walk(self, root: Path, top: str) -> list[str]:
        """Return root-relative POSIX paths of source files under ``root/top``."""
        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root / top, onerror=_raise_scan_error):
            dirnames[:] = sorted(d for d in dirnames if not self._skip_dir(d))
            rel_dir = Path(dirpath).relative_to(root).as_posix()
            found.extend(f"{rel_dir}/{name}" for name in filenames if self._is_source(name))
        return found

    def _classify_all(self, root: Path, rel_paths: Iterable[str]) -> ScanResult:
        units: list[SourceUnit] = []
        shared: list[str] = []
        for rel in rel_paths:
            placement = classify(
                rel,
                layer_table=self._layer_table,
                reserved=self._config.reserved,
                entry_points=self._config.entry_points,
            )
            if placement.module is None:
                shared.append(rel)
                continue
            units.append(
                SourceUnit(
                    module=placement.module,
                    layer=placement.layer,
                    unit_id=rel,
                    path=str(root / rel),
                )
            )
        return ScanResult(root=str(root), units=tuple(sorted(units)), shared=tuple(sorted(shared)))
