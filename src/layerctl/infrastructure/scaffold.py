"""Module scaffolding — create the canonical layer folders on disk.

Idempotent: existing folders and files are left untouched and reported
as existing. Files are opened with ``"x"`` so content is never overwritten.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from layerctl.domain.errors import ScaffoldError
from layerctl.domain.types import CANONICAL_FOLDERS, DEFAULT_ENTRY_POINTS, DEFAULT_RESERVED

logger = logging.getLogger(__name__)

MODULE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


@dataclass
class ScaffoldReport:
    """What a scaffold run created and what was already there."""

    module: str
    module_dir: Path
    module_created: bool = False
    created: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    files_created: list[str] = field(default_factory=list)
    files_existing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "module": self.module,
            "path": str(self.module_dir),
            "module_created": self.module_created,
            "created": list(self.created),
            "existing": list(self.existing),
            "files_created": list(self.files_created),
            "files_existing": list(self.files_existing),
        }


def validate_module_name(
    name: str,
    *,
    reserved: Iterable[str] = DEFAULT_RESERVED,
    entry_points: Iterable[str] = DEFAULT_ENTRY_POINTS,
) -> None:
    """Raise ScaffoldError unless *name* can be a module folder."""
    if not MODULE_NAME_PATTERN.match(name):
        msg = f"Invalid module name {name!r}: use letters, digits, '_' or '-'"
        raise ScaffoldError(msg)
    if name in set(reserved):
        raise ScaffoldError(f"Module name {name!r} collides with a reserved folder")
    if name in set(entry_points):
        raise ScaffoldError(f"Module name {name!r} collides with an entry point")


def _check_target_root(root: Path) -> None:
    if not root.exists():
        raise ScaffoldError(f"Target root does not exist: {root}", path=root)
    if not root.is_dir():
        raise ScaffoldError(f"Target root is not a directory: {root}", path=root)
    if not os.access(root, os.W_OK | os.X_OK):
        raise ScaffoldError(f"Target root is not writable: {root}", path=root)


def _ensure_dir(path: Path) -> bool:
    """Create *path*; return True if created, False if it already existed."""
    if path.is_dir():
        return False
    if path.exists():
        raise ScaffoldError(f"Path exists and is not a directory: {path}", path=path)
    try:
        path.mkdir()
    except FileExistsError:
        return False
    except OSError as exc:
        msg = f"Cannot create {path}: {exc.strerror or exc}"
        raise ScaffoldError(msg, path=path) from exc
    return True


def _write_new_file(path: Path, content: str) -> bool:
    """Write *content* unless the file exists; return True if written."""
    try:
        with path.open("x", encoding="utf-8") as fh:
            fh.write(content)
    except FileExistsError:
        return False
    except OSError as exc:
        msg = f"Cannot write {path}: {exc.strerror or exc}"
        raise ScaffoldError(msg, path=path) from exc
    return True


def scaffold_module(
    root: Path,
    module: str,
    *,
    folders: Iterable[str] = CANONICAL_FOLDERS,
    files: Mapping[str, str] | None = None,
    reserved: Iterable[str] = DEFAULT_RESERVED,
    entry_points: Iterable[str] = DEFAULT_ENTRY_POINTS,
) -> ScaffoldReport:
    """Create ``root/module`` and its layer folders, then any missing *files*.

    *files* maps module-relative POSIX paths to content; their parent folders
    must be part of the scaffold.

    Raises:
        ScaffoldError: invalid or reserved name, unwritable root, or an
            I/O failure while creating folders or files.
    """
    validate_module_name(module, reserved=reserved, entry_points=entry_points)
    _check_target_root(root)

    module_dir = root / module
    report = ScaffoldReport(module=module, module_dir=module_dir)
    report.module_created = _ensure_dir(module_dir)

    for folder in folders:
        if _ensure_dir(module_dir / folder):
            report.created.append(folder)
        else:
            report.existing.append(folder)

    for rel, content in sorted((files or {}).items()):
        if _write_new_file(module_dir / rel, content):
            report.files_created.append(rel)
        else:
            report.files_existing.append(rel)

    logger.debug(
        "scaffold %s: created=%s existing=%s files=%s",
        module,
        report.created,
        report.existing,
        report.files_created,
    )
    return report
