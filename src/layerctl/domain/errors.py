"""Exceptions raised by infrastructure and translated by services.

Violations are findings, not errors, and never appear here.
"""

from __future__ import annotations

from pathlib import Path


class LayerctlError(Exception):
    """Base class for layerctl failures."""

    code = "LAYERCTL_ERROR"

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def detail(self) -> dict[str, str]:
        return {"path": self.path} if self.path else {}


class ScanError(LayerctlError):
    """The scan root (or a directory beneath it) is missing or unreadable."""

    code = "SCAN_ERROR"


class ScaffoldError(LayerctlError):
    """The scaffold target is unwritable or the module name is not allowed."""

    code = "SCAFFOLD_ERROR"
