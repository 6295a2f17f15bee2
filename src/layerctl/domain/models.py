"""Value types shared by the scanner, graph builder, and rule checker.

Everything here is rebuilt per run. Nothing is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from layerctl.domain.types import Layer


@dataclass(frozen=True, order=True)
class SourceUnit:
    """One source file inside a module.

    Ordering follows field order, so ``sorted(units)`` yields the
    ``(module, layer, unit_id)`` order the scanner guarantees.
    """

    module: str
    layer: Layer
    unit_id: str  # POSIX path relative to the scan root
    path: str = field(default="", compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {"module": self.module, "layer": str(self.layer), "unit": self.unit_id}


@dataclass(frozen=True)
class ScanResult:
    """Ordered output of one scan."""

    root: str
    units: tuple[SourceUnit, ...] = ()
    shared: tuple[str, ...] = ()

    @property
    def unclassified(self) -> tuple[SourceUnit, ...]:
        return tuple(u for u in self.units if u.layer is Layer.UNCLASSIFIED)

    @property
    def modules(self) -> list[str]:
        return sorted({u.module for u in self.units})


@dataclass(frozen=True, order=True)
class DependencyEdge:
    """A layer-level reference, collapsed over every unit pair that produced it."""

    source_module: str
    source_layer: Layer
    target_module: str
    target_layer: Layer
    provenance: tuple[tuple[str, str], ...] = field(default=(), compare=False)

    @property
    def same_module(self) -> bool:
        return self.source_module == self.target_module

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (
            self.source_module,
            str(self.source_layer),
            self.target_module,
            str(self.target_layer),
        )

    def describe(self) -> str:
        return (
            f"{self.source_module}/{self.source_layer} -> "
            f"{self.target_module}/{self.target_layer}"
        )


@dataclass(frozen=True)
class Violation:
    """A DependencyEdge that breaks a rule."""

    edge: DependencyEdge
    reason: str

    @property
    def sort_key(self) -> tuple[str, str, str, str, str]:
        return (*self.edge.key, self.reason)

    def line(self) -> str:
        """``<srcModule>/<srcLayer> -> <dstModule>/<dstLayer>: <reason>``."""
        return f"{self.edge.describe()}: {self.reason}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_module": self.edge.source_module,
            "source_layer": str(self.edge.source_layer),
            "target_module": self.edge.target_module,
            "target_layer": str(self.edge.target_layer),
            "reason": self.reason,
            "provenance": [list(pair) for pair in self.edge.provenance],
        }
