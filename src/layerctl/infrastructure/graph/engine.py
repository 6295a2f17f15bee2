"""DependencyGraph — NetworkX graph of unit references.

Rebuilt per invocation from a scan snapshot, never cached across runs.
Unit-level edges live in a :class:`networkx.DiGraph`; layer-level
:class:`DependencyEdge` values are derived by collapsing unit pairs on
``(source module, source layer, target module, target layer)``.
Cross-module is decided by comparing the endpoints' ``module`` attributes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import networkx as nx

from layerctl.domain.models import DependencyEdge, SourceUnit
from layerctl.domain.types import Layer

type _Graph = nx.DiGraph


class DependencyGraph:
    """Unit reference graph with layer and module projections."""

    def __init__(self) -> None:
        self._graph: _Graph = nx.DiGraph()

    @classmethod
    def build(
        cls,
        units: Iterable[SourceUnit],
        references: Mapping[str, Iterable[str]],
    ) -> DependencyGraph:
        """Build from scanned units and ``{unit_id: [target unit ids]}``.

        References to unknown units and self references are ignored.
        """
        dg = cls()
        for unit in units:
            dg.add_unit(unit)
        for source_id, targets in references.items():
            for target_id in targets:
                dg.add_reference(source_id, target_id)
        return dg

    @property
    def graph(self) -> _Graph:
        return self._graph

    def add_unit(self, unit: SourceUnit) -> None:
        self._graph.add_node(unit.unit_id, module=unit.module, layer=unit.layer)

    def add_reference(self, source_id: str, target_id: str) -> bool:
        """Add a unit edge. Returns False when either end is not a known unit."""
        if source_id == target_id:
            return False
        if source_id not in self._graph or target_id not in self._graph:
            return False
        self._graph.add_edge(source_id, target_id)
        return True

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def edges(self) -> list[DependencyEdge]:
        """Layer-level edges, deduplicated, each carrying its unit provenance."""
        nodes = self._graph.nodes
        grouped: dict[tuple[str, Layer, str, Layer], list[tuple[str, str]]] = {}
        for source_id, target_id in self._graph.edges():
            src, dst = nodes[source_id], nodes[target_id]
            key = (src["module"], src["layer"], dst["module"], dst["layer"])
            grouped.setdefault(key, []).append((source_id, target_id))

        return sorted(
            DependencyEdge(
                source_module=sm,
                source_layer=sl,
                target_module=tm,
                target_layer=tl,
                provenance=tuple(sorted(pairs)),
            )
            for (sm, sl, tm, tl), pairs in grouped.items()
        )

    def module_graph(self) -> _Graph:
        """Condense to modules. Edge ``weight`` counts unit references."""
        mg: _Graph = nx.DiGraph()
        for _node, module in self._graph.nodes(data="module"):
            mg.add_node(module)
        for source_id, target_id in self._graph.edges():
            src = self._graph.nodes[source_id]["module"]
            dst = self._graph.nodes[target_id]["module"]
            if src == dst:
                continue
            if mg.has_edge(src, dst):
                mg[src][dst]["weight"] += 1
            else:
                mg.add_edge(src, dst, weight=1)
        return mg

    def module_cycles(self) -> list[list[str]]:
        """Elementary cycles between modules, each rotated to start at its minimum."""
        cycles: list[list[str]] = []
        for cycle in nx.simple_cycles(self.module_graph()):
            pivot = cycle.index(min(cycle))
            cycles.append(cycle[pivot:] + cycle[:pivot])
        return sorted(cycles)
