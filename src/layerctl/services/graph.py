"""GraphService — module-level dependency summary and cycles."""

from __future__ import annotations

from pathlib import Path

from layerctl.domain.errors import ScanError
from layerctl.services.analysis import AnalysisService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import traced


class GraphService(AnalysisService):
    """Summarizes how modules depend on each other."""

    @traced
    def modules(self, root: Path) -> ServiceResult:
        try:
            analysis = self._analyze(root)
        except ScanError as exc:
            return ServiceResult.failure("module_graph", exc)

        mg = analysis.graph.module_graph()
        module_edges = [
            {"source": src, "target": dst, "weight": attrs["weight"]}
            for src, dst, attrs in sorted(mg.edges(data=True))
        ]
        cycles = analysis.graph.module_cycles()
        warnings = list(analysis.warnings)
        warnings.extend(f"Module cycle: {' -> '.join([*c, c[0]])}" for c in cycles)

        return ServiceResult(
            ok=True,
            op="module_graph",
            data={
                "root": analysis.scan.root,
                "modules": analysis.scan.modules,
                "edges": module_edges,
                "layer_edges": [edge.describe() for edge in analysis.graph.edges()],
                "cycles": cycles,
                "references": analysis.reference_count,
            },
            warnings=warnings,
        )
