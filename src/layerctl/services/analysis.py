"""Shared scan -> references -> graph pipeline.

ValidateService and GraphService both need the same snapshot of a tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from layerctl.domain.models import ScanResult
from layerctl.infrastructure.graph.engine import DependencyGraph
from layerctl.infrastructure.references.base import collect_references
from layerctl.services.base import BaseService
from layerctl.services.telemetry import trace_span


@dataclass
class Analysis:
    """One in-memory snapshot of a scanned tree."""

    scan: ScanResult
    graph: DependencyGraph
    references: dict[str, list[str]]
    warnings: list[str] = field(default_factory=list)

    @property
    def reference_count(self) -> int:
        return sum(len(targets) for targets in self.references.values())


class AnalysisService(BaseService):
    """Base for services that operate on a dependency graph."""

    def _analyze(self, root: Path) -> Analysis:
        """Scan *root*, extract references, and build the graph.

        Raises ScanError; callers convert it to a failed ServiceResult.
        """
        warnings: list[str] = []
        with trace_span("scan") as span:
            scan = self._workspace.scanner().scan(root)
            if span:
                span.annotate("units", len(scan.units))

        with trace_span("references") as span:
            refs = collect_references(scan.units, self._workspace.extractors(), warnings=warnings)
            if span:
                span.annotate("references", sum(len(t) for t in refs.values()))

        with trace_span("graph"):
            graph = DependencyGraph.build(scan.units, refs)

        for unit in scan.unclassified:
            warnings.append(f"Unclassified unit: {unit.unit_id}")
        return Analysis(scan=scan, graph=graph, references=refs, warnings=warnings)
