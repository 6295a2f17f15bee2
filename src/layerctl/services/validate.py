"""ValidateService — check a tree against the layering rules.

Violations are findings, not failures: the result is ``ok`` whenever the
scan completed, and ``data["count"]`` tells the caller whether the tree
is clean. Every edge is evaluated so one run reports every problem.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from layerctl.domain.errors import ScanError
from layerctl.domain.rules import check_edges
from layerctl.services.analysis import AnalysisService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import trace_span, traced


class ValidateService(AnalysisService):
    """Runs the rule checker over a scanned tree."""

    @traced
    def validate(self, root: Path) -> ServiceResult:
        try:
            analysis = self._analyze(root)
        except ScanError as exc:
            return ServiceResult.failure("validate", exc)

        edges = analysis.graph.edges()
        with trace_span("check"):
            violations = check_edges(edges)

        warnings = list(analysis.warnings)
        self._dispatch_event(
            "post_validate",
            {
                "root": analysis.scan.root,
                "units_scanned": len(analysis.scan.units),
                "violations_found": len(violations),
            },
            warnings,
        )

        by_reason = Counter(v.reason for v in violations)
        return ServiceResult(
            ok=True,
            op="validate",
            data={
                "root": analysis.scan.root,
                "modules": analysis.scan.modules,
                "units": len(analysis.scan.units),
                "unclassified": [u.unit_id for u in analysis.scan.unclassified],
                "edges": len(edges),
                "violations": [v.to_dict() for v in violations],
                "lines": [v.line() for v in violations],
                "count": len(violations),
                "by_reason": dict(sorted(by_reason.items())),
                "clean": not violations,
            },
            warnings=warnings,
        )
