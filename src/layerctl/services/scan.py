"""ScanService — classify a tree without checking references."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from layerctl.domain.errors import ScanError
from layerctl.services.base import BaseService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import traced


class ScanService(BaseService):
    """Reports how every unit in a tree is classified."""

    @traced
    def scan(self, root: Path) -> ServiceResult:
        try:
            result = self._workspace.scanner().scan(root)
        except ScanError as exc:
            return ServiceResult.failure("scan", exc)

        unclassified = [u.unit_id for u in result.unclassified]
        by_layer = Counter(str(u.layer) for u in result.units)
        return ServiceResult(
            ok=True,
            op="scan",
            data={
                "root": result.root,
                "modules": result.modules,
                "items": [u.to_dict() for u in result.units],
                "count": len(result.units),
                "by_layer": dict(sorted(by_layer.items())),
                "unclassified": unclassified,
                "shared": list(result.shared),
            },
            warnings=[f"Unclassified unit: {uid}" for uid in unclassified],
        )
