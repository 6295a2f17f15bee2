"""Tests for Rich renderers and output mode selection."""

from __future__ import annotations

import json

from layerctl.output.formatters import OutputSettings, format_result
from layerctl.output.renderers import render_quiet, render_result
from layerctl.services.result import ServiceError, ServiceResult

LINE = "users/service -> orders/repository: cross-module-repository-access"

VIOLATION = {
    "source_module": "users",
    "source_layer": "service",
    "target_module": "orders",
    "target_layer": "repository",
    "reason": "cross-module-repository-access",
    "provenance": [["users/services/UserService.ts", "orders/repositories/OrderRepo.ts"]],
}


def _validate_result(violations: list[dict]) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="validate",
        data={
            "root": "/src",
            "modules": ["orders", "users"],
            "units": 2,
            "violations": violations,
            "lines": [LINE] if violations else [],
            "count": len(violations),
        },
    )


class TestRenderValidate:
    def test_violation_line_verbatim(self) -> None:
        text = render_result(_validate_result([VIOLATION]))
        assert LINE in text.splitlines()
        assert "FAIL  1 violation(s) in 2 units, 2 modules" in text
        assert "OrderRepo.ts" not in text

    def test_verbose_prints_provenance(self) -> None:
        text = render_result(_validate_result([VIOLATION]), verbose=True)
        assert "users/services/UserService.ts -> orders/repositories/OrderRepo.ts" in text

    def test_clean(self) -> None:
        text = render_result(_validate_result([]))
        assert text == "OK  validate — no violations (2 units, 2 modules)"


class TestRenderOthers:
    def test_scan_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="scan",
            data={
                "root": "/src",
                "modules": ["orders"],
                "items": [
                    {"module": "orders", "layer": "service", "unit": "orders/services/s.py"}
                ],
                "by_layer": {"service": 1},
                "unclassified": [],
                "shared": [],
            },
        )
        text = render_result(result)
        assert "orders/services/s.py" in text
        assert "service=1" in text

    def test_module_graph(self) -> None:
        result = ServiceResult(
            ok=True,
            op="module_graph",
            data={
                "root": "/src",
                "references": 3,
                "edges": [{"source": "orders", "target": "users", "weight": 3}],
                "cycles": [["orders", "users"]],
            },
        )
        text = render_result(result)
        assert "cycle: orders -> users -> orders" in text

    def test_scaffold(self) -> None:
        result = ServiceResult(
            ok=True,
            op="scaffold",
            data={"module": "billing", "path": "/src/billing", "created": ["services"]},
        )
        text = render_result(result)
        assert "module: billing" in text
        assert "created: services" in text
        assert "existing: -" in text

    def test_generic_fallback(self) -> None:
        text = render_result(ServiceResult(ok=True, op="other", data={"k": [1, 2]}))
        assert "k: [1,2]" in text

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(code="SCAN_ERROR", message="Root path does not exist: /x"),
        )
        assert render_result(result) == "ERROR  validate — Root path does not exist: /x"


class TestQuiet:
    def test_validate_lines_only(self) -> None:
        assert render_quiet(_validate_result([VIOLATION])) == LINE

    def test_clean_validate_is_empty(self) -> None:
        assert render_quiet(_validate_result([])) == ""

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="scaffold", error=ServiceError(code="SCAFFOLD_ERROR", message="bad")
        )
        assert render_quiet(result) == "ERROR: scaffold — bad"


class TestFormatResult:
    def test_json(self) -> None:
        out = format_result(
            _validate_result([VIOLATION]), settings=OutputSettings(json_output=True)
        )
        payload = json.loads(out)
        assert payload["ok"] is True
        assert payload["data"]["lines"] == [LINE]

    def test_quiet(self) -> None:
        out = format_result(_validate_result([VIOLATION]), settings=OutputSettings(quiet=True))
        assert out == LINE

    def test_default_is_rich(self) -> None:
        assert "FAIL" in format_result(_validate_result([VIOLATION]))
