"""Tests for telemetry spans and the @traced decorator."""

from __future__ import annotations

from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


class _Svc:
    @traced
    def run(self) -> ServiceResult:
        with trace_span("inner") as span:
            if span:
                span.annotate("items", 3)
        return ServiceResult(ok=True, op="run")


class TestTelemetry:
    def test_disabled_is_passthrough(self) -> None:
        disable_telemetry()
        assert _Svc().run().meta is None
        with trace_span("x") as span:
            assert span is None

    def test_enabled_builds_tree(self) -> None:
        enable_telemetry()
        result = _Svc().run()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "_Svc.run"
        assert tree["children"][0]["name"] == "inner"
        assert tree["children"][0]["annotations"] == {"items": 3}

    def test_span_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None

    def test_span_duration(self) -> None:
        span = Span(name="s")
        assert span.duration_ms == 0.0
        span.close()
        assert span.duration_ms >= 0.0
        assert span.to_dict()["name"] == "s"

    def test_failing_step_recorded(self) -> None:
        enable_telemetry()

        class _Failing:
            @traced
            def run(self) -> ServiceResult:
                try:
                    with trace_span("explode"):
                        raise ValueError("nope")
                except ValueError:
                    pass
                return ServiceResult(ok=True, op="run")

        tree = _Failing().run().meta["telemetry"]  # type: ignore[index]
        child = tree["children"][0]
        assert child["name"] == "explode"
        assert child["error"] == "ValueError"

    def test_nested_spans(self) -> None:
        enable_telemetry()

        class _Nested:
            @traced
            def run(self) -> ServiceResult:
                with trace_span("outer"), trace_span("inner"):
                    pass
                with trace_span("sibling"):
                    pass
                return ServiceResult(ok=True, op="run")

        tree = _Nested().run().meta["telemetry"]  # type: ignore[index]
        assert [c["name"] for c in tree["children"]] == ["outer", "sibling"]
        assert tree["children"][0]["children"][0]["name"] == "inner"
        with trace_span("after") as span:
            assert span is None
