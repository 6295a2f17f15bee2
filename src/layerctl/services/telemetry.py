"""Span tracing for service calls.

Off by default; ``--verbose`` switches it on for the invocation. Each
``@traced`` service method then records a tree of timed spans, logs the
root span through structlog, and attaches the tree to
``ServiceResult.meta["telemetry"]``. When off, the cost is one
``ContextVar.get`` per call.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from layerctl.services.result import ServiceResult

log = structlog.get_logger("layerctl.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
# Open spans, innermost last.
_stack: ContextVar[tuple[Span, ...]] = ContextVar("_stack", default=())


@dataclass
class Span:
    """One timed step; children are the steps it opened."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)
    error: str | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def close(self, exc: BaseException | None = None) -> None:
        self.finished = time.perf_counter()
        if exc is not None:
            self.error = type(exc).__name__

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.error:
            out["error"] = self.error
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def _open_span(name: str, *, root: bool) -> Iterator[Span | None]:
    stack = _stack.get()
    if not _enabled.get() or not (root or stack):
        yield None
        return

    span = Span(name=name)
    if stack:
        stack[-1].children.append(span)
    token = _stack.set((*stack, span))
    try:
        yield span
    except BaseException as exc:
        span.close(exc)
        raise
    else:
        span.close()
    finally:
        _stack.reset(token)


def trace_span(name: str) -> AbstractContextManager[Span | None]:
    """Child span of the innermost open span.

    Yields None when tracing is off or no ``@traced`` call is running.
    """
    return _open_span(name, root=False)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record *func* as a span and attach the tree to a returned ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        with _open_span(func.__qualname__, root=True) as span:
            result = func(*args, **kwargs)
        if span is None:
            return result
        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            children=len(span.children),
        )
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
