"""Layering rules and the rule checker.

The rule table is fixed. :func:`violation_reason` walks it top-down and
returns the first matching reason code; :func:`allowed_edge` is the
boolean view of the same table. :func:`check_edges` evaluates every edge
(never short-circuiting) and returns violations in a stable order.
"""

from __future__ import annotations

from collections.abc import Iterable

from layerctl.domain.models import DependencyEdge, Violation
from layerctl.domain.types import Layer

# Reason codes.
CROSS_MODULE_REPOSITORY = "cross-module-repository-access"
CROSS_MODULE_ENTITY = "cross-module-entity-access"
CONTROLLER_CROSS_MODULE = "controller-cross-module-access"
REPOSITORY_OUTSIDE_SERVICE = "repository-access-outside-service"
ENTITY_LEAKAGE = "entity-leakage"
CONTROLLER_LAYER_BYPASS = "controller-layer-bypass"

# Layers another module may reference directly.
_PUBLIC_LAYERS = frozenset({Layer.SERVICE, Layer.DTO})


def cross_module_reason(target_layer: Layer) -> str:
    """Generic reason for reaching into another module's private layer."""
    return f"cross-module-{target_layer}-access"


def violation_reason(source_layer: Layer, target_layer: Layer, same_module: bool) -> str | None:
    """Return the reason code an edge breaks, or None when it is allowed."""
    if not same_module:
        if target_layer is Layer.REPOSITORY:
            return CROSS_MODULE_REPOSITORY
        if target_layer is Layer.ENTITY:
            return CROSS_MODULE_ENTITY
        if source_layer is Layer.CONTROLLER:
            return CONTROLLER_CROSS_MODULE
        if target_layer in _PUBLIC_LAYERS:
            return None
        if Layer.UNCLASSIFIED in (source_layer, target_layer):
            return None
        return cross_module_reason(target_layer)

    if source_layer is target_layer:
        return None
    if Layer.UNCLASSIFIED in (source_layer, target_layer):
        return None
    if target_layer is Layer.REPOSITORY and source_layer is not Layer.SERVICE:
        return REPOSITORY_OUTSIDE_SERVICE
    if source_layer is Layer.CONTROLLER:
        if target_layer is Layer.ENTITY:
            return ENTITY_LEAKAGE
        if target_layer is Layer.MAPPER:
            return CONTROLLER_LAYER_BYPASS
    return None


def allowed_edge(source_layer: Layer, target_layer: Layer, same_module: bool) -> bool:
    """Whether a reference from *source_layer* to *target_layer* is permitted."""
    return violation_reason(source_layer, target_layer, same_module) is None


def check_edges(edges: Iterable[DependencyEdge]) -> list[Violation]:
    """Evaluate every edge; return violations sorted by source, then target."""
    violations: list[Violation] = []
    for edge in edges:
        reason = violation_reason(edge.source_layer, edge.target_layer, edge.same_module)
        if reason is not None:
            violations.append(Violation(edge=edge, reason=reason))
    violations.sort(key=lambda v: v.sort_key)
    return violations
