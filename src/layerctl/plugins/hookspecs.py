"""Pluggy hook specifications for layerctl.

One setup-time hook lets plugins contribute reference extractors for
additional languages. Two lifecycle hooks fire after validate and
scaffold complete.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from layerctl.infrastructure.references.base import ReferenceExtractor

hookspec = pluggy.HookspecMarker("layerctl")


class LayerctlHookSpec:
    """Hook specifications for the layerctl plugin system."""

    @hookspec
    def register_reference_extractors(self) -> list[ReferenceExtractor] | None:
        """Return extractors to use, keyed internally by their ``suffixes``."""

    @hookspec
    def post_validate(
        self,
        root: str,
        units_scanned: int,
        violations_found: int,
    ) -> None:
        """Called after a validate run."""

    @hookspec
    def post_scaffold(
        self,
        root: str,
        module: str,
        created: list[str],
    ) -> None:
        """Called after a module is scaffolded."""
