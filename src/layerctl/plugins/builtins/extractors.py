"""Built-in plugin contributing the Python and JavaScript/TypeScript extractors.

Registered before external plugins are discovered, so an external plugin
claiming the same suffix takes precedence.
"""

from __future__ import annotations

import pluggy

from layerctl.infrastructure.references import JavaScriptExtractor, PythonExtractor
from layerctl.infrastructure.references.base import ReferenceExtractor

hookimpl = pluggy.HookimplMarker("layerctl")


class BuiltinExtractorsPlugin:
    """Supplies the stock import extractors."""

    @hookimpl
    def register_reference_extractors(self) -> list[ReferenceExtractor]:
        return [PythonExtractor(), JavaScriptExtractor()]
