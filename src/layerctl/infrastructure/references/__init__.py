"""Static reference extraction — which units a unit imports.

A reference is an import statement that resolves to another scanned unit.
Extractors are language-specific and are contributed through the
``register_reference_extractors`` plugin hook.
"""

from layerctl.infrastructure.references.base import (
    ReferenceExtractor,
    UnitIndex,
    collect_references,
)
from layerctl.infrastructure.references.javascript import JavaScriptExtractor
from layerctl.infrastructure.references.python import PythonExtractor

__all__ = [
    "JavaScriptExtractor",
    "PythonExtractor",
    "ReferenceExtractor",
    "UnitIndex",
    "collect_references",
]
