"""Jinja2 environments for generated files.

Packaged templates live in ``layerctl/templates/<group>/``. A project can
shadow any of them by placing a file of the same name in
``.layerctl/templates/<group>/`` under its root.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)

OVERRIDE_DIR = Path(".layerctl") / "templates"


def override_dir(root: Path, group: str) -> Path:
    """Where a project under *root* keeps its overrides for *group*."""
    return root / OVERRIDE_DIR / group


def build_template_environment(group: str, *, override_root: Path | None = None) -> Environment:
    """Environment for *group*, consulting *override_root*'s overrides first."""
    search: list[BaseLoader] = []
    if override_root is not None:
        local = override_dir(override_root, group)
        if local.is_dir():
            search.append(FileSystemLoader(str(local)))
    search.append(PackageLoader("layerctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(search),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
