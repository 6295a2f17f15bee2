"""ScaffoldService — create a module with the canonical layer folders."""

from __future__ import annotations

from pathlib import Path

import jinja2

from layerctl.domain.errors import ScaffoldError
from layerctl.domain.types import CANONICAL_FOLDERS, LAYER_FOLDERS
from layerctl.infrastructure.scaffold import scaffold_module
from layerctl.infrastructure.templates import override_dir
from layerctl.services.base import BaseService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import traced

# What each layer folder may reference, for the generated README.
_LAYER_NOTES: dict[str, str] = {
    "controllers": "own services, dtos, utils",
    "services": "own repositories, entities, mappers; any module's services and dtos",
    "repositories": "own entities",
    "entities": "nothing outside this module",
    "dtos": "plain data only",
    "mappers": "own entities and dtos",
    "utils": "nothing outside this module",
}


class ScaffoldService(BaseService):
    """Scaffolds modules; safe to re-run on an existing module."""

    @traced
    def scaffold(
        self,
        root: Path,
        module: str,
        *,
        readme: bool | None = None,
        init_files: bool | None = None,
    ) -> ServiceResult:
        """Create ``root/module`` and its layer folders.

        *readme* and *init_files* default to the ``[scaffold]`` config.
        """
        cfg = self._workspace.settings.scaffold
        scan_cfg = self._workspace.settings.scan
        want_readme = cfg.readme if readme is None else readme
        want_init = cfg.init_files if init_files is None else init_files

        try:
            files = self._render_files(root, module, readme=want_readme, init_files=want_init)
            report = scaffold_module(
                root,
                module,
                folders=CANONICAL_FOLDERS,
                files=files,
                reserved=scan_cfg.reserved,
                entry_points=scan_cfg.entry_points,
            )
        except ScaffoldError as exc:
            return ServiceResult.failure("scaffold", exc)

        warnings: list[str] = []
        self._dispatch_event(
            "post_scaffold",
            {"root": str(root), "module": module, "created": list(report.created)},
            warnings,
        )
        return ServiceResult(ok=True, op="scaffold", data=report.to_dict(), warnings=warnings)

    def _render_files(
        self, root: Path, module: str, *, readme: bool, init_files: bool
    ) -> dict[str, str]:
        if not (readme or init_files):
            return {}
        try:
            return self._render_templates(root, module, readme=readme, init_files=init_files)
        except jinja2.TemplateError as exc:
            raise ScaffoldError(
                f"Cannot render scaffold template: {exc}", path=override_dir(root, "scaffold")
            ) from exc

    def _render_templates(
        self, root: Path, module: str, *, readme: bool, init_files: bool
    ) -> dict[str, str]:
        env = self._workspace.templates("scaffold", target_root=root)
        files: dict[str, str] = {}
        if readme:
            layers = [(f, str(LAYER_FOLDERS[f]), _LAYER_NOTES[f]) for f in CANONICAL_FOLDERS]
            files["README.md"] = env.get_template("module_readme.md.j2").render(
                module=module, layers=layers
            )
        if init_files:
            init_tpl = env.get_template("package_init.py.j2")
            files["__init__.py"] = init_tpl.render(module=module, layer=None)
            for folder in CANONICAL_FOLDERS:
                files[f"{folder}/__init__.py"] = init_tpl.render(
                    module=module, layer=str(LAYER_FOLDERS[folder])
                )
        return files
