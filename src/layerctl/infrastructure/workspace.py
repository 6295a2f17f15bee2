"""Workspace — settings, plugins, and the infrastructure services share.

Constructed once at CLI startup from :class:`LayerSettings` and stored
on the Click context. Services receive the Workspace via their
:class:`BaseService` constructor. Plugins load lazily on first use so
``--help`` and ``--version`` never import plugin code.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from layerctl.infrastructure.references.base import ReferenceExtractor, extractor_table
from layerctl.infrastructure.scanner import ProjectScanner
from layerctl.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from layerctl.config.settings import LayerSettings
    from layerctl.plugins.manager import PluginManager


class Workspace:
    """Shared access to configuration, the plugin manager, and the scanner."""

    def __init__(self, settings: LayerSettings) -> None:
        self._settings = settings
        self._plugins: PluginManager | None = None

    @property
    def settings(self) -> LayerSettings:
        return self._settings

    @property
    def project_root(self) -> Path:
        """Directory holding ``layerctl.toml`` (or the working directory)."""
        return self._settings.project_root

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (built and discovered on first access)."""
        if self._plugins is None:
            self._plugins = self._load_plugins()
        return self._plugins

    def _load_plugins(self) -> PluginManager:
        from layerctl.plugins.builtins.extractors import BuiltinExtractorsPlugin
        from layerctl.plugins.manager import PluginManager

        cfg = self._settings.plugins
        pm = PluginManager()
        pm.register_plugin(BuiltinExtractorsPlugin(), name="extractors-builtin")
        if not cfg.enabled:
            return pm

        local_dir = Path(cfg.local_dir)
        if not local_dir.is_absolute():
            local_dir = self.project_root / local_dir
        pm.discover_and_load(entry_points=cfg.entry_points, local_dir=local_dir)
        return pm

    def scanner(self) -> ProjectScanner:
        return ProjectScanner(self._settings.scan)

    def extractors(self) -> dict[str, ReferenceExtractor]:
        """File suffix -> extractor, plugins taking precedence over built-ins."""
        return extractor_table(self.plugins.collect_extractors())

    def templates(self, group: str, *, target_root: Path | None = None) -> Environment:
        """Jinja2 environment reading overrides from *target_root* (default: project root)."""
        return build_template_environment(group, override_root=target_root or self.project_root)
