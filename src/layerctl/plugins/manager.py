"""Plugin discovery, loading, and hook dispatch.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.layerctl/plugins/``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

import pluggy

from layerctl.plugins.hookspecs import LayerctlHookSpec

if TYPE_CHECKING:
    from layerctl.infrastructure.references.base import ReferenceExtractor

PROJECT_NAME = "layerctl"
ENTRY_POINT_GROUP = "layerctl.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LayerctlHookSpec)
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        entry_points: bool = True,
        local_dir: Path | None = None,
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of registered plugin names.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        return sorted(
            self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()
        )

    def dispatch(self, hook_name: str, **payload: Any) -> list[Any]:
        """Call *hook_name* on every plugin implementing it."""
        caller = getattr(self._pm.hook, hook_name)
        return list(caller(**payload))

    # ------------------------------------------------------------------
    # Extractors
    # ------------------------------------------------------------------

    def collect_extractors(self) -> list[ReferenceExtractor]:
        """Gather extractors from all plugins, most recently registered first.

        A plugin that raises or returns a non-list is skipped with a warning.
        """
        from layerctl.infrastructure.references.base import ReferenceExtractor

        collected: list[ReferenceExtractor] = []
        for impl in self._pm.hook.register_reference_extractors.get_hookimpls()[::-1]:
            try:
                result = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect reference extractors from plugin %s",
                    impl.plugin_name,
                    exc_info=True,
                )
                continue
            if result is None:
                continue
            if not isinstance(result, list):
                logger.warning(
                    "Plugin %s returned non-list reference extractors", impl.plugin_name
                )
                continue
            for extractor in result:
                if isinstance(extractor, ReferenceExtractor):
                    collected.append(extractor)
                else:
                    logger.warning(
                        "Skipping invalid extractor %r from plugin %s",
                        extractor,
                        impl.plugin_name,
                    )
        return collected

    # ------------------------------------------------------------------
    # Discovery helpers
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Register hook classes from ``*.py`` files in *local_dir*.

        ``_``-prefixed files are skipped. A file that fails to import, or a
        class that fails to instantiate, is logged and left out.
        """
        if not local_dir.is_dir():
            return
        for py_file in sorted(local_dir.glob("[!_]*.py")):
            module = _import_file(py_file, f"layerctl_local_plugin_{py_file.stem}")
            if module is None:
                continue
            for cls in _hook_classes(module):
                name = f"{module.__name__}.{cls.__name__}"
                try:
                    self.register_plugin(cls(), name=name)
                except Exception:
                    logger.warning("Could not instantiate local plugin %s", name, exc_info=True)

    def _normalize_plugin_instances(self) -> None:
        """Swap entry-point plugins registered as classes for instances.

        Hooks on a bare class would be called with ``self`` unbound.
        """
        for plugin in self._pm.get_plugins():
            if not (inspect.isclass(plugin) and _has_hook_impls(plugin)):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)
            except Exception:
                logger.warning("Could not instantiate entry-point plugin %s", name, exc_info=True)


def _import_file(path: Path, module_name: str) -> ModuleType | None:
    """Import *path* as *module_name*; None (logged) if it fails."""
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import local plugin %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        logger.warning("Local plugin %s failed to import", path, exc_info=True)
        return None
    return module


def _hook_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* (not imported into it) that implement hooks."""
    return [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__ and _has_hook_impls(obj)
    ]


def _has_hook_impls(cls: type) -> bool:
    """Whether any public attribute of *cls* carries the ``layerctl_impl`` marker."""
    return any(
        callable(member) and getattr(member, "layerctl_impl", None)
        for name, member in inspect.getmembers(cls)
        if not name.startswith("_")
    )
