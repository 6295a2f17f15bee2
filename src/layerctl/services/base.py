"""BaseService — shared foundation for layerctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides settings, the scanner, extractors, and plugins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from layerctl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ScanService(BaseService):
            def scan(self, root: Path) -> ServiceResult:
                result = self._workspace.scanner().scan(root)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Fire a lifecycle hook on all plugins.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        try:
            self._workspace.plugins.dispatch(hook_name, **payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
