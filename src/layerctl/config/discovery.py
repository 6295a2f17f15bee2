"""Locating ``layerctl.toml``.

``LAYERCTL_CONFIG`` names a file explicitly. Otherwise the nearest
``layerctl.toml`` in the start directory or any of its parents is used,
the way git finds ``.git``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "layerctl.toml"
CONFIG_ENV_VAR = "LAYERCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    A ``LAYERCTL_CONFIG`` that points at a missing file disables discovery.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
