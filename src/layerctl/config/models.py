"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, layerctl.toml only contains
overrides. A project needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from layerctl.domain.types import DEFAULT_ENTRY_POINTS, DEFAULT_RESERVED, Layer


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    reserved: list[str] = Field(default_factory=lambda: list(DEFAULT_RESERVED))
    entry_points: list[str] = Field(default_factory=lambda: list(DEFAULT_ENTRY_POINTS))
    exclude: list[str] = Field(
        default_factory=lambda: ["node_modules", "__pycache__", ".venv", "venv", "dist", "build"]
    )
    suffixes: list[str] = Field(
        default_factory=lambda: [".py", ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"]
    )
    layer_aliases: dict[str, str] = Field(default_factory=dict)
    workers: int = Field(default=1, ge=1)

    @field_validator("layer_aliases")
    @classmethod
    def _known_layers(cls, value: dict[str, str]) -> dict[str, str]:
        known = {str(layer) for layer in Layer}
        for folder, layer in value.items():
            if layer not in known:
                msg = f"layer alias {folder!r} -> {layer!r} is not one of {sorted(known)}"
                raise ValueError(msg)
        return value


class ScaffoldConfig(BaseModel):
    """[scaffold] section."""

    model_config = {"frozen": True}

    readme: bool = True
    init_files: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section. ``enabled = false`` keeps only the built-in extractors."""

    model_config = {"frozen": True}

    enabled: bool = True
    entry_points: bool = True
    local_dir: str = ".layerctl/plugins"

