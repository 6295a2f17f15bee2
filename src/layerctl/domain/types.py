"""Layer enum, folder name table, and canonical scaffold layout."""

from __future__ import annotations

from enum import StrEnum


class Layer(StrEnum):
    """Horizontal responsibility bands within a module."""

    CONTROLLER = "controller"
    SERVICE = "service"
    REPOSITORY = "repository"
    ENTITY = "entity"
    DTO = "dto"
    MAPPER = "mapper"
    UTIL = "util"
    UNCLASSIFIED = "unclassified"


# Folder name -> layer. Also the canonical scaffold layout (insertion order).
LAYER_FOLDERS: dict[str, Layer] = {
    "controllers": Layer.CONTROLLER,
    "services": Layer.SERVICE,
    "repositories": Layer.REPOSITORY,
    "entities": Layer.ENTITY,
    "dtos": Layer.DTO,
    "mappers": Layer.MAPPER,
    "utils": Layer.UTIL,
}

CANONICAL_FOLDERS: tuple[str, ...] = tuple(LAYER_FOLDERS)

DEFAULT_RESERVED: tuple[str, ...] = ("config", "exceptions", "utils")
DEFAULT_ENTRY_POINTS: tuple[str, ...] = ("main", "app", "index", "server")
