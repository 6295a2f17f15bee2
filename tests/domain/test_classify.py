"""Tests for unit classification."""

from __future__ import annotations

import pytest

from layerctl.domain.classify import SHARED, build_layer_table, classify, is_module_name
from layerctl.domain.types import LAYER_FOLDERS, Layer


class TestClassify:
    @pytest.mark.parametrize(("folder", "layer"), list(LAYER_FOLDERS.items()))
    def test_layer_folders(self, folder: str, layer: Layer) -> None:
        result = classify(f"orders/{folder}/thing.py")
        assert result.module == "orders"
        assert result.layer is layer

    def test_unmapped_parent_is_unclassified(self) -> None:
        result = classify("orders/handlers/thing.ts")
        assert result.module == "orders"
        assert result.layer is Layer.UNCLASSIFIED

    def test_immediate_parent_decides(self) -> None:
        assert classify("orders/services/internal/helper.py").layer is Layer.UNCLASSIFIED
        assert classify("orders/internal/services/helper.py").layer is Layer.SERVICE

    def test_file_in_module_root_is_unclassified(self) -> None:
        result = classify("orders/orders.module.ts")
        assert result.module == "orders"
        assert result.layer is Layer.UNCLASSIFIED

    def test_root_file_is_shared(self) -> None:
        assert classify("main.py") is SHARED

    @pytest.mark.parametrize("top", ["config", "exceptions", "utils"])
    def test_reserved_folders_are_shared(self, top: str) -> None:
        assert classify(f"{top}/services/x.py") is SHARED

    def test_entry_point_folder_is_shared(self) -> None:
        assert classify("main/services/x.py") is SHARED

    def test_custom_reserved(self) -> None:
        result = classify("shared/services/x.py", reserved=["shared"])
        assert result is SHARED
        assert classify("config/services/x.py", reserved=["shared"]).module == "config"

    def test_layer_aliases(self) -> None:
        table = build_layer_table({"handlers": "controller"})
        assert classify("orders/handlers/x.py", layer_table=table).layer is Layer.CONTROLLER

    def test_unknown_alias_layer_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown layer"):
            build_layer_table({"handlers": "handler"})


class TestIsModuleName:
    def test_regular(self) -> None:
        assert is_module_name("orders")

    def test_reserved(self) -> None:
        assert not is_module_name("config")
        assert not is_module_name("index")
