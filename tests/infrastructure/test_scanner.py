"""Tests for ProjectScanner — traversal, classification, and errors."""

from __future__ import annotations

import os
import random
from collections import Counter
from pathlib import Path

import pytest

from layerctl.config.models import ScanConfig
from layerctl.domain.errors import ScanError
from layerctl.domain.types import Layer
from layerctl.infrastructure.scanner import ProjectScanner
from tests.conftest import CLEAN_PY, write_tree


class TestScan:
    def test_units_sorted_and_classified(self, tmp_path: Path) -> None:
        write_tree(tmp_path, CLEAN_PY)
        result = ProjectScanner().scan(tmp_path)

        triples = [(u.module, str(u.layer), u.unit_id) for u in result.units]
        assert triples == sorted(triples)
        assert ("orders", "controller", "orders/controllers/order_controller.py") in triples
        assert ("users", "service", "users/services/user_service.py") in triples
        assert result.modules == ["orders", "users"]

    def test_shared_files(self, tmp_path: Path) -> None:
        write_tree(tmp_path, CLEAN_PY)
        result = ProjectScanner().scan(tmp_path)
        assert result.shared == ("config/settings.py", "main.py")

    def test_unclassified_reported(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"orders/handlers/h.py": "", "orders/services/s.py": ""})
        result = ProjectScanner().scan(tmp_path)
        assert [u.unit_id for u in result.unclassified] == ["orders/handlers/h.py"]
        assert result.unclassified[0].layer is Layer.UNCLASSIFIED

    def test_non_source_files_ignored(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"orders/services/README.md": "", "orders/services/s.ts": ""})
        result = ProjectScanner().scan(tmp_path)
        assert [u.unit_id for u in result.units] == ["orders/services/s.ts"]

    def test_hidden_and_excluded_dirs_skipped(self, tmp_path: Path) -> None:
        write_tree(
            tmp_path,
            {
                ".git/hooks/x.py": "",
                "node_modules/lib/services/x.js": "",
                "orders/services/__pycache__/s.py": "",
                "orders/services/s.py": "",
            },
        )
        result = ProjectScanner().scan(tmp_path)
        assert [u.unit_id for u in result.units] == ["orders/services/s.py"]

    def test_custom_suffixes(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"orders/services/s.go": "", "orders/services/s.py": ""})
        result = ProjectScanner(ScanConfig(suffixes=[".go"])).scan(tmp_path)
        assert [u.unit_id for u in result.units] == ["orders/services/s.go"]

    def test_layer_alias_config(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"orders/handlers/h.py": ""})
        result = ProjectScanner(ScanConfig(layer_aliases={"handlers": "controller"})).scan(tmp_path)
        assert result.units[0].layer is Layer.CONTROLLER

    def test_unit_path_is_absolute(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"orders/services/s.py": ""})
        unit = ProjectScanner().scan(tmp_path).units[0]
        assert Path(unit.path).is_absolute()
        assert Path(unit.path).is_file()

    def test_parallel_matches_sequential(self, tmp_path: Path) -> None:
        files = {f"m{i}/services/s{j}.py": "" for i in range(6) for j in range(3)}
        files.update({f"m{i}/entities/e.py": "" for i in range(6)})
        write_tree(tmp_path, files)
        sequential = ProjectScanner().scan(tmp_path)
        parallel = ProjectScanner(ScanConfig(workers=4)).scan(tmp_path)
        assert parallel == sequential


class TestOrderIndependence:
    def test_creation_order_does_not_matter(self, tmp_path: Path) -> None:
        files = dict(CLEAN_PY)
        items = list(files.items())
        baseline_root = write_tree(tmp_path / "a", dict(items))

        random.Random(7).shuffle(items)
        shuffled_root = write_tree(tmp_path / "b", dict(items))

        def multiset(root: Path) -> Counter[tuple[str, Layer]]:
            return Counter((u.module, u.layer) for u in ProjectScanner().scan(root).units)

        assert multiset(baseline_root) == multiset(shuffled_root)

    def test_scandir_order_does_not_matter(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_tree(tmp_path, CLEAN_PY)
        baseline = ProjectScanner().scan(tmp_path)

        real_walk = os.walk

        def reversed_walk(top, *args, **kwargs):  # type: ignore[no-untyped-def]
            for dirpath, dirnames, filenames in real_walk(top, *args, **kwargs):
                yield dirpath, dirnames, list(reversed(filenames))

        monkeypatch.setattr("layerctl.infrastructure.scanner.os.walk", reversed_walk)
        assert ProjectScanner().scan(tmp_path) == baseline


class TestScanErrors:
    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError, match="does not exist") as exc_info:
            ProjectScanner().scan(tmp_path / "nope")
        assert exc_info.value.code == "SCAN_ERROR"

    def test_root_is_file(self, tmp_path: Path) -> None:
        f = tmp_path / "file.py"
        f.write_text("")
        with pytest.raises(ScanError, match="not a directory"):
            ProjectScanner().scan(f)

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permissions"
    )
    def test_unreadable_subdirectory(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"orders/services/s.py": ""})
        locked = tmp_path / "orders" / "services"
        locked.chmod(0)
        try:
            with pytest.raises(ScanError, match="Cannot read"):
                ProjectScanner().scan(tmp_path)
        finally:
            locked.chmod(0o755)

    def test_walk_permission_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_tree(tmp_path, {"orders/services/s.py": ""})

        def denied_walk(top, onerror=None, **kwargs):
            onerror(PermissionError(13, "Permission denied", str(top)))
            return iter(())

        monkeypatch.setattr("layerctl.infrastructure.scanner.os.walk", denied_walk)
        with pytest.raises(ScanError, match="Cannot read .*orders: Permission denied"):
            ProjectScanner().scan(tmp_path)

    def test_top_level_permission_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def denied_scandir(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("layerctl.infrastructure.scanner.os.scandir", denied_scandir)
        with pytest.raises(ScanError, match="Cannot read") as exc_info:
            ProjectScanner().scan(tmp_path)
        assert exc_info.value.path == str(tmp_path.resolve())

    def test_root_not_readable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("layerctl.infrastructure.scanner.os.access", lambda *a, **k: False)
        with pytest.raises(ScanError, match="not readable"):
            ProjectScanner().scan(tmp_path)
