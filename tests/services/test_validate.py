"""Tests for ValidateService — rule evaluation over a real tree."""

from __future__ import annotations

from pathlib import Path

from layerctl.infrastructure.workspace import Workspace
from layerctl.services.telemetry import enable_telemetry
from layerctl.services.validate import ValidateService
from tests.conftest import CLEAN_PY, CROSS_REPO_TS, CROSS_SERVICE_TS, write_tree


class TestValidateService:
    def test_cross_module_repository_access(
        self, workspace: Workspace, project_root: Path
    ) -> None:
        write_tree(project_root, CROSS_REPO_TS)
        result = ValidateService(workspace).validate(project_root)
        assert result.ok
        assert result.data["lines"] == [
            "users/service -> orders/repository: cross-module-repository-access"
        ]
        assert result.data["count"] == 1
        assert result.data["clean"] is False
        violation = result.data["violations"][0]
        assert violation["provenance"] == [
            ["users/services/UserService.ts", "orders/repositories/OrderRepo.ts"]
        ]

    def test_cross_module_service_access_is_clean(
        self, workspace: Workspace, project_root: Path
    ) -> None:
        write_tree(project_root, CROSS_SERVICE_TS)
        result = ValidateService(workspace).validate(project_root)
        assert result.ok
        assert result.data["violations"] == []
        assert result.data["edges"] == 1
        assert result.data["clean"] is True

    def test_clean_python_tree(self, workspace: Workspace, project_root: Path) -> None:
        write_tree(project_root, CLEAN_PY)
        result = ValidateService(workspace).validate(project_root)
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["edges"] == 8
        assert result.data["modules"] == ["orders", "users"]
        assert result.data["unclassified"] == ["orders/__init__.py"]
        assert "Unclassified unit: orders/__init__.py" in result.warnings

    def test_every_violation_reported(self, workspace: Workspace, project_root: Path) -> None:
        write_tree(
            project_root,
            {
                **CROSS_REPO_TS,
                "orders/entities/Order.ts": "export class Order {}\n",
                "orders/dtos/OrderDto.ts": "export class OrderDto {}\n",
                "orders/mappers/OrderMapper.ts": "export const m = 1;\n",
                "orders/controllers/OrderController.ts": (
                    "import { Order } from '../entities/Order';\n"
                    "import { m } from '../mappers/OrderMapper';\n"
                    "import { OrderRepo } from '../repositories/OrderRepo';\n"
                    "import { OrderDto } from '../dtos/OrderDto';\n"
                ),
                "users/controllers/UserController.ts": (
                    "import { Order } from '../../orders/entities/Order';\n"
                ),
            },
        )
        result = ValidateService(workspace).validate(project_root)
        assert result.data["lines"] == [
            "orders/controller -> orders/entity: entity-leakage",
            "orders/controller -> orders/mapper: controller-layer-bypass",
            "orders/controller -> orders/repository: repository-access-outside-service",
            "users/controller -> orders/entity: cross-module-entity-access",
            "users/service -> orders/repository: cross-module-repository-access",
        ]
        assert result.data["by_reason"]["entity-leakage"] == 1
        assert result.data["count"] == 5

    def test_missing_root_fails(self, workspace: Workspace, project_root: Path) -> None:
        result = ValidateService(workspace).validate(project_root / "missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SCAN_ERROR"
        assert "does not exist" in result.error.message

    def test_unparseable_file_is_warning(self, workspace: Workspace, project_root: Path) -> None:
        write_tree(project_root, {"orders/services/bad.py": "def (:\n"})
        result = ValidateService(workspace).validate(project_root)
        assert result.ok
        assert any("Could not parse orders/services/bad.py" in w for w in result.warnings)

    def test_telemetry_attached_when_enabled(
        self, workspace: Workspace, project_root: Path
    ) -> None:
        write_tree(project_root, CROSS_SERVICE_TS)
        enable_telemetry()
        result = ValidateService(workspace).validate(project_root)
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "ValidateService.validate"
        assert [c["name"] for c in tree["children"]] == ["scan", "references", "graph", "check"]

    def test_no_telemetry_by_default(self, workspace: Workspace, project_root: Path) -> None:
        write_tree(project_root, CROSS_SERVICE_TS)
        result = ValidateService(workspace).validate(project_root)
        assert result.meta is None
