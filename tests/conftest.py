"""Shared pytest fixtures and test helpers for layerctl tests."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

from layerctl.config.settings import LayerSettings
from layerctl.infrastructure.workspace import Workspace
from layerctl.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_external_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep a developer's LAYERCTL_* environment out of the tests."""
    monkeypatch.delenv("LAYERCTL_CONFIG", raising=False)
    yield
    disable_telemetry()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory; source trees are written beneath it."""
    return tmp_path


@pytest.fixture
def workspace(project_root: Path) -> Workspace:
    """Workspace with default settings rooted at the temp project."""
    settings = LayerSettings.from_cli(project_root=project_root)
    return Workspace(settings)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from inside the temp project.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_tree(root: Path, files: Mapping[str, str]) -> Path:
    """Write ``{relative path: content}`` under *root* and return *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


# users/services -> orders/repositories (one cross-module repository access)
CROSS_REPO_TS: dict[str, str] = {
    "orders/repositories/OrderRepo.ts": "export class OrderRepo {}\n",
    "users/services/UserService.ts": (
        "import { OrderRepo } from '../../orders/repositories/OrderRepo';\n"
        "export class UserService { constructor(private repo: OrderRepo) {} }\n"
    ),
}

# users/services -> orders/services (allowed)
CROSS_SERVICE_TS: dict[str, str] = {
    "orders/services/OrdersService.ts": "export class OrdersService {}\n",
    "users/services/UserService.ts": (
        "import { OrdersService } from '../../orders/services/OrdersService';\n"
        "export class UserService { constructor(private orders: OrdersService) {} }\n"
    ),
}

# A clean Python layout following every rule.
CLEAN_PY: dict[str, str] = {
    "main.py": "from orders.controllers.order_controller import router\n",
    "config/settings.py": "DEBUG = False\n",
    "orders/__init__.py": "",
    "orders/controllers/order_controller.py": (
        "from orders.services.order_service import OrderService\n"
        "from orders.dtos.order_dto import OrderDto\n"
        "router = object()\n"
    ),
    "orders/services/order_service.py": (
        "from orders.repositories.order_repository import OrderRepository\n"
        "from orders.mappers.order_mapper import to_dto\n"
        "from users.services.user_service import UserService\n"
    ),
    "orders/repositories/order_repository.py": "from orders.entities.order import Order\n",
    "orders/entities/order.py": "class Order: ...\n",
    "orders/dtos/order_dto.py": "class OrderDto: ...\n",
    "orders/mappers/order_mapper.py": (
        "from orders.entities.order import Order\n"
        "from orders.dtos.order_dto import OrderDto\n"
        "def to_dto(o): ...\n"
    ),
    "users/services/user_service.py": "class UserService: ...\n",
}
