from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from tictactoe.api.deps import get_registry
from tictactoe.game_store import SessionRegistry
from tictactoe.main import app


@pytest.fixture()
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture()
def client_and_registry(registry: SessionRegistry) -> Generator[tuple[TestClient, SessionRegistry], None, None]:
    """FastAPI TestClient wired to a fresh, per-test registry."""

    def _override() -> SessionRegistry:
        return registry

    app.dependency_overrides[get_registry] = _override
    with TestClient(app) as c:
        yield c, registry
    app.dependency_overrides.clear()


@pytest.fixture()
def client(client_and_registry: tuple[TestClient, SessionRegistry]) -> TestClient:
    return client_and_registry[0]
