from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from dbcontrol.api.deps import get_registry
from dbcontrol.core.registry import DatabaseRegistry
from dbcontrol.engines import DataAccessExecutor
from dbcontrol.main import app


@pytest.fixture
def db_paths(tmp_path) -> dict[str, str]:
    return {
        "main": str(tmp_path / "main.db"),
        "other": str(tmp_path / "other.db"),
    }


@pytest.fixture
def registry(db_paths: dict[str, str]) -> Generator[DatabaseRegistry, None, None]:
    reg = DatabaseRegistry.open_all(db_paths)
    yield reg
    reg.dispose()


@pytest.fixture
def executor(registry: DatabaseRegistry) -> DataAccessExecutor:
    return DataAccessExecutor(registry, default_database="main")


@pytest.fixture
def client(registry: DatabaseRegistry) -> Generator[TestClient, None, None]:
    # No "with": the lifespan (which opens settings.databases) is not run;
    # routes get the temporary registry through the dependency override.
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()
