import importlib.util

import pytest
from fastapi import FastAPI

from backend.app.routes_fibonacci import router
from backend.core.sequence_store import SequenceStore, get_sequence_store
from backend.core.settings import Settings, get_settings

HTTPX_AVAILABLE = importlib.util.find_spec("httpx") is not None


@pytest.fixture()
def storage_dir(tmp_path):
    return tmp_path / "storage"


@pytest.fixture()
def store(storage_dir) -> SequenceStore:
    return SequenceStore(storage_dir)


@pytest.fixture()
def settings(storage_dir) -> Settings:
    return Settings(storage_path=str(storage_dir))


@pytest.fixture()
def client(store, settings):
    if not HTTPX_AVAILABLE:
        pytest.skip("httpx is required for API-level tests")

    from fastapi.testclient import TestClient

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_sequence_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)
