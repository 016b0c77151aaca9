from __future__ import annotations

import dataclasses
import importlib
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

STORE_ENV_VARS = (
    "LOCAL_BASE_URL",
    "STORE_PATH",
    "STORE_DATA_FILE",
    "SYNC_API_ENDPOINT",
    "SYNC_INTERVAL_SECONDS",
    "SYNC_FALLBACK_TO_LOCAL",
    "SYNC_LOCAL_STORAGE_FILE",
    "SYNC_HTTP_TIMEOUT",
    "DEBUG_LOG_REQUESTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in STORE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    def _data_dir() -> Path:
        p = tmp_path / "data"
        p.mkdir(parents=True, exist_ok=True)
        return p

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.setattr(paths, "data_dir", _data_dir)
    return tmp_path


@pytest.fixture
def reload_endpoints(sandbox_project: Path) -> None:
    """
    Endpoints create repo singletons at import time; reload after sandboxing paths.
    """
    import endpoints.store_endpoints as store_endpoints

    importlib.reload(store_endpoints)


@pytest.fixture
def store_file(sandbox_project: Path) -> Path:
    return sandbox_project / "data" / "shared-data.json"


@pytest.fixture
def app(reload_endpoints):
    import app as app_module

    return app_module.create_app()


@pytest.fixture
def client_settings():
    """Settings for a SharedStateClient pointed at the in-process test server."""
    from settings import get_settings

    return dataclasses.replace(
        get_settings(),
        sync_api_endpoint="http://testserver/api/shared-data",
        sync_interval_seconds=0.01,
    )
