import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeonpath import create_app  # noqa: E402
from dungeonpath.dungeon import Dungeon, DungeonConfig  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_generation_logs(monkeypatch):
    """Keep per-dungeon info lines out of captured output unless a test opts back in."""
    monkeypatch.setenv("DUNGEONPATH_LOG_LEVEL", "warn")
    monkeypatch.delenv("DUNGEONPATH_LOG_JSON", raising=False)
    yield


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    from dungeonpath.routes.dungeon_api import _dungeon_cache, _dungeon_cache_lock

    with _dungeon_cache_lock:
        _dungeon_cache.clear()
    yield


@pytest.fixture()
def make_dungeon():
    """Factory: make_dungeon(seed, blocked=(), **config_fields) -> Dungeon."""

    def _make(seed=12345, blocked=(), **fields):
        return Dungeon(DungeonConfig(**fields), seed=seed, blocked=blocked)

    return _make
