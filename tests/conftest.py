"""Pytest configuration and fixtures."""

import importlib
import os
import tempfile

# read once when plotTwist.settings is first imported
os.environ["TMDB_MIN_DELAY"] = "0"
os.environ.setdefault("PLOTTWIST_DATA_DIR", tempfile.mkdtemp(prefix="plottwist-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from plotTwist import settings
from plotTwist.catalog.api_clients.tmdb_client import TMDBClient
from plotTwist.catalog.service import CatalogService
from plotTwist.storage import local_db
from plotTwist.storage.watchlist import Watchlist

from tests.helpers import FakeTMDB, ManualFetch, StubClient

# the package re-exports the `client` singleton as `tmdb_client`, shadowing the submodule
tmdb_module = importlib.import_module("plotTwist.catalog.api_clients.tmdb_client")


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Every test gets its own SQLite file and debug log."""
    monkeypatch.setattr(settings, "DATABASE_PATH", tmp_path / "plottwist.sqlite")
    monkeypatch.setattr(settings, "LOG_PATH", tmp_path / "plottwist_debug.log")
    try:
        yield tmp_path
    finally:
        local_db.close()


@pytest.fixture
def fake_tmdb(monkeypatch):
    fake = FakeTMDB()
    monkeypatch.setattr(tmdb_module.requests, "get", fake.get)
    return fake


@pytest.fixture
def client(fake_tmdb):
    return TMDBClient(api_key="test-key")


# ── widgets ─────────────────────────────────────────────────────────────────
@pytest.fixture
def manual_fetch(monkeypatch):
    """Pages record their background fetches instead of starting threads."""
    fetch = ManualFetch()
    for module in ("home_page", "browse_page", "details_page", "search_dialog"):
        monkeypatch.setattr(f"plotTwist.gui.{module}.start_fetch", fetch)
    return fetch


@pytest.fixture
def catalog():
    return CatalogService(client=StubClient())


@pytest.fixture
def watchlist():
    return Watchlist()
