"""Main window wiring: history, account action, watchlist fan-out, poster cache."""

import pytest
from PySide6.QtGui import QPixmap

from plotTwist.settings import HISTORY_LIMIT
from plotTwist.catalog.core.models import CatalogItem
from plotTwist.storage.auth import AuthService
from plotTwist.gui.controller import ImageCache
from plotTwist.gui.main_window import DETAILS, HOME, MainWindow, MOVIES


@pytest.fixture
def auth():
    return AuthService()


@pytest.fixture
def window(qtbot, catalog, watchlist, auth, manual_fetch):
    win = MainWindow(service=catalog, watchlist=watchlist, auth=auth)
    qtbot.addWidget(win)
    return win


def test_starts_on_home_and_loads_it_once(window, manual_fetch):
    assert window.pages.currentIndex() == HOME
    assert manual_fetch.labels() == ["home"]
    window.nav_list.setCurrentRow(MOVIES)
    window.nav_list.setCurrentRow(HOME)
    assert len(manual_fetch.jobs) == 2            # home + movies, home not refetched


def test_back_returns_to_previous_page(window):
    window.nav_list.setCurrentRow(MOVIES)
    window.open_item(CatalogItem(id=7, title="Movie 7"))
    assert window.pages.currentIndex() == DETAILS
    assert window.back_act.isEnabled()

    window.go_back()
    assert window.pages.currentIndex() == MOVIES
    assert window.nav_list.currentRow() == MOVIES


def test_history_is_capped(window):
    for n in range(HISTORY_LIMIT + 25):
        window.open_item(CatalogItem(id=n, title=f"Movie {n}"))
    assert len(window._history) == HISTORY_LIMIT
    assert window._history[-1][1].id == HISTORY_LIMIT + 24

    window.go_back()
    assert window.details_page._item.id == HISTORY_LIMIT + 23


def test_signed_in_updates_account_action(window, auth):
    assert window.account_act.text() == "Sign In"
    auth.sign_up("trinity@matrix.io", "whiterabbit", "trinity")
    user = auth.sign_in("trinity@matrix.io", "whiterabbit")
    window._on_signed_in(user)
    assert window.account_act.text() == "trinity"


def test_watchlist_changes_reach_the_list_page(window, watchlist):
    watchlist.add(CatalogItem(id=1, title="Alien"))
    watchlist.add(CatalogItem(id=2, title="Dark", media_type="tv"))
    buttons = window.watchlist_page._filter_btns
    assert buttons["all"].text() == "All (2)"
    assert buttons["tv"].text() == "TV Shows (1)"


# ── poster cache ─────────────────────────────────────────────────────────────
@pytest.fixture
def cache(qapp):
    c = ImageCache(max_workers=1, max_size=2)
    yield c
    c.shutdown()


def test_image_cache_drops_least_recently_used(cache):
    for url in ("a", "b"):
        cache._remember(url, QPixmap(1, 1))
    got = []
    cache.get("a", got.append)                    # "a" is now the newest
    cache._remember("c", QPixmap(1, 1))

    assert cache.size == 2
    assert len(got) == 1
    assert "b" not in cache._pixmaps
    assert list(cache._pixmaps) == ["a", "c"]


def test_image_cache_ignores_missing_url(cache):
    got = []
    cache.get(None, got.append)
    cache.get("", got.append)
    assert got == []
    assert cache._waiting == {}
