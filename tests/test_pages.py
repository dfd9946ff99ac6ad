"""Cards, rows and pages driven headlessly through pytest-qt."""

import pytest
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QMessageBox

from plotTwist.catalog.core.errors import InvalidApiKeyError
from plotTwist.catalog.core.models import CatalogItem
from plotTwist.gui.browse_page import BrowsePage
from plotTwist.gui.details_page import DetailsPage
from plotTwist.gui.movie_card import MovieCard
from plotTwist.gui.movie_row import MovieRow
from plotTwist.gui.watchlist_page import WatchlistPage


INCEPTION = CatalogItem(id=27205, title="Inception", media_type="movie", match_percentage=83, year=2010)
ARCANE = CatalogItem(id=94605, title="Arcane", media_type="tv", match_percentage=88, year=2021)


def layout_widgets(layout, kind):
    """Widgets of type *kind* currently held by *layout* (recursively)."""
    found = []
    for i in range(layout.count()):
        entry = layout.itemAt(i)
        if (w := entry.widget()) is not None and isinstance(w, kind):
            found.append(w)
        elif (sub := entry.layout()) is not None:
            found += layout_widgets(sub, kind)
    return found


def rows_of(page):
    return layout_widgets(page._rows, MovieRow)


# ── card ─────────────────────────────────────────────────────────────────────
def test_card_button_toggles_membership(qtbot, watchlist):
    card = MovieCard(INCEPTION, watchlist)
    qtbot.addWidget(card)
    assert card.toggle_btn.text() == "+"

    card.toggle_btn.click()
    assert watchlist.contains(27205, "movie")
    assert card.toggle_btn.text() == "✓"

    card.toggle_btn.click()
    assert not watchlist.contains(27205, "movie")
    assert card.toggle_btn.text() == "+"


def test_card_click_opens_item(qtbot, watchlist):
    card = MovieCard(ARCANE, watchlist)
    qtbot.addWidget(card)
    with qtbot.waitSignal(card.opened) as blocker:
        qtbot.mouseClick(card, Qt.LeftButton)
    assert blocker.args == [ARCANE]


# ── details ──────────────────────────────────────────────────────────────────
@pytest.fixture
def details(qtbot, catalog, watchlist, manual_fetch):
    page = DetailsPage(catalog, watchlist)
    qtbot.addWidget(page)
    page.resize(900, 700)
    page.show()
    return page


def test_details_toggle_updates_list_and_toasts(details, watchlist, manual_fetch):
    details.show_item(CatalogItem(id=42, title="Movie 42"))
    manual_fetch.finish()
    assert details.list_btn.text() == "+ My List"

    details.list_btn.click()
    assert watchlist.contains(42, "movie")
    assert details.list_btn.text() == "✓ In My List"
    assert details.toast.text() == "Added to watchlist"
    assert not details.toast.isHidden()

    details.list_btn.click()
    assert not watchlist.contains(42, "movie")
    assert details.toast.text() == "Removed from watchlist"


def test_details_keeps_only_the_newest_item(details, manual_fetch):
    details.show_item(CatalogItem(id=1, title="Movie 1"))
    details.show_item(CatalogItem(id=2, title="Show 2", media_type="tv"))
    manual_fetch.finish(1)
    manual_fetch.finish(0)
    assert details._item.id == 2
    assert details._item.media_type == "tv"
    assert details._stack.currentIndex() == 1


def test_details_stale_failure_is_ignored(details, catalog, manual_fetch):
    details.show_item(CatalogItem(id=1, title="Movie 1"))
    details.show_item(CatalogItem(id=2, title="Movie 2"))
    manual_fetch.finish(1)
    catalog.client.fail["movie_details"] = InvalidApiKeyError("bad", 401)
    manual_fetch.finish(0)
    assert details._stack.currentIndex() == 1
    assert details.status.retry_btn.isHidden()


def test_details_failure_shows_retry(details, catalog, manual_fetch):
    catalog.client.fail["tv_details"] = InvalidApiKeyError("bad", 401)
    details.show_item(CatalogItem(id=5, title="Show 5", media_type="tv"))
    manual_fetch.finish()
    assert details._stack.currentIndex() == 0
    assert details.status.label.text() == "Invalid API key."
    assert not details.status.retry_btn.isHidden()


# ── movies / tv browse ───────────────────────────────────────────────────────
@pytest.fixture
def movies(qtbot, catalog, watchlist, manual_fetch):
    page = BrowsePage("movie", catalog, watchlist)
    qtbot.addWidget(page)
    page.reload()
    manual_fetch.finish()
    return page


def test_browse_shows_popular_and_genre_rows(movies):
    assert movies.grid.title.text() == "Popular Movies"
    assert len(movies.grid.items) == 12
    rows = rows_of(movies)
    assert [r.title.text() for r in rows][:2] == ["Action Movies", "Animation Movies"]
    assert all(not r.see_all_btn.isHidden() for r in rows)
    assert not movies.rows_box.isHidden()


def test_genre_chip_filters_grid_and_hides_rows(movies, manual_fetch):
    movies._chip_btns[27].click()
    assert movies.grid.title.text() == "Horror Movies"
    assert movies.rows_box.isHidden()
    manual_fetch.finish()
    assert movies.grid.items[0].id == 2700

    movies._chip_btns["all"].click()
    manual_fetch.finish()
    assert movies.grid.title.text() == "Popular Movies"
    assert not movies.rows_box.isHidden()
    assert movies.grid.items[0].title == "Popular 0"


def test_see_all_selects_the_genre_chip(movies, manual_fetch):
    action = rows_of(movies)[0]
    action.see_all_btn.click()
    assert movies._chip_btns[28].isChecked()
    assert movies.grid.title.text() == "Action Movies"
    assert movies.rows_box.isHidden()
    assert manual_fetch.labels()[-1] == "genre-28"


def test_only_the_newest_genre_filter_lands(movies, manual_fetch):
    movies._chip_btns[27].click()
    movies._chip_btns[35].click()
    manual_fetch.finish(-1)
    manual_fetch.finish(-2)
    assert movies._chip_btns[35].isChecked()
    assert movies.grid.items[0].id == 3500


def test_tv_rows_have_no_see_all(qtbot, catalog, watchlist, manual_fetch):
    page = BrowsePage("tv", catalog, watchlist)
    qtbot.addWidget(page)
    page.reload()
    manual_fetch.finish()
    assert page.grid.title.text() == "Popular TV Shows"
    rows = rows_of(page)
    assert [r.title.text() for r in rows] == ["Trending This Week", "Top Rated", "Airing Today"]
    assert all(r.see_all_btn.isHidden() for r in rows)

    page._chip_btns[18].click()
    assert page.grid.title.text() == "Drama TV Shows"


# ── watchlist page ───────────────────────────────────────────────────────────
@pytest.fixture
def list_page(qtbot, watchlist):
    page = WatchlistPage(watchlist)
    qtbot.addWidget(page)
    watchlist.subscribe(page.refresh)
    return page


def test_watchlist_page_empty_state(list_page):
    texts = [w.text() for w in layout_widgets(list_page._body, QLabel)]
    assert "Your watchlist is empty" in texts
    assert list_page.clear_btn.isHidden()
    assert all(btn.isHidden() for btn in list_page._filter_btns.values())


def test_watchlist_page_counts_and_filters(list_page, watchlist):
    watchlist.add(INCEPTION)
    watchlist.add(ARCANE)
    watchlist.add(CatalogItem(id=1, title="Alien"))
    assert list_page._filter_btns["all"].text() == "All (3)"
    assert list_page._filter_btns["movie"].text() == "Movies (2)"
    assert list_page._filter_btns["tv"].text() == "TV Shows (1)"
    assert len(layout_widgets(list_page._body, MovieCard)) == 3

    list_page.set_filter("tv")
    assert [c.item for c in layout_widgets(list_page._body, MovieCard)] == [ARCANE]

    watchlist.remove(94605, "tv")
    texts = [w.text() for w in layout_widgets(list_page._body, QLabel)]
    assert "No TV shows in your watchlist." in texts


def test_watchlist_clear_needs_confirmation(list_page, watchlist, monkeypatch):
    watchlist.add(INCEPTION)
    monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.Cancel)
    list_page.clear_btn.click()
    assert len(watchlist) == 1

    monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.Yes)
    list_page.clear_btn.click()
    assert len(watchlist) == 0
    assert list_page.clear_btn.isHidden()
