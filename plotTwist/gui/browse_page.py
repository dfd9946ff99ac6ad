from __future__ import annotations
from typing import List

from PySide6.QtCore    import Qt, Signal, Slot # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QScrollArea,
    QStackedLayout, QFrame, QButtonGroup
)

from plotTwist.settings import GRID_LIMIT
from plotTwist.utils import LatestRequestGate
from plotTwist.catalog.service import CatalogService, friendly_error
from plotTwist.catalog.core.models import BrowseFeed, CatalogItem
from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.common import StatusPanel, clear_layout
from plotTwist.gui.controller import start_fetch
from plotTwist.gui.movie_row import MovieRow
from plotTwist.gui.style import pill_style

# heading, unfiltered grid title, filtered grid suffix, loading text
_TITLES = {
    "movie": ("Movies", "Popular Movies", "Movies", "Loading movies…"),
    "tv":    ("TV Shows", "Popular TV Shows", "TV Shows", "Loading TV shows…"),
}


class BrowsePage(QWidget):
    """Movies or TV Shows page: genre chips, filtered grid, category rows."""
    opened = Signal(object)          # CatalogItem

    def __init__(self, media_type: str, service: CatalogService, watchlist: Watchlist,
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.media_type = media_type
        self._service = service
        self._watchlist = watchlist
        self._gate = LatestRequestGate()           # page load
        self._filter_gate = LatestRequestGate()    # genre chip clicks
        self._popular: List[CatalogItem] = []
        heading, self._grid_title, self._suffix, self._loading_text = _TITLES[media_type]
        self._chip_btns: dict = {}

        self._stack = QStackedLayout(self)
        self.status = StatusPanel()
        self.status.retry.connect(self.reload)

        body = QWidget()
        root = QVBoxLayout(body)
        root.setAlignment(Qt.AlignTop)
        title = QLabel(heading)
        title.setStyleSheet("font-size:32px; font-weight:bold;")
        root.addWidget(title)

        self._chips = QHBoxLayout()
        self._chips.setAlignment(Qt.AlignLeft)
        self._chip_group = QButtonGroup(self)
        self._chip_group.setExclusive(True)
        root.addLayout(self._chips)

        self.grid = MovieRow(self._grid_title, watchlist)
        self.grid.opened.connect(self.opened.emit)
        root.addWidget(self.grid)

        # category / genre rows, only shown while "All" is selected
        self.rows_box = QWidget()
        self._rows = QVBoxLayout(self.rows_box)
        self._rows.setContentsMargins(0, 0, 0, 0)
        root.addWidget(self.rows_box)

        scroll = QScrollArea()
        scroll.setWidget(body)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)

        self._stack.addWidget(self.status)
        self._stack.addWidget(scroll)

    # ------------------------------------------------------------------
    @Slot()
    def reload(self) -> None:
        ticket = self._gate.next()
        self._filter_gate.cancel()
        self.status.show_loading(self._loading_text)
        self._stack.setCurrentIndex(0)
        fetch = self._service.load_movies if self.media_type == "movie" else self._service.load_tv
        start_fetch(
            fetch,
            lambda feed: self._on_loaded(ticket, feed),
            lambda exc: self._on_failed(ticket, exc),
            label=f"browse-{self.media_type}",
        )

    def _on_loaded(self, ticket: int, feed: BrowseFeed) -> None:
        if not self._gate.is_current(ticket):
            return
        self._popular = feed.popular

        clear_layout(self._chips)
        for btn in self._chip_group.buttons():
            self._chip_group.removeButton(btn)
        self._chip_btns.clear()
        self._add_chip("All", "all", checked=True)
        for genre in feed.genres:
            self._add_chip(genre.name, genre.id)

        self.grid.title.setText(self._grid_title)
        self.grid.set_items(feed.popular[:GRID_LIMIT])

        names = {g.id: g.name for g in feed.genres}
        clear_layout(self._rows)
        for row in feed.rows:
            widget = MovieRow(row.title, self._watchlist, row.items,
                              show_see_all=row.genre_id is not None)
            widget.opened.connect(self.opened.emit)
            if row.genre_id is not None:
                name = names.get(row.genre_id, row.title)
                widget.see_all.connect(
                    lambda g=row.genre_id, n=name: self._select_genre(g, n)
                )
            self._rows.addWidget(widget)
        self.rows_box.setVisible(True)
        self._stack.setCurrentIndex(1)

    def _on_failed(self, ticket: int, exc: Exception) -> None:
        if self._gate.is_current(ticket):
            self.status.show_error(friendly_error(exc))

    # ── genre chips ──────────────────────────────────────────────────────
    def _add_chip(self, label: str, genre, checked: bool = False) -> None:
        btn = QPushButton(label)
        btn.setCheckable(True)
        btn.setChecked(checked)
        btn.setStyleSheet(
            "QPushButton{" + pill_style("#262626") + "}"
            "QPushButton:checked{" + pill_style("#e50914") + "}"
        )
        btn.clicked.connect(lambda _=False, g=genre, n=label: self._select_genre(g, n))
        self._chip_group.addButton(btn)
        self._chips.addWidget(btn)
        self._chip_btns[genre] = btn

    def _select_genre(self, genre, name: str) -> None:
        """Filter the grid by *genre* (or "all"); the rows only show under "All"."""
        ticket = self._filter_gate.next()
        if (btn := self._chip_btns.get(genre)) is not None:
            btn.setChecked(True)
        is_all = genre == "all"
        self.grid.title.setText(self._grid_title if is_all else f"{name} {self._suffix}")
        self.rows_box.setVisible(is_all)
        popular = list(self._popular)
        start_fetch(
            lambda: self._service.filter_by_genre(genre, self.media_type, popular),
            lambda items: self._on_filtered(ticket, items),
            label=f"genre-{genre}",
        )

    def _on_filtered(self, ticket: int, items: List[CatalogItem]) -> None:
        if self._filter_gate.is_current(ticket):
            self.grid.set_items(items)
