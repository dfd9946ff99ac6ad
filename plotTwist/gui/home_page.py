from __future__ import annotations
from typing import List

import shiboken6 # type: ignore
from PySide6.QtCore    import Qt, QTimer, Signal, Slot # type: ignore
from PySide6.QtGui     import QPixmap # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QLabel, QPushButton, QScrollArea, QStackedLayout, QFrame
)

from plotTwist.settings import BANNER_INTERVAL_MS
from plotTwist.utils import LatestRequestGate
from plotTwist.catalog.service import CatalogService, friendly_error
from plotTwist.catalog.core.models import CatalogItem, HomeFeed, MovieDetails
from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.common import StatusPanel, clear_layout
from plotTwist.gui.controller import start_fetch, images
from plotTwist.gui.movie_row import MovieRow
from plotTwist.gui.style import MUTED


class _Banner(QFrame):
    """Rotating hero for the featured titles."""
    opened = Signal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedHeight(320)
        self._featured: List[MovieDetails] = []
        self._index = 0

        self.backdrop = QLabel(self)
        self.backdrop.setAlignment(Qt.AlignCenter)
        self.backdrop.setStyleSheet("background:#000;")

        box = QVBoxLayout(self)
        box.setAlignment(Qt.AlignBottom | Qt.AlignLeft)
        self.title = QLabel()
        self.title.setStyleSheet("font-size:32px; font-weight:900;")
        self.blurb = QLabel()
        self.blurb.setWordWrap(True)
        self.blurb.setMaximumWidth(560)
        self.more = QPushButton("More Info")
        self.more.setFixedWidth(120)
        self.more.clicked.connect(self._open_current)
        for w in (self.title, self.blurb, self.more):
            box.addWidget(w)

        self._timer = QTimer(self, interval=BANNER_INTERVAL_MS, timeout=self._advance)
        self.hide()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.backdrop.setGeometry(self.rect())
        self.backdrop.lower()

    def set_featured(self, featured: List[MovieDetails]) -> None:
        self._featured = featured
        self._index = 0
        self.setVisible(bool(featured))
        if featured:
            self._render()
            self._timer.start()
        else:
            self._timer.stop()

    @Slot()
    def _advance(self) -> None:
        if self._featured:
            self._index = (self._index + 1) % len(self._featured)
            self._render()

    def _render(self) -> None:
        movie = self._featured[self._index].summary
        self.title.setText(movie.title)
        self.blurb.setText(movie.overview or "")
        self.backdrop.clear()
        url = movie.backdrop_url
        images().get(url, lambda pix, u=url: self._set_backdrop(u, pix))

    def _set_backdrop(self, url: str, pix: QPixmap) -> None:
        if not shiboken6.isValid(self.backdrop) or not self._featured:
            return
        if self._featured[self._index].summary.backdrop_url != url:
            return              # banner moved on meanwhile
        self.backdrop.setPixmap(
            pix.scaled(self.size(), Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)
        )

    def _open_current(self) -> None:
        if self._featured:
            self.opened.emit(self._featured[self._index].summary)


class HomePage(QWidget):
    """Banner + trending / popular / top rated / now playing rows."""
    opened = Signal(object)          # CatalogItem
    loaded = Signal(object)          # HomeFeed

    def __init__(self, service: CatalogService, watchlist: Watchlist,
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._service = service
        self._watchlist = watchlist
        self._gate = LatestRequestGate()
        self.popular: List[CatalogItem] = []

        self._stack = QStackedLayout(self)
        self.status = StatusPanel()
        self.status.retry.connect(self.reload)

        body = QWidget()
        self._body = QVBoxLayout(body)
        self._body.setAlignment(Qt.AlignTop)
        self.banner = _Banner()
        self.banner.opened.connect(self.opened.emit)
        self._body.addWidget(self.banner)
        self._rows = QVBoxLayout()
        self._body.addLayout(self._rows)
        footer = QLabel("PLOTWIST - Your personal streaming watchlist.", alignment=Qt.AlignCenter)
        footer.setStyleSheet(MUTED)
        self._body.addWidget(footer)

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
        self.status.show_loading("Loading movies…")
        self._stack.setCurrentIndex(0)
        start_fetch(
            self._service.load_home,
            lambda feed: self._on_loaded(ticket, feed),
            lambda exc: self._on_failed(ticket, exc),
            label="home",
        )

    def _on_loaded(self, ticket: int, feed: HomeFeed) -> None:
        if not self._gate.is_current(ticket):
            return
        self.popular = feed.popular
        self.banner.set_featured(feed.featured)
        clear_layout(self._rows)
        for row in feed.rows:
            widget = MovieRow(row.title, self._watchlist, row.items)
            widget.opened.connect(self.opened.emit)
            self._rows.addWidget(widget)
        self._stack.setCurrentIndex(1)
        self.loaded.emit(feed)

    def _on_failed(self, ticket: int, exc: Exception) -> None:
        if self._gate.is_current(ticket):
            self.status.show_error(friendly_error(exc))
