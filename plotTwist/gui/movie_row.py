from __future__ import annotations
from typing import Sequence

from PySide6.QtCore    import Qt, Signal # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QScrollArea, QFrame
)

from plotTwist.catalog.core.models import CatalogItem
from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.common import clear_layout
from plotTwist.gui.movie_card import MovieCard
from plotTwist.gui.style import SECTION_TITLE, MUTED


class MovieRow(QWidget):
    """Section title (+ optional "See all") over a horizontally scrolling strip of cards."""
    opened  = Signal(object)         # CatalogItem
    see_all = Signal()

    def __init__(self, title: str, watchlist: Watchlist,
                 items: Sequence[CatalogItem] = (), parent: QWidget | None = None,
                 show_see_all: bool = False):
        super().__init__(parent)
        self._watchlist = watchlist

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 8, 0, 8)
        header = QHBoxLayout()
        self.title = QLabel(title)
        self.title.setStyleSheet(SECTION_TITLE)
        header.addWidget(self.title)
        header.addStretch()
        self.see_all_btn = QPushButton("See all ›")
        self.see_all_btn.setFlat(True)
        self.see_all_btn.setVisible(show_see_all)
        self.see_all_btn.clicked.connect(self.see_all.emit)
        header.addWidget(self.see_all_btn)
        root.addLayout(header)

        strip = QWidget()
        self._cards = QHBoxLayout(strip)
        self._cards.setAlignment(Qt.AlignLeft)
        self._cards.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidget(strip)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll.setFixedHeight(340)
        root.addWidget(scroll)

        self.set_items(items)

    def set_items(self, items: Sequence[CatalogItem], empty_text: str = "Nothing to show.") -> None:
        self.items = list(items)
        clear_layout(self._cards)
        if not items:
            msg = QLabel(empty_text)
            msg.setStyleSheet(MUTED)
            self._cards.addWidget(msg)
            return
        for item in items:
            card = MovieCard(item, self._watchlist)
            card.opened.connect(self.opened.emit)
            self._cards.addWidget(card)
