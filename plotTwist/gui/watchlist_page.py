from __future__ import annotations
from PySide6.QtCore    import Qt, Signal, Slot # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
    QScrollArea, QFrame, QButtonGroup, QMessageBox
)

from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.common import clear_layout
from plotTwist.gui.movie_card import MovieCard
from plotTwist.gui.style import MUTED, pill_style

COLUMNS = 6
_EMPTY_FILTER = {"movie": "No movies in your watchlist.", "tv": "No TV shows in your watchlist."}


class WatchlistPage(QWidget):
    """Saved titles with All / Movies / TV filters and a guarded Clear."""
    opened = Signal(object)          # CatalogItem
    browse = Signal(str)             # "movie" | "tv"

    def __init__(self, watchlist: Watchlist, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._watchlist = watchlist
        self._filter = "all"

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignTop)

        # ── header: title | filters | clear ──────────────────────────────
        header = QHBoxLayout()
        title = QLabel("My Watchlist")
        title.setStyleSheet("font-size:32px; font-weight:bold;")
        header.addWidget(title)
        header.addStretch()

        self._group = QButtonGroup(self)
        self._filter_btns: dict[str, QPushButton] = {}
        for kind in ("all", "movie", "tv"):
            btn = QPushButton()
            btn.setCheckable(True)
            btn.setStyleSheet(
                "QPushButton{" + pill_style("#262626") + "}"
                "QPushButton:checked{" + pill_style("#e50914") + "}"
            )
            btn.clicked.connect(lambda _=False, k=kind: self.set_filter(k))
            self._group.addButton(btn)
            self._filter_btns[kind] = btn
            header.addWidget(btn)
        self._filter_btns["all"].setChecked(True)

        self.clear_btn = QPushButton("Clear")
        self.clear_btn.clicked.connect(self._confirm_clear)
        header.addWidget(self.clear_btn)
        root.addLayout(header)

        # ── body ─────────────────────────────────────────────────────────
        body = QWidget()
        self._body = QVBoxLayout(body)
        self._body.setAlignment(Qt.AlignTop)
        scroll = QScrollArea()
        scroll.setWidget(body)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        root.addWidget(scroll)

        self.refresh()

    # ------------------------------------------------------------------
    @Slot()
    def refresh(self) -> None:
        counts = self._watchlist.counts()
        self._filter_btns["all"].setText(f"All ({counts['all']})")
        self._filter_btns["movie"].setText(f"Movies ({counts['movie']})")
        self._filter_btns["tv"].setText(f"TV Shows ({counts['tv']})")
        has_items = counts["all"] > 0
        for w in (*self._filter_btns.values(), self.clear_btn):
            w.setVisible(has_items)

        clear_layout(self._body)
        if not has_items:
            self._body.addLayout(self._empty_state())
            return

        items = self._watchlist.filtered(self._filter)
        if not items:
            msg = QLabel(_EMPTY_FILTER[self._filter], alignment=Qt.AlignCenter)
            msg.setStyleSheet(MUTED)
            self._body.addWidget(msg)
            return

        grid = QGridLayout()
        grid.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        for n, item in enumerate(items):
            card = MovieCard(item, self._watchlist)
            card.opened.connect(self.opened.emit)
            grid.addWidget(card, n // COLUMNS, n % COLUMNS)
        self._body.addLayout(grid)

    def set_filter(self, kind: str) -> None:
        self._filter = kind
        self._filter_btns[kind].setChecked(True)
        self.refresh()

    def _empty_state(self) -> QVBoxLayout:
        box = QVBoxLayout()
        box.setAlignment(Qt.AlignCenter)
        head = QLabel("Your watchlist is empty", alignment=Qt.AlignCenter)
        head.setStyleSheet("font-size:22px;")
        text = QLabel(
            "Content you add to your watchlist will appear here. "
            "Browse movies and TV shows to add items to your watchlist.",
            alignment=Qt.AlignCenter,
        )
        text.setWordWrap(True)
        text.setStyleSheet(MUTED)
        buttons = QHBoxLayout()
        buttons.setAlignment(Qt.AlignCenter)
        for label, kind in (("Browse Movies", "movie"), ("Browse TV Shows", "tv")):
            btn = QPushButton(label)
            btn.clicked.connect(lambda _=False, k=kind: self.browse.emit(k))
            buttons.addWidget(btn)
        box.addWidget(head)
        box.addWidget(text)
        box.addLayout(buttons)
        return box

    def _confirm_clear(self) -> None:
        reply = QMessageBox.question(
            self,
            "Clear watchlist?",
            "Are you sure you want to remove all items from your watchlist? "
            "This action cannot be undone.",
            QMessageBox.Yes | QMessageBox.Cancel,
            QMessageBox.Cancel,
        )
        if reply == QMessageBox.Yes:
            self._watchlist.clear()
