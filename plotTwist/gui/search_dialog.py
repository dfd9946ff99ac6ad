from __future__ import annotations
from typing import Callable, List, Sequence

from PySide6.QtCore    import Qt, QTimer, Signal, Slot # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QDialog, QVBoxLayout, QHBoxLayout, QLineEdit, QComboBox, QLabel,
    QListWidget, QListWidgetItem, QWidget
)

from plotTwist.settings import SEARCH_DEBOUNCE_MS
from plotTwist.utils import LatestRequestGate
from plotTwist.catalog.service import CatalogService
from plotTwist.catalog.core.models import CatalogItem
from plotTwist.gui.controller import start_fetch
from plotTwist.gui.style import MUTED

_KINDS = [("Movies", "movie"), ("TV Shows", "tv"), ("All", "multi")]


class SearchDialog(QDialog):
    """
    Search overlay. Typing is debounced; only the newest query may fill
    the list. Blank query shows popular titles.
    """
    opened = Signal(object)          # CatalogItem

    def __init__(self, service: CatalogService,
                 popular: Callable[[], Sequence[CatalogItem]],
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Search")
        self.setModal(True)
        self.resize(560, 480)
        self._service = service
        self._popular = popular
        self._gate = LatestRequestGate()

        box = QVBoxLayout(self)
        top = QHBoxLayout()
        self.input = QLineEdit(placeholderText="Search for movies or TV shows…")
        self.input.setClearButtonEnabled(True)
        self.kind = QComboBox()
        for label, kind in _KINDS:
            self.kind.addItem(label, kind)
        top.addWidget(self.input, 1)
        top.addWidget(self.kind)
        box.addLayout(top)

        self.hint = QLabel()
        self.hint.setStyleSheet(MUTED)
        box.addWidget(self.hint)
        self.results = QListWidget()
        self.results.itemActivated.connect(self._on_pick)
        self.results.itemClicked.connect(self._on_pick)
        box.addWidget(self.results)

        self._debounce = QTimer(self, singleShot=True, interval=SEARCH_DEBOUNCE_MS,
                                timeout=self._run_search)
        self.input.textChanged.connect(self._on_text)
        self.kind.currentIndexChanged.connect(self._on_kind)

    # ------------------------------------------------------------------
    def showEvent(self, event):
        super().showEvent(event)
        self.input.setFocus()
        if not self.input.text().strip():
            self._show(list(self._popular())[:8], "Popular right now")

    @Slot(str)
    def _on_text(self, text: str) -> None:
        if not text.strip():
            self._debounce.stop()
            self._gate.cancel()
            self._show(list(self._popular())[:8], "Popular right now")
            return
        self.hint.setText("Searching…")
        self._debounce.start()

    @Slot(int)
    def _on_kind(self, _index: int) -> None:
        if self.input.text().strip():
            self._debounce.start()

    @Slot()
    def _run_search(self) -> None:
        term, kind = self.input.text(), self.kind.currentData()
        popular = list(self._popular())
        ticket = self._gate.next()
        start_fetch(
            lambda: self._service.search(term, kind, popular),
            lambda items: self._on_results(ticket, term, items),
            label="search",
        )

    def _on_results(self, ticket: int, term: str, items: List[CatalogItem]) -> None:
        if not self._gate.is_current(ticket):
            return
        self._show(items, f"No results for “{term.strip()}”" if not items else "")

    def _show(self, items: Sequence[CatalogItem], hint: str) -> None:
        self.hint.setText(hint)
        self.results.clear()
        for item in items:
            kind = "TV" if item.media_type == "tv" else "Movie"
            row = QListWidgetItem(f"{item.title}   ({item.year or '—'} · {kind})")
            row.setData(Qt.UserRole, item)
            self.results.addItem(row)

    @Slot(QListWidgetItem)
    def _on_pick(self, row: QListWidgetItem) -> None:
        item = row.data(Qt.UserRole)
        if item is not None:
            self.opened.emit(item)
            self.accept()
