from __future__ import annotations
import shiboken6 # type: ignore
from PySide6.QtCore    import Qt, Signal, QPropertyAnimation # type: ignore
from PySide6.QtGui     import QPixmap # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QFrame, QLabel, QVBoxLayout, QHBoxLayout, QToolButton, QGraphicsDropShadowEffect
)

from plotTwist.catalog.core.models import CatalogItem
from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.controller import images
from plotTwist.gui.style import match_color, pill_style, MUTED

POSTER_W, POSTER_H = 150, 225


class MovieCard(QFrame):
    """Poster card with title, year, % match and a watchlist toggle."""
    opened = Signal(object)          # CatalogItem

    def __init__(self, item: CatalogItem, watchlist: Watchlist, parent=None):
        super().__init__(parent)
        self.item = item
        self._watchlist = watchlist
        self.setObjectName("MovieCardItem")
        self.setFrameShape(QFrame.StyledPanel)
        self.setFixedWidth(POSTER_W + 16)
        self.setCursor(Qt.PointingHandCursor)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        # ── poster (placeholder text until the image arrives) ────────────
        self.poster = QLabel(item.title, alignment=Qt.AlignCenter)
        self.poster.setFixedSize(POSTER_W, POSTER_H)
        self.poster.setWordWrap(True)
        self.poster.setStyleSheet("background:#262626;" + MUTED)
        root.addWidget(self.poster)
        images().get(item.image_url, self._set_poster)

        # ── title ────────────────────────────────────────────────────────
        title = QLabel(item.title)
        title.setWordWrap(True)
        title.setStyleSheet("font-weight:bold;")
        root.addWidget(title)

        # ── footer row: match | year | toggle ───────────────────────────
        footer = QHBoxLayout()
        pct = QLabel(f"{item.match_percentage}% Match")
        pct.setStyleSheet(f"color:{match_color(item.match_percentage)};")
        year = QLabel(str(item.year) if item.year else "—", alignment=Qt.AlignRight)
        year.setStyleSheet(MUTED)

        self.toggle_btn = QToolButton()
        self.toggle_btn.setAutoRaise(True)
        self.toggle_btn.clicked.connect(self._on_toggle)
        self.sync()

        footer.addWidget(pct)
        footer.addWidget(year)
        footer.addWidget(self.toggle_btn)
        root.addLayout(footer)
        root.addStretch()

        if item.media_type == "tv":
            badge = QLabel("TV", self.poster)
            badge.setStyleSheet(pill_style("#1f2937"))
            badge.move(POSTER_W - 34, 6)

        # ── hover shadow effect ──────────────────────────────────────────
        self._shadow = QGraphicsDropShadowEffect(self)
        self._shadow.setBlurRadius(4)
        self._shadow.setOffset(0, 0)
        self.setGraphicsEffect(self._shadow)

    # ------------------------------------------------------------------
    def sync(self) -> None:
        """Refresh the ✓ / + state from the watchlist."""
        listed = self._watchlist.contains(self.item.id, self.item.media_type)
        self.toggle_btn.setText("✓" if listed else "+")
        self.toggle_btn.setToolTip("Remove from watchlist" if listed else "Add to watchlist")

    def _on_toggle(self) -> None:
        self._watchlist.toggle(self.item)
        self.sync()

    def _set_poster(self, pix: QPixmap) -> None:
        if not shiboken6.isValid(self.poster):
            return
        self.poster.setPixmap(
            pix.scaled(POSTER_W, POSTER_H, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)
        )

    def mouseReleaseEvent(self, event):
        super().mouseReleaseEvent(event)
        if event.button() == Qt.LeftButton:
            self.opened.emit(self.item)

    # ------------------------------------------------------------------
    # hover animation
    def enterEvent(self, event):
        super().enterEvent(event)
        anim = QPropertyAnimation(self._shadow, b"blurRadius", self)
        anim.setDuration(200)
        anim.setEndValue(16)
        anim.start(QPropertyAnimation.DeleteWhenStopped)

    def leaveEvent(self, event):
        super().leaveEvent(event)
        anim = QPropertyAnimation(self._shadow, b"blurRadius", self)
        anim.setDuration(200)
        anim.setEndValue(4)
        anim.start(QPropertyAnimation.DeleteWhenStopped)
