from __future__ import annotations
from typing import List

import shiboken6 # type: ignore
from PySide6.QtCore    import Qt, Signal, Slot # type: ignore
from PySide6.QtGui     import QPixmap # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
    QScrollArea, QStackedLayout, QFrame
)

from plotTwist.utils import LatestRequestGate, format_currency, format_runtime, format_year
from plotTwist.catalog.service import CatalogService, friendly_error
from plotTwist.catalog.core.models import (
    CastMember, CatalogItem, MoviePage, Season, ShowPage, WatchProviders,
)
from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.common import StatusPanel, Toast, clear_layout
from plotTwist.gui.controller import images, open_trailer, start_fetch, toggle_watchlist
from plotTwist.gui.movie_row import MovieRow
from plotTwist.gui.style import SECTION_TITLE, MUTED, match_color

_ERROR = {
    "movie": "Failed to load movie details. Please try again later.",
    "tv":    "Failed to load TV show details. Please try again later.",
}


def _section(title: str) -> QLabel:
    lbl = QLabel(title)
    lbl.setStyleSheet(SECTION_TITLE)
    return lbl


class DetailsPage(QWidget):
    """Movie or TV detail view; `show_item` decides which."""
    opened = Signal(object)          # CatalogItem (recommendation / similar click)
    back   = Signal()

    def __init__(self, service: CatalogService, watchlist: Watchlist,
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._service = service
        self._watchlist = watchlist
        self._gate = LatestRequestGate()
        self._item: CatalogItem | None = None
        self._trailer: str | None = None

        self._stack = QStackedLayout(self)
        self.status = StatusPanel()
        self.status.retry.connect(self.reload)

        body = QWidget()
        self._body = QVBoxLayout(body)
        self._body.setAlignment(Qt.AlignTop)
        self._scroll = QScrollArea()
        self._scroll.setWidget(body)
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.NoFrame)

        self._stack.addWidget(self.status)
        self._stack.addWidget(self._scroll)
        self.toast = Toast(self)

    # ------------------------------------------------------------------
    def show_item(self, item: CatalogItem) -> None:
        self._item = item
        self.reload()

    @Slot()
    def reload(self) -> None:
        if self._item is None:
            return
        item, ticket = self._item, self._gate.next()
        self.status.show_loading(f"Loading “{item.title}”…" if item.title else "Loading…")
        self._stack.setCurrentIndex(0)
        fetch = (
            (lambda: self._service.movie_page(item.id)) if item.media_type == "movie"
            else (lambda: self._service.tv_page(item.id))
        )
        start_fetch(
            fetch,
            lambda page: self._on_loaded(ticket, page),
            lambda exc: self._on_failed(ticket, exc),
            label=f"details-{item.media_type}-{item.id}",
        )

    def _on_failed(self, ticket: int, exc: Exception) -> None:
        if not self._gate.is_current(ticket) or self._item is None:
            return
        msg = friendly_error(exc)
        if msg.startswith("Failed"):
            msg = _ERROR[self._item.media_type]
        self.status.show_error(msg)

    def _on_loaded(self, ticket: int, page: MoviePage | ShowPage) -> None:
        if not self._gate.is_current(ticket):
            return
        clear_layout(self._body)
        d = page.details
        self._item = d.summary
        self._trailer = d.trailer_url

        back = QPushButton("← Back")
        back.setFixedWidth(90)
        back.clicked.connect(self.back.emit)
        self._body.addWidget(back)
        self._body.addLayout(self._header(page))

        self._body.addWidget(_section("Top Billed Cast"))
        self._body.addWidget(self._cast_strip(d.cast))

        if isinstance(page, ShowPage):
            self._body.addWidget(_section("Seasons"))
            self._body.addWidget(self._seasons(d.seasons))
        elif page.providers is not None:
            self._body.addWidget(_section(f"Where to Watch ({page.providers.region})"))
            self._body.addWidget(self._providers(page.providers))

        if d.companies:
            lbl = QLabel("Production: " + ", ".join(d.companies))
            lbl.setStyleSheet(MUTED)
            self._body.addWidget(lbl)

        for title, items in (("Recommendations", page.recommendations),
                             ("More Like This", page.similar)):
            row = MovieRow(title, self._watchlist, items[:10])
            row.opened.connect(self.opened.emit)
            self._body.addWidget(row)

        self._scroll.verticalScrollBar().setValue(0)
        self._stack.setCurrentIndex(1)

    # ── header ───────────────────────────────────────────────────────────
    def _header(self, page: MoviePage | ShowPage) -> QHBoxLayout:
        d, s = page.details, page.details.summary
        row = QHBoxLayout()

        poster = QLabel(alignment=Qt.AlignCenter)
        poster.setFixedSize(220, 330)
        poster.setStyleSheet("background:#262626;")
        images().get(s.image_url, lambda pix, lbl=poster: self._set_pix(lbl, pix, 220, 330))
        row.addWidget(poster, 0, Qt.AlignTop)

        info = QVBoxLayout()
        title = QLabel(s.title)
        title.setStyleSheet("font-size:30px; font-weight:900;")
        title.setWordWrap(True)
        info.addWidget(title)
        if d.tagline:
            tag = QLabel(f"“{d.tagline}”")
            tag.setStyleSheet(MUTED + "font-style:italic;")
            info.addWidget(tag)

        facts = [f'<span style="color:{match_color(s.match_percentage)}">'
                 f'{s.match_percentage}% Match</span>', format_year(s.year)]
        if isinstance(page, MoviePage):
            facts.append(format_runtime(d.runtime))
        else:
            facts.append(f"{d.number_of_seasons} Season{'s' if d.number_of_seasons != 1 else ''}")
            if d.episode_run_time:
                facts.append(format_runtime(d.episode_run_time) + " / ep")
        if d.status:
            facts.append(d.status)
        facts_lbl = QLabel("  •  ".join(facts))
        facts_lbl.setTextFormat(Qt.RichText)
        info.addWidget(facts_lbl)

        if d.genres:
            genres = QLabel(" · ".join(g.name for g in d.genres))
            genres.setStyleSheet(MUTED)
            info.addWidget(genres)

        overview = QLabel(s.overview or "No overview available.")
        overview.setWordWrap(True)
        info.addWidget(overview)

        extra = QGridLayout()
        if isinstance(page, MoviePage):
            pairs = [("Budget", format_currency(d.budget)),
                     ("Revenue", format_currency(d.revenue)),
                     ("Release date", d.release_date or "N/A")]
        else:
            pairs = [("Created by", ", ".join(d.creators) or "N/A"),
                     ("Networks", ", ".join(d.networks) or "N/A"),
                     ("Episodes", str(d.number_of_episodes or "N/A")),
                     ("First aired", d.first_air_date or "N/A")]
        for r, (k, v) in enumerate(pairs):
            key = QLabel(k)
            key.setStyleSheet(MUTED)
            extra.addWidget(key, r, 0)
            extra.addWidget(QLabel(v), r, 1)
        info.addLayout(extra)

        buttons = QHBoxLayout()
        buttons.setAlignment(Qt.AlignLeft)
        trailer = QPushButton("▶ Play Trailer")
        trailer.setEnabled(bool(d.trailer_url))
        trailer.clicked.connect(lambda: open_trailer(self._trailer))
        self.list_btn = QPushButton()
        self.list_btn.clicked.connect(self._on_toggle)
        self.sync()
        buttons.addWidget(trailer)
        buttons.addWidget(self.list_btn)
        info.addLayout(buttons)
        info.addStretch()

        row.addLayout(info, 1)
        return row

    # ── sections ─────────────────────────────────────────────────────────
    def _strip(self) -> tuple[QScrollArea, QHBoxLayout]:
        inner = QWidget()
        lay = QHBoxLayout(inner)
        lay.setAlignment(Qt.AlignLeft)
        scroll = QScrollArea()
        scroll.setWidget(inner)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        return scroll, lay

    def _cast_strip(self, cast: List[CastMember]) -> QWidget:
        if not cast:
            lbl = QLabel("No cast information available.")
            lbl.setStyleSheet(MUTED)
            return lbl
        scroll, lay = self._strip()
        scroll.setFixedHeight(230)
        for member in cast:
            box = QVBoxLayout()
            photo = QLabel(member.name[:1], alignment=Qt.AlignCenter)
            photo.setFixedSize(100, 150)
            photo.setStyleSheet("background:#262626; font-size:28px;")
            images().get(member.profile_url, lambda pix, lbl=photo: self._set_pix(lbl, pix, 100, 150))
            name = QLabel(member.name)
            name.setStyleSheet("font-weight:bold;")
            role = QLabel(member.character or "")
            role.setStyleSheet(MUTED)
            for w in (photo, name, role):
                w.setMaximumWidth(110)
                box.addWidget(w)
            lay.addLayout(box)
        return scroll

    def _seasons(self, seasons: List[Season]) -> QWidget:
        if not seasons:
            lbl = QLabel("No season information available.")
            lbl.setStyleSheet(MUTED)
            return lbl
        holder = QWidget()
        lay = QVBoxLayout(holder)
        for s in seasons:
            line = QLabel(
                f"<b>{s.name}</b> &nbsp; <span style='color:#9ca3af'>"
                f"{s.episode_count} episodes · {(s.air_date or 'TBA')[:4]}</span>"
            )
            line.setTextFormat(Qt.RichText)
            lay.addWidget(line)
            if s.overview:
                ov = QLabel(s.overview)
                ov.setWordWrap(True)
                ov.setStyleSheet(MUTED)
                lay.addWidget(ov)
        return holder

    def _providers(self, providers: WatchProviders) -> QWidget:
        if providers.empty:
            lbl = QLabel("Not currently available to stream, rent or buy in this region.")
            lbl.setStyleSheet(MUTED)
            return lbl
        holder = QWidget()
        grid = QGridLayout(holder)
        for r, (label, group) in enumerate((("Stream", providers.flatrate),
                                            ("Rent", providers.rent),
                                            ("Buy", providers.buy))):
            if not group:
                continue
            key = QLabel(label)
            key.setStyleSheet(MUTED)
            grid.addWidget(key, r, 0)
            grid.addWidget(QLabel(", ".join(p.name for p in group)), r, 1)
        return holder

    # ── watchlist ────────────────────────────────────────────────────────
    def sync(self) -> None:
        btn = getattr(self, "list_btn", None)
        if self._item is None or btn is None or not shiboken6.isValid(btn):
            return
        listed = self._watchlist.contains(self._item.id, self._item.media_type)
        self.list_btn.setText("✓ In My List" if listed else "+ My List")

    def _on_toggle(self) -> None:
        if self._item is None:
            return
        self.toast.show_message(toggle_watchlist(self._watchlist, self._item))
        self.sync()

    @staticmethod
    def _set_pix(label: QLabel, pix: QPixmap, w: int, h: int) -> None:
        if shiboken6.isValid(label):
            label.setPixmap(pix.scaled(w, h, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation))
