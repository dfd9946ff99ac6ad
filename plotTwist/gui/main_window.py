# gui/main_window.py
from __future__ import annotations
from collections import deque
from typing import Deque

from PySide6.QtCore    import Qt, Slot # type: ignore
from PySide6.QtGui     import QAction, QKeySequence # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QMainWindow, QListWidget, QListWidgetItem, QStackedWidget, QSplitter,
    QStyle, QMessageBox
)

from plotTwist.settings        import APP_NAME, HISTORY_LIMIT
from plotTwist.utils           import log_debug
from plotTwist.catalog.service import CatalogService
from plotTwist.catalog.core.models import CatalogItem
from plotTwist.storage.watchlist import Watchlist
from plotTwist.storage.auth    import AuthService
from plotTwist.gui.home_page      import HomePage
from plotTwist.gui.browse_page    import BrowsePage
from plotTwist.gui.details_page   import DetailsPage
from plotTwist.gui.watchlist_page import WatchlistPage
from plotTwist.gui.search_dialog  import SearchDialog
from plotTwist.gui.auth_dialog    import AuthDialog
from plotTwist.gui.movie_card     import MovieCard

HOME, MOVIES, TV, WATCHLIST, DETAILS = range(5)


class MainWindow(QMainWindow):
    def __init__(self, service: CatalogService | None = None,
                 watchlist: Watchlist | None = None,
                 auth: AuthService | None = None):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(1280, 800)

        self.service   = service or CatalogService()
        self.watchlist = watchlist if watchlist is not None else Watchlist()
        self.auth      = auth or AuthService()
        self._history: Deque[tuple[int, CatalogItem | None]] = deque(maxlen=HISTORY_LIMIT)
        self._loaded: set[int] = set()

        # ── pages ────────────────────────────────────────────────────────
        self.home_page      = HomePage(self.service, self.watchlist)
        self.movies_page    = BrowsePage("movie", self.service, self.watchlist)
        self.tv_page        = BrowsePage("tv", self.service, self.watchlist)
        self.watchlist_page = WatchlistPage(self.watchlist)
        self.details_page   = DetailsPage(self.service, self.watchlist)

        # ── sidebar ─────────────────────────────────────────────────────
        self.nav_list = QListWidget()
        self.nav_list.setFixedWidth(170)
        st = self.style()
        for icon, label in [
            (QStyle.SP_DirHomeIcon,          "Home"),
            (QStyle.SP_MediaPlay,            "Movies"),
            (QStyle.SP_ComputerIcon,         "TV Shows"),
            (QStyle.SP_DialogApplyButton,    "My List"),
        ]:
            item = QListWidgetItem(st.standardIcon(icon), label)
            item.setTextAlignment(Qt.AlignHCenter)
            self.nav_list.addItem(item)

        # ── stacked widget ──────────────────────────────────────────────
        self.pages = QStackedWidget()
        for page in (self.home_page, self.movies_page, self.tv_page,
                     self.watchlist_page, self.details_page):
            self.pages.addWidget(page)
        self.nav_list.currentRowChanged.connect(self._on_nav)

        splitter = QSplitter()
        splitter.addWidget(self.nav_list)
        splitter.addWidget(self.pages)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        # ── toolbar ─────────────────────────────────────────────────────
        tb = self.addToolBar("Main")
        tb.setMovable(False)
        self.back_act = QAction(st.standardIcon(QStyle.SP_ArrowBack), "Back", self)
        self.back_act.setShortcut(QKeySequence.Back)
        self.back_act.triggered.connect(self.go_back)
        self.back_act.setEnabled(False)
        tb.addAction(self.back_act)

        act = QAction(st.standardIcon(QStyle.SP_FileDialogContentsView), "Search", self)
        act.setShortcut("Ctrl+K")
        act.triggered.connect(self._on_search)
        tb.addAction(act)

        self.account_act = QAction(self)
        self.account_act.triggered.connect(self._on_account)
        tb.addAction(self.account_act)
        self._sync_account()

        # ── wiring ──────────────────────────────────────────────────────
        for page in (self.home_page, self.movies_page, self.tv_page,
                     self.watchlist_page, self.details_page):
            page.opened.connect(self.open_item)
        self.details_page.back.connect(self.go_back)
        self.watchlist_page.browse.connect(
            lambda kind: self.nav_list.setCurrentRow(MOVIES if kind == "movie" else TV)
        )
        self.watchlist.subscribe(self._on_watchlist_changed)

        self.nav_list.setCurrentRow(HOME)

    # ── navigation ──────────────────────────────────────────────────────
    @Slot(int)
    def _on_nav(self, row: int) -> None:
        if row < 0:
            return
        self._push(row)
        self._show(row)

    def _show(self, index: int, item: CatalogItem | None = None) -> None:
        self.pages.setCurrentIndex(index)
        if index == DETAILS and item is not None:
            self.details_page.show_item(item)
        elif index not in self._loaded and index in (HOME, MOVIES, TV):
            self._loaded.add(index)
            self.pages.widget(index).reload()
        self.back_act.setEnabled(len(self._history) > 1)

    def _push(self, index: int, item: CatalogItem | None = None) -> None:
        if self._history and self._history[-1] == (index, item):
            return
        self._history.append((index, item))

    @Slot(object)
    def open_item(self, item: CatalogItem) -> None:
        """Open the movie / show detail page for *item*."""
        log_debug(f"open {item.media_type}/{item.id} “{item.title}”")
        self._push(DETAILS, item)
        self._show(DETAILS, item)

    @Slot()
    def go_back(self) -> None:
        if len(self._history) < 2:
            return
        self._history.pop()
        index, item = self._history[-1]
        if index != DETAILS:
            self.nav_list.blockSignals(True)
            self.nav_list.setCurrentRow(index)
            self.nav_list.blockSignals(False)
        self._show(index, item)

    # ── toolbar actions ─────────────────────────────────────────────────
    @Slot()
    def _on_search(self) -> None:
        dlg = SearchDialog(self.service, lambda: self.home_page.popular, self)
        dlg.opened.connect(self.open_item)
        dlg.exec()

    @Slot()
    def _on_account(self) -> None:
        if self.auth.is_authenticated:
            reply = QMessageBox.question(
                self, "Sign out?",
                f"Signed in as {self.auth.current_user.username}. Sign out?",
            )
            if reply == QMessageBox.Yes:
                self.auth.sign_out()
        else:
            dlg = AuthDialog(self.auth, self)
            dlg.signed_in.connect(self._on_signed_in)
            dlg.exec()
        self._sync_account()

    @Slot(object)
    def _on_signed_in(self, user) -> None:
        log_debug(f"signed in as {user.username}")
        self._sync_account()

    def _sync_account(self) -> None:
        user = self.auth.current_user
        self.account_act.setText(user.username if user else "Sign In")
        self.account_act.setToolTip("Sign out" if user else "Sign in or create an account")

    # ── watchlist fan-out ───────────────────────────────────────────────
    def _on_watchlist_changed(self) -> None:
        self.watchlist_page.refresh()
        for card in self.findChildren(MovieCard):
            card.sync()
        self.details_page.sync()
