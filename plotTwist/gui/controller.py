from __future__ import annotations
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List

import requests
from PySide6.QtCore import QObject, QThread, Signal, Slot # type: ignore
from PySide6.QtGui  import QPixmap # type: ignore

from plotTwist import settings
from plotTwist.utils import log_debug, open_url_host_browser
from plotTwist.catalog.core.models import CatalogItem
from plotTwist.storage.watchlist import Watchlist
from plotTwist.gui.workers import _FetchWorker, _Relay

# threads / workers / relays must outlive the call that started them
_live: set = set()


# ───────────────────────── Controller helpers exposed to UI ───────────────
def start_fetch(fn: Callable[[], Any],
                on_done: Callable[[Any], None],
                on_error: Callable[[Exception], None] | None = None,
                label: str = "fetch") -> None:
    """Run *fn* on a QThread; callbacks fire on the GUI thread."""
    thr    = QThread()
    worker = _FetchWorker(fn, label)
    relay  = _Relay(on_done, on_error)
    worker.moveToThread(thr)
    entry = (thr, worker, relay)

    worker.done.connect(relay.deliver)
    worker.failed.connect(relay.fail)
    worker.finished.connect(thr.quit)
    worker.finished.connect(worker.deleteLater)
    thr.finished.connect(thr.deleteLater)
    thr.finished.connect(lambda: _live.discard(entry))

    thr.started.connect(worker.run)
    _live.add(entry)
    thr.start()


def toggle_watchlist(watchlist: Watchlist, item: CatalogItem) -> str:
    """Flip membership and return the toast text."""
    if watchlist.toggle(item):
        return "Added to watchlist"
    return "Removed from watchlist"


def open_trailer(url: str | None) -> None:
    if url:
        log_debug(f"opening trailer {url}")
        open_url_host_browser(url)


# ───────────────────────── poster cache ───────────────────────────────────
class ImageCache(QObject):
    """
    Downloads poster bytes on a small pool and hands back QPixmaps on the
    GUI thread. One download per URL, however many cards ask for it; the
    least recently used pixmaps are dropped past *max_size*.
    """
    _loaded = Signal(str, bytes)

    def __init__(self, max_workers: int = 6, max_size: int = settings.IMAGE_CACHE_SIZE):
        super().__init__()
        self._pool     = ThreadPoolExecutor(max_workers=max_workers)
        self._max_size = max_size
        self._pixmaps: OrderedDict[str, QPixmap] = OrderedDict()
        self._waiting: Dict[str, List[Callable[[QPixmap], None]]] = {}
        self._loaded.connect(self._on_loaded)

    def get(self, url: str | None, callback: Callable[[QPixmap], None]) -> None:
        if not url:
            return
        if url in self._pixmaps:
            self._pixmaps.move_to_end(url)
            callback(self._pixmaps[url])
            return
        if url in self._waiting:
            self._waiting[url].append(callback)
            return
        self._waiting[url] = [callback]
        self._pool.submit(self._download, url)

    def _download(self, url: str) -> None:
        try:
            r = requests.get(url, timeout=settings.TMDB_TIMEOUT)
            r.raise_for_status()
            self._loaded.emit(url, r.content)
        except requests.RequestException as e:
            log_debug(f"poster download failed for {url}: {e}")
            self._loaded.emit(url, b"")

    @Slot(str, bytes)
    def _on_loaded(self, url: str, data: bytes) -> None:
        callbacks = self._waiting.pop(url, [])
        pix = QPixmap()
        if not data or not pix.loadFromData(data):
            return
        self._remember(url, pix)
        for cb in callbacks:
            cb(pix)

    def _remember(self, url: str, pix: QPixmap) -> None:
        self._pixmaps[url] = pix
        self._pixmaps.move_to_end(url)
        while len(self._pixmaps) > self._max_size:
            self._pixmaps.popitem(last=False)

    @property
    def size(self) -> int:
        return len(self._pixmaps)

    def shutdown(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)


_images: ImageCache | None = None


def images() -> ImageCache:
    """Process-wide poster cache (created lazily, after QApplication)."""
    global _images
    if _images is None:
        _images = ImageCache()
    return _images
