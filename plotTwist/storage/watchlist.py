"""storage.watchlist
The user's watchlist, persisted under the ``watchlist`` key.

Entries are `CatalogItem`s; identity is the pair *(id, media_type)*, so a
movie and a show that share a TMDb id are different entries.
"""

from __future__ import annotations
from typing import Callable, Dict, List

from plotTwist import settings
from plotTwist.utils import log_debug
from plotTwist.catalog.core.models import CatalogItem
from plotTwist.storage.local_storage import LocalStorage

FILTERS = ("all", "movie", "tv")


class Watchlist:
    """In-memory list mirrored to local storage after every change."""

    def __init__(self, store: type[LocalStorage] | LocalStorage = LocalStorage,
                 key: str = settings.WATCHLIST_KEY):
        self._store = store
        self._key = key
        self._items: List[CatalogItem] = self._load()
        self._listeners: List[Callable[[], None]] = []

    # ── persistence ──────────────────────────────────────────────────────
    def _load(self) -> List[CatalogItem]:
        data = self._store.get_json(self._key, [])
        if not isinstance(data, list):
            log_debug(f"watchlist: expected a list, got {type(data).__name__}; starting empty")
            return []
        items: List[CatalogItem] = []
        for entry in data:
            try:
                items.append(CatalogItem.from_dict(entry))
            except (KeyError, TypeError, ValueError) as exc:
                log_debug(f"watchlist: skipping bad entry {entry!r}: {exc}")
        return items

    def _save(self) -> None:
        self._store.set_json(self._key, [i.to_dict() for i in self._items])
        for fn in list(self._listeners):
            fn()

    def subscribe(self, fn: Callable[[], None]) -> None:
        """Call *fn* after every change (add / remove / clear)."""
        self._listeners.append(fn)

    def unsubscribe(self, fn: Callable[[], None]) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    # ── queries ──────────────────────────────────────────────────────────
    @property
    def items(self) -> List[CatalogItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def contains(self, item_id: int, media_type: str) -> bool:
        return any(i.id == item_id and i.media_type == media_type for i in self._items)

    def filtered(self, kind: str = "all") -> List[CatalogItem]:
        """``all`` | ``movie`` | ``tv``, in insertion order."""
        if kind not in FILTERS:
            raise ValueError(f"Unknown watchlist filter: {kind}")
        return [i for i in self._items if kind == "all" or i.media_type == kind]

    def counts(self) -> Dict[str, int]:
        movies = sum(1 for i in self._items if i.media_type == "movie")
        shows = sum(1 for i in self._items if i.media_type == "tv")
        return {"all": len(self._items), "movie": movies, "tv": shows}

    # ── mutations ────────────────────────────────────────────────────────
    def add(self, item: CatalogItem) -> bool:
        """Append *item*; False (and no change) if it is already listed."""
        if self.contains(item.id, item.media_type):
            return False
        self._items.append(item)
        self._save()
        log_debug(f"watchlist: added {item.media_type}/{item.id} “{item.title}”")
        return True

    def remove(self, item_id: int, media_type: str) -> None:
        before = len(self._items)
        self._items = [
            i for i in self._items
            if not (i.id == item_id and i.media_type == media_type)
        ]
        if len(self._items) != before:
            self._save()
            log_debug(f"watchlist: removed {media_type}/{item_id}")

    def toggle(self, item: CatalogItem) -> bool:
        """Add or remove *item*; return the new membership."""
        if self.contains(item.id, item.media_type):
            self.remove(item.id, item.media_type)
            return False
        return self.add(item)

    def clear(self) -> None:
        self._items = []
        self._save()
        log_debug("watchlist: cleared")
