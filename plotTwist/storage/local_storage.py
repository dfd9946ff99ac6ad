"""storage.local_storage
Browser-style `localStorage` on top of the SQLite `kv_store` table.

All SQL lives here; the watchlist and auth layers only see string keys
and JSON values.
"""

from __future__ import annotations
import json
from typing import Any, List, Optional

from plotTwist.utils import log_debug
from plotTwist.storage.local_db import execute, commit


class LocalStorage:
    """Key → string store with JSON helpers."""

    # ───────────────────────────── raw strings ──────────────────────
    @staticmethod
    def get_item(key: str) -> Optional[str]:
        row = execute("SELECT value FROM kv_store WHERE key=?", (key,)).fetchone()
        return row["value"] if row else None

    @staticmethod
    def set_item(key: str, value: str) -> None:
        execute(
            "INSERT OR REPLACE INTO kv_store(key, value, updated_at)"
            " VALUES(?, ?, datetime('now'))",
            (key, value),
        )
        commit()

    @staticmethod
    def remove_item(key: str) -> None:
        execute("DELETE FROM kv_store WHERE key=?", (key,))
        commit()

    @staticmethod
    def keys() -> List[str]:
        rows = execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [r["key"] for r in rows]

    @staticmethod
    def clear() -> None:
        execute("DELETE FROM kv_store")
        commit()

    # ───────────────────────────── JSON values ──────────────────────
    @staticmethod
    def get_json(key: str, default: Any = None) -> Any:
        """
        Decode the JSON stored under *key*.

        Missing key → *default*. Unreadable JSON is logged, the key is
        dropped and *default* is returned.
        """
        raw = LocalStorage.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as exc:
            log_debug(f"local storage: dropping unreadable '{key}': {exc}")
            LocalStorage.remove_item(key)
            return default

    @staticmethod
    def set_json(key: str, value: Any) -> None:
        LocalStorage.set_item(key, json.dumps(value))
