# local_db.py
from __future__ import annotations
import sqlite3, threading, atexit
from pathlib import Path

from plotTwist import settings

# ─── internal state ─────────────────────────────────────────────────────
_thread_local = threading.local()   # holds .conn / .path per thread
_init_lock    = threading.Lock()    # guards _open_conns
_open_conns: list[sqlite3.Connection] = []

# ─── internal helpers ────────────────────────────────────────────────────
def _new_connection(path: Path) -> sqlite3.Connection:
    """Create a fresh sqlite3.Connection; the schema is idempotent DDL."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(
        path,
        check_same_thread=True,     # each thread uses its OWN connection
        isolation_level="DEFERRED",
    )
    conn.row_factory = sqlite3.Row

    conn.executescript(settings.SCHEMA_PATH.read_text(encoding="utf-8"))
    conn.commit()
    with _init_lock:
        _open_conns.append(conn)
    return conn

# ─── public helpers ──────────────────────────────────────────────────────
def connection() -> sqlite3.Connection:
    """
    Return this thread's sqlite3.Connection, creating it on first use.
    Re-opens when `settings.DATABASE_PATH` has been pointed elsewhere.
    """
    path = Path(settings.DATABASE_PATH)
    conn = getattr(_thread_local, "conn", None)
    if conn is not None and getattr(_thread_local, "path", None) == path:
        return conn
    if conn is not None:
        _close(conn)
    _thread_local.conn = _new_connection(path)
    _thread_local.path = path
    return _thread_local.conn

def execute(sql: str, params: tuple = ()) -> sqlite3.Cursor:
    """Like `connection().execute(...)`."""
    return connection().cursor().execute(sql, params)

def commit() -> None:
    """Commit the current thread's Connection."""
    connection().commit()

def _close(conn: sqlite3.Connection) -> None:
    with _init_lock:
        if conn in _open_conns:
            _open_conns.remove(conn)
    conn.close()

def close() -> None:
    """Close this thread's connection (next call re-opens)."""
    conn = getattr(_thread_local, "conn", None)
    if conn is not None:
        _close(conn)
        _thread_local.conn = None
        _thread_local.path = None

# ─── cleanup ──────────────────────────────────────────────────────────────
@atexit.register
def _close_everything() -> None:
    """Close every connection still open on exit."""
    with _init_lock:
        conns, _open_conns[:] = list(_open_conns), []
    for conn in conns:
        try:
            conn.close()
        except sqlite3.ProgrammingError:
            pass        # owned by another, already finished thread
