import functools
import itertools
import platform
import random
import subprocess
import threading
import time
import webbrowser
from datetime import datetime
from typing import Optional

from plotTwist import settings


def log_debug(message: str) -> None:
    """Append timestamped message to the log file."""
    log_path = settings.LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().isoformat(timespec="seconds")
    with log_path.open("a", encoding="utf-8") as f:
        f.write(f"[{ts}] {message}\n")


def throttle(min_delay: float = 1.0, jitter: float = 0.3):
    """
    Decorator that sleeps `min_delay + random(0, jitter)` between *network*
    calls on the same function. A zero delay disables it.
    """
    def wrap(fn):
        last_hit = 0.0
        lock = threading.Lock()

        @functools.wraps(fn)
        def inner(*a, **kw):
            nonlocal last_hit
            if min_delay > 0:
                with lock:
                    wait = min_delay - (time.time() - last_hit)
                    if wait > 0:
                        time.sleep(wait + random.uniform(0, jitter))
                    last_hit = time.time()
            return fn(*a, **kw)
        return inner
    return wrap


def open_url_host_browser(url: str) -> None:
    """Opens *url* with host OS default browser (WSL-aware)."""
    if "microsoft-standard" in platform.uname().release.lower():
        subprocess.Popen(["powershell.exe", "-c", f"Start-Process '{url}'"])
    else:
        webbrowser.open(url)


# ── display helpers ─────────────────────────────────────────────────────────
def format_runtime(minutes: Optional[int]) -> str:
    """`135` → `"2h 15m"`; missing runtime → `"N/A"`."""
    if not minutes:
        return "N/A"
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def format_currency(amount: Optional[float]) -> str:
    """Whole US dollars with thousands separators, `"N/A"` for 0 / missing."""
    if not amount:
        return "N/A"
    return f"${amount:,.0f}"


def format_year(year: Optional[int]) -> str:
    return str(year) if year else "N/A"


class LatestRequestGate:
    """
    Hands out increasing tickets so that only the newest request for a view
    gets to publish its result ("last fetch wins").
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current = 0

    def next(self) -> int:
        self._current = next(self._counter)
        return self._current

    def is_current(self, ticket: int) -> bool:
        return ticket == self._current

    def cancel(self) -> None:
        """Invalidate every outstanding ticket."""
        self._current = next(self._counter)
