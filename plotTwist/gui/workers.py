from __future__ import annotations
from typing import Any, Callable

from PySide6.QtCore import QObject, Signal, Slot # type: ignore

from plotTwist.utils import log_debug


# ───────────────────────── Worker skeleton ────────────────────────────────
class _FetchWorker(QObject):
    """Runs one blocking callable on a QThread and reports back."""
    done     = Signal(object)
    failed   = Signal(object)
    finished = Signal()

    def __init__(self, fn: Callable[[], Any], label: str = "fetch"):
        super().__init__()
        self.fn = fn
        self.label = label

    @Slot()
    def run(self):
        try:
            result = self.fn()
        except Exception as e:
            log_debug(f"{self.label}-worker error: {e!r}")
            self.failed.emit(e)
        else:
            self.done.emit(result)
        finally:
            self.finished.emit()


class _Relay(QObject):
    """
    Lives in the GUI thread so the worker's signals are delivered there
    (queued), whatever the callbacks are.
    """

    def __init__(self, on_done: Callable[[Any], None],
                 on_error: Callable[[Exception], None] | None):
        super().__init__()
        self._on_done = on_done
        self._on_error = on_error

    @Slot(object)
    def deliver(self, result):
        self._on_done(result)

    @Slot(object)
    def fail(self, exc):
        if self._on_error is not None:
            self._on_error(exc)
