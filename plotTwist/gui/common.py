from __future__ import annotations
from PySide6.QtCore    import Qt, QTimer, Signal # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QLabel, QPushButton, QProgressBar, QLayout
)

from plotTwist.settings import TOAST_MS
from plotTwist.gui.style import pill_style


def clear_layout(layout: QLayout) -> None:
    """Remove and delete every widget / sub-layout in *layout*."""
    while layout.count():
        child = layout.takeAt(0)
        if (w := child.widget()) is not None:
            w.deleteLater()
        elif (sub := child.layout()) is not None:
            clear_layout(sub)
            sub.deleteLater()


class StatusPanel(QWidget):
    """Loading spinner or error message + Retry, shown in place of a page."""
    retry = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        box = QVBoxLayout(self)
        box.setAlignment(Qt.AlignCenter)

        self.label = QLabel("Loading…", alignment=Qt.AlignCenter)
        self.label.setWordWrap(True)
        self.bar = QProgressBar()
        self.bar.setRange(0, 0)           # busy
        self.bar.setFixedWidth(240)
        self.retry_btn = QPushButton("Retry")
        self.retry_btn.clicked.connect(self.retry.emit)

        box.addWidget(self.label)
        box.addWidget(self.bar, alignment=Qt.AlignCenter)
        box.addWidget(self.retry_btn, alignment=Qt.AlignCenter)
        self.show_loading()

    def show_loading(self, text: str = "Loading…") -> None:
        self.label.setText(text)
        self.label.setStyleSheet("")
        self.bar.show()
        self.retry_btn.hide()

    def show_error(self, text: str) -> None:
        self.label.setText(text)
        self.label.setStyleSheet("color:#ef4444; font-size:16px;")
        self.bar.hide()
        self.retry_btn.show()


class Toast(QLabel):
    """Bottom-centred message that hides itself after a few seconds."""

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setStyleSheet(pill_style("#1f2937") + "padding:8px 16px;")
        self.setAlignment(Qt.AlignCenter)
        self._timer = QTimer(self, singleShot=True, timeout=self.hide)
        self.hide()

    def show_message(self, text: str, ms: int = TOAST_MS) -> None:
        self.setText(text)
        self.adjustSize()
        parent = self.parentWidget()
        self.move((parent.width() - self.width()) // 2, parent.height() - self.height() - 24)
        self.raise_()
        self.show()
        self._timer.start(ms)
