from __future__ import annotations
from PySide6.QtCore    import Qt # type: ignore
from PySide6.QtGui     import QColor, QPalette # type: ignore
from PySide6.QtWidgets import QApplication # type: ignore

from plotTwist.settings import ACCENT_COLOR


def apply_dark_palette(app: QApplication) -> None:
    """Apply a dark Fusion palette to the application."""
    palette = QPalette()
    palette.setColor(QPalette.Window,        QColor("#141414"))
    palette.setColor(QPalette.WindowText,    Qt.white)
    palette.setColor(QPalette.Base,          QColor("#1f1f1f"))
    palette.setColor(QPalette.AlternateBase, QColor("#262626"))
    palette.setColor(QPalette.Button,        QColor("#2a2a2a"))
    palette.setColor(QPalette.ButtonText,    Qt.white)
    palette.setColor(QPalette.Text,          Qt.white)
    palette.setColor(QPalette.Link,          QColor(ACCENT_COLOR))
    palette.setColor(QPalette.Highlight,     QColor(ACCENT_COLOR))
    palette.setColor(QPalette.HighlightedText, Qt.white)
    app.setStyle("Fusion")
    app.setPalette(palette)


def match_color(percentage: int) -> str:
    """Green ≥70, yellow ≥40, red below."""
    if percentage >= 70:
        return "#22c55e"
    if percentage >= 40:
        return "#eab308"
    return "#ef4444"


def pill_style(bg: str, fg: str = "#ffffff") -> str:
    return f"background:{bg}; color:{fg}; border-radius:6px; padding:2px 8px;"


SECTION_TITLE = "font-size:18px; font-weight:bold;"
MUTED         = "color:#9ca3af;"
