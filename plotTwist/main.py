import sys

from PySide6.QtWidgets import QApplication

from plotTwist.settings import APP_NAME, TMDB_API_KEY
from plotTwist.utils    import log_debug
from plotTwist.gui.style import apply_dark_palette
from plotTwist.gui.main_window import MainWindow
from plotTwist.gui.controller  import images


# ────────────────────────────────────────────────────────────────────────────
# Application entry
# ────────────────────────────────────────────────────────────────────────────
def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    apply_dark_palette(app)

    if not TMDB_API_KEY:
        log_debug("starting without TMDB_API_KEY; pages will show the key error")
    log_debug(f"{APP_NAME} starting")

    window = MainWindow()
    window.show()

    app.aboutToQuit.connect(images().shutdown)
    sys.exit(app.exec())

# Python entry-point guard
if __name__ == "__main__":
    main()
