"""
gui
~~~
All Qt widgets, pages and controllers.

•  No direct SQL or HTTP here – everything goes through `catalog.service`
   and `storage`.
•  Re-export the high-level symbols so the app can simply:

    from plotTwist.gui import MainWindow
"""

from plotTwist.gui.controller     import start_fetch, toggle_watchlist
from plotTwist.gui.main_window    import MainWindow
from plotTwist.gui.home_page      import HomePage
from plotTwist.gui.browse_page    import BrowsePage
from plotTwist.gui.details_page   import DetailsPage
from plotTwist.gui.watchlist_page import WatchlistPage
from plotTwist.gui.search_dialog  import SearchDialog
from plotTwist.gui.auth_dialog    import AuthDialog
from plotTwist.gui.movie_card     import MovieCard

__all__ = [
    "start_fetch", "toggle_watchlist",
    "MainWindow", "HomePage", "BrowsePage", "DetailsPage", "WatchlistPage",
    "SearchDialog", "AuthDialog", "MovieCard",
]
