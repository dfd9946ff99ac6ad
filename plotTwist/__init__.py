"""
plotTwist
~~~~~~~~~

Top-level package for the PlotTwist catalogue viewer.

Exports:
  - TMDB_API_KEY, DATABASE_PATH
  - Catalogue access: TMDBClient, CatalogService
  - Local state: Watchlist, AuthService

The Qt front end lives in `plotTwist.gui` and is imported on demand
(`plotTwist.main`), so the data layers load without a display.
"""

__version__ = "0.1.0"

# settings
from plotTwist.settings import TMDB_API_KEY, DATABASE_PATH

# catalogue
from plotTwist.catalog import TMDBClient, CatalogService

# local state
from plotTwist.storage import Watchlist, AuthService

__all__ = [
    # settings
    "TMDB_API_KEY",
    "DATABASE_PATH",
    # catalogue
    "TMDBClient",
    "CatalogService",
    # local state
    "Watchlist",
    "AuthService",
]
