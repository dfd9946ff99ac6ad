"""
catalog
~~~~~~~
Top-level package that bundles:

* core        – dataclasses, errors, TMDb JSON transforms
* api_clients – the TMDb client singleton
* service     – page-level aggregation used by the GUI
"""

# ── core objects ──────────────────────────────────────────────────────────
from plotTwist.catalog.core.models import CatalogItem, MovieDetails, ShowDetails   # re-export
from plotTwist.catalog.core.errors import TMDBError

# ── shared API client ─────────────────────────────────────────────────────
from plotTwist.catalog.api_clients.tmdb_client import TMDBClient, client as tmdb_client

# ── page aggregation ──────────────────────────────────────────────────────
from plotTwist.catalog.service import CatalogService, friendly_error

__all__ = [
    "CatalogItem",
    "MovieDetails",
    "ShowDetails",
    "TMDBError",
    "TMDBClient",
    "tmdb_client",
    "CatalogService",
    "friendly_error",
]
