"""
catalog.core
~~~~~~~~~~~~
Dataclasses, error types and the TMDb-JSON → dataclass transforms.
"""

from plotTwist.catalog.core.models import (
    CatalogItem, Genre, CastMember, Season, Provider, WatchProviders,
    MovieDetails, ShowDetails, Row, HomeFeed, BrowseFeed, MoviePage, ShowPage,
)
from plotTwist.catalog.core.errors import (
    TMDBError, MissingApiKeyError, InvalidApiKeyError, NotFoundError,
)

__all__ = [
    "CatalogItem", "Genre", "CastMember", "Season", "Provider", "WatchProviders",
    "MovieDetails", "ShowDetails", "Row", "HomeFeed", "BrowseFeed", "MoviePage", "ShowPage",
    "TMDBError", "MissingApiKeyError", "InvalidApiKeyError", "NotFoundError",
]
