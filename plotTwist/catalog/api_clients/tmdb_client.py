from __future__ import annotations

from typing import Any, Dict, List

import requests

from plotTwist import settings
from plotTwist.utils import log_debug, throttle
from plotTwist.catalog.core import transform
from plotTwist.catalog.core.errors import (
    TMDBError, MissingApiKeyError, InvalidApiKeyError, NotFoundError,
)
from plotTwist.catalog.core.models import (
    CatalogItem, Genre, MovieDetails, ShowDetails, WatchProviders,
)

MEDIA_TYPES = ("movie", "tv")
SEARCH_KINDS = ("movie", "tv", "multi")


class TMDBClient:
    """Thin read-only wrapper around The Movie Database (TMDb) v3."""
    BASE_URL = settings.TMDB_BASE_URL

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key if api_key is not None else settings.TMDB_API_KEY
        self.timeout = timeout or settings.TMDB_TIMEOUT

    @throttle(min_delay=settings.TMDB_MIN_DELAY)
    def _get(self, path: str, **params) -> Dict[str, Any]:
        """GET *path* and return the decoded JSON body.

        Raises
        ------
        MissingApiKeyError   no key configured (no request is made)
        InvalidApiKeyError   HTTP 401
        NotFoundError        HTTP 404
        TMDBError            any other failure
        """
        if not self.api_key:
            log_debug("TMDb → API key is missing")
            raise MissingApiKeyError(
                "TMDB API key is missing. Please add TMDB_API_KEY to secret.env."
            )

        params["api_key"] = self.api_key
        url = f"{self.BASE_URL}{path}"
        try:
            r = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            log_debug(f"TMDb → {path} transport error: {exc}")
            raise TMDBError(f"TMDB request failed: {exc}") from exc

        if r.status_code == 401:
            log_debug(f"TMDb → {path} rejected the API key")
            raise InvalidApiKeyError(
                "Invalid TMDB API key. Please check TMDB_API_KEY in secret.env.", 401
            )
        if r.status_code == 404:
            log_debug(f"TMDb → {path} not found")
            raise NotFoundError("The requested resource was not found.", 404)
        if not r.ok:
            log_debug(f"TMDb → {path} failed with {r.status_code}")
            raise TMDBError(f"TMDB API Error: {r.status_code} {r.reason}", r.status_code)

        try:
            return r.json()
        except ValueError as exc:
            log_debug(f"TMDb → {path} returned invalid JSON: {exc}")
            raise TMDBError("TMDB returned an unreadable response.", r.status_code) from exc

    def _list(self, path: str, media_type: str | None = None, **params) -> List[CatalogItem]:
        return transform.to_summaries(self._get(path, **params), media_type)

    @staticmethod
    def _check_media(media_type: str) -> str:
        if media_type not in MEDIA_TYPES:
            raise ValueError(f"Unknown media type: {media_type}")
        return media_type

    # ------------------------------------------------------------------
    # Movie lists
    # ------------------------------------------------------------------
    def trending_movies(self) -> List[CatalogItem]:
        return self._list("/trending/movie/week", "movie")

    def top_rated_movies(self, page: int = 1) -> List[CatalogItem]:
        return self._list("/movie/top_rated", "movie", page=page)

    def popular_movies(self, page: int = 1) -> List[CatalogItem]:
        return self._list("/movie/popular", "movie", page=page)

    def now_playing_movies(self, page: int = 1) -> List[CatalogItem]:
        return self._list("/movie/now_playing", "movie", page=page)

    # ------------------------------------------------------------------
    # TV lists
    # ------------------------------------------------------------------
    def popular_tv(self, page: int = 1) -> List[CatalogItem]:
        return self._list("/tv/popular", "tv", page=page)

    def top_rated_tv(self, page: int = 1) -> List[CatalogItem]:
        return self._list("/tv/top_rated", "tv", page=page)

    def trending_tv(self) -> List[CatalogItem]:
        return self._list("/trending/tv/week", "tv")

    def airing_today_tv(self, page: int = 1) -> List[CatalogItem]:
        return self._list("/tv/airing_today", "tv", page=page)

    # ------------------------------------------------------------------
    # Genres / discovery
    # ------------------------------------------------------------------
    def genres(self, media_type: str = "movie") -> List[Genre]:
        """Official genre list for movies or TV."""
        payload = self._get(f"/genre/{self._check_media(media_type)}/list")
        return transform.genres_of(payload.get("genres"))

    def discover_by_genre(self, genre_id: int, media_type: str = "movie", page: int = 1) -> List[CatalogItem]:
        return self._list(
            f"/discover/{self._check_media(media_type)}", media_type,
            with_genres=genre_id, page=page,
        )

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------
    def movie_details(self, movie_id: int) -> MovieDetails:
        """Details + videos + credits + images in one round-trip."""
        raw = self._get(f"/movie/{movie_id}", append_to_response="videos,credits,images")
        log_debug(f"TMDb → movie details for ID={movie_id}")
        return transform.movie_details(raw)

    def tv_details(self, tv_id: int) -> ShowDetails:
        raw = self._get(f"/tv/{tv_id}", append_to_response="videos,credits")
        log_debug(f"TMDb → tv details for ID={tv_id}")
        return transform.show_details(raw)

    def credits(self, item_id: int, media_type: str = "movie"):
        """Top-billed cast for a movie or show."""
        payload = self._get(f"/{self._check_media(media_type)}/{item_id}/credits")
        return transform.cast_of(payload)

    def similar(self, item_id: int, media_type: str = "movie") -> List[CatalogItem]:
        return self._list(f"/{self._check_media(media_type)}/{item_id}/similar", media_type)

    def recommendations(self, item_id: int, media_type: str = "movie") -> List[CatalogItem]:
        return self._list(f"/{self._check_media(media_type)}/{item_id}/recommendations", media_type)

    def watch_providers(self, item_id: int, media_type: str = "movie",
                        region: str | None = None) -> WatchProviders:
        payload = self._get(f"/{self._check_media(media_type)}/{item_id}/watch/providers")
        return transform.watch_providers(payload, region or settings.WATCH_REGION)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search_movies(self, query: str, page: int = 1) -> List[CatalogItem]:
        return self._list("/search/movie", "movie", query=query, page=page)

    def search_tv(self, query: str, page: int = 1) -> List[CatalogItem]:
        return self._list("/search/tv", "tv", query=query, page=page)

    def multi_search(self, query: str, page: int = 1) -> List[CatalogItem]:
        """Movies and shows together; people are dropped."""
        payload = self._get("/search/multi", query=query, page=page)
        return [
            transform.to_summary(r)
            for r in payload.get("results", [])
            if r.get("media_type") != "person"
        ]

    def search(self, query: str, kind: str = "movie", page: int = 1) -> List[CatalogItem]:
        """Dispatch on *kind*: ``movie``, ``tv`` or ``multi``."""
        if kind == "movie":
            return self.search_movies(query, page)
        if kind == "tv":
            return self.search_tv(query, page)
        if kind == "multi":
            return self.multi_search(query, page)
        raise ValueError(f"Unknown search kind: {kind}")


client = TMDBClient()
