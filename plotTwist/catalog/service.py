"""catalog.service
Page-level aggregation on top of `TMDBClient`.

Each `load_*` / `*_page` call fans its independent requests out on a small
thread pool and waits for all of them; the first failure fails the whole
call. Optional sub-fetches (banner details, genre rows, genre filter, search)
are logged and degraded instead.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Sequence

from plotTwist import settings
from plotTwist.utils import log_debug
from plotTwist.catalog.api_clients.tmdb_client import TMDBClient, client as default_client
from plotTwist.catalog.core.errors import MissingApiKeyError, InvalidApiKeyError
from plotTwist.catalog.core.models import (
    BrowseFeed, CatalogItem, Genre, HomeFeed, MovieDetails, MoviePage, Row, ShowPage,
)

GENERIC_ERROR = "Failed to fetch movies data. Please try again later."


def friendly_error(exc: BaseException) -> str:
    """Map a fetch failure to the one-line message shown above Retry."""
    if isinstance(exc, MissingApiKeyError):
        return "API key is missing."
    if isinstance(exc, InvalidApiKeyError):
        return "Invalid API key."
    return GENERIC_ERROR


def prefix_filter(items: Sequence[CatalogItem], term: str,
                  limit: int = settings.SEARCH_LIMIT) -> List[CatalogItem]:
    """Keep items whose title starts with *term* (case-insensitive)."""
    needle = term.strip().lower()
    return [i for i in items if i.title.lower().startswith(needle)][:limit]


class CatalogService:
    """What the pages ask for; one instance per window."""

    def __init__(self, client: TMDBClient | None = None, max_workers: int = 5):
        self.client = client or default_client
        self.max_workers = max_workers

    # ── helpers ──────────────────────────────────────────────────────────
    def _gather(self, *calls: Callable[[], Any]) -> List[Any]:
        """Run *calls* concurrently; return results in call order."""
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(fn) for fn in calls]
            return [f.result() for f in futures]

    @staticmethod
    def _genre_chips(genres: List[Genre]) -> List[Genre]:
        return genres[:settings.GENRE_CHIP_LIMIT]

    # ── home ─────────────────────────────────────────────────────────────
    def load_home(self) -> HomeFeed:
        """Trending / popular / top rated / now playing rows + banner."""
        c = self.client
        trending, top_rated, popular, now_playing, genres = self._gather(
            c.trending_movies,
            c.top_rated_movies,
            c.popular_movies,
            c.now_playing_movies,
            lambda: c.genres("movie"),
        )
        n = settings.ROW_LIMIT
        return HomeFeed(
            rows=[
                Row("Trending Now", trending[:n]),
                Row("Popular on PlotTwist", popular[:n]),
                Row("Top Rated", top_rated[:n]),
                Row("Now Playing", now_playing[:n]),
            ],
            popular=popular,
            genres=genres,
            featured=self.featured(popular),
        )

    def featured(self, popular: Sequence[CatalogItem]) -> List[MovieDetails]:
        """Details for the first few popular titles; [] if any lookup fails."""
        top = list(popular[:settings.FEATURED_COUNT])
        if not top:
            return []
        try:
            return self._gather(*[
                (lambda mid=m.id: self.client.movie_details(mid)) for m in top
            ])
        except Exception as exc:
            log_debug(f"banner details failed: {exc}")
            return []

    # ── movies / tv browse pages ─────────────────────────────────────────
    def load_movies(self) -> BrowseFeed:
        """Popular grid, genre chips and one row per well-known genre (optional)."""
        c = self.client
        popular, genres = self._gather(c.popular_movies, lambda: c.genres("movie"))

        picked = [g for g in genres if g.id in settings.POPULAR_GENRE_IDS]
        picked = picked[:settings.GENRE_ROW_LIMIT]
        rows: List[Row] = []
        if picked:
            try:
                by_genre = self._gather(*[
                    (lambda gid=g.id: c.discover_by_genre(gid, "movie")) for g in picked
                ])
            except Exception as exc:
                log_debug(f"genre rows failed: {exc}")
            else:
                rows = [
                    Row(f"{g.name} Movies", items[:settings.ROW_LIMIT], genre_id=g.id)
                    for g, items in zip(picked, by_genre)
                ]

        return BrowseFeed(
            media_type="movie",
            popular=popular,
            genres=self._genre_chips(genres),
            rows=rows,
        )

    def load_tv(self) -> BrowseFeed:
        c = self.client
        popular, top_rated, trending, airing, genres = self._gather(
            c.popular_tv,
            c.top_rated_tv,
            c.trending_tv,
            c.airing_today_tv,
            lambda: c.genres("tv"),
        )
        n = settings.ROW_LIMIT
        return BrowseFeed(
            media_type="tv",
            popular=popular,
            genres=self._genre_chips(genres),
            rows=[
                Row("Trending This Week", trending[:n]),
                Row("Top Rated", top_rated[:n]),
                Row("Airing Today", airing[:n]),
            ],
        )

    def filter_by_genre(self, genre: int | str, media_type: str,
                        fallback: Sequence[CatalogItem]) -> List[CatalogItem]:
        """
        ``"all"`` → *fallback* (the popular list); otherwise discover by genre.
        A failed discovery falls back too.
        """
        limit = settings.GRID_LIMIT
        if genre == "all":
            return list(fallback[:limit])
        try:
            return self.client.discover_by_genre(int(genre), media_type)[:limit]
        except Exception as exc:
            log_debug(f"genre filter {genre} ({media_type}) failed: {exc}")
            return list(fallback[:limit])

    # ── detail pages ─────────────────────────────────────────────────────
    def movie_page(self, movie_id: int) -> MoviePage:
        c = self.client
        details, similar, recommended, providers = self._gather(
            lambda: c.movie_details(movie_id),
            lambda: c.similar(movie_id, "movie"),
            lambda: c.recommendations(movie_id, "movie"),
            lambda: c.watch_providers(movie_id, "movie"),
        )
        return MoviePage(details, similar, recommended, providers)

    def tv_page(self, tv_id: int) -> ShowPage:
        c = self.client
        details, similar, recommended = self._gather(
            lambda: c.tv_details(tv_id),
            lambda: c.similar(tv_id, "tv"),
            lambda: c.recommendations(tv_id, "tv"),
        )
        return ShowPage(details, similar, recommended)

    # ── search ───────────────────────────────────────────────────────────
    def search(self, term: str, kind: str = "movie",
               popular: Sequence[CatalogItem] = ()) -> List[CatalogItem]:
        """
        Blank *term* → the first few popular titles.
        Otherwise search *kind* and keep prefix matches only.
        """
        if not term.strip():
            return list(popular[:settings.SEARCH_LIMIT])
        try:
            results = self.client.search(term.strip(), kind)
        except Exception as exc:
            log_debug(f"search '{term}' ({kind}) failed: {exc}")
            return []
        return prefix_filter(results, term)
