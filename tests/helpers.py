"""Fakes and payload factories shared by the test modules."""

from plotTwist import settings
from plotTwist.catalog.core.models import CatalogItem, Genre, MovieDetails, ShowDetails, WatchProviders


class FakeResponse:
    """Just enough of `requests.Response` for the TMDb client."""

    def __init__(self, payload=None, status_code=200, reason="OK"):
        self._payload = payload if payload is not None else {}
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeTMDB:
    """
    Routes `requests.get` by URL path. Routes map a path (without the base
    URL) to a FakeResponse or to an exception to raise.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, path, payload=None, status_code=200, reason="OK"):
        self.routes[path] = FakeResponse(payload, status_code, reason)
        return self

    def fail(self, path, exc):
        """Make `requests.get` itself raise *exc* for *path*."""
        self.routes[path] = exc
        return self

    def get(self, url, params=None, timeout=None):
        path = url.replace(settings.TMDB_BASE_URL, "", 1)
        self.calls.append((path, dict(params or {})))
        route = self.routes.get(path)
        if route is None:
            return FakeResponse({"status_message": "not found"}, 404, "Not Found")
        if isinstance(route, BaseException):
            raise route
        return route

    def paths(self):
        return [p for p, _ in self.calls]

    def params(self, path):
        return next(p for called, p in self.calls if called == path)


def movie_result(movie_id, title, vote=7.5, date="2021-05-01", **extra):
    raw = {
        "id": movie_id,
        "title": title,
        "vote_average": vote,
        "release_date": date,
        "poster_path": f"/p{movie_id}.jpg",
        "backdrop_path": f"/b{movie_id}.jpg",
        "overview": f"About {title}",
        "genre_ids": [28],
    }
    raw.update(extra)
    return raw


def show_result(show_id, name, vote=8.1, date="2019-09-10", **extra):
    raw = {
        "id": show_id,
        "name": name,
        "vote_average": vote,
        "first_air_date": date,
        "poster_path": f"/t{show_id}.jpg",
        "backdrop_path": None,
        "overview": f"About {name}",
        "genre_ids": [18],
    }
    raw.update(extra)
    return raw


def results(*entries):
    return {"page": 1, "results": list(entries), "total_pages": 1}


# ── catalogue stub for service and widget tests ─────────────────────────────
def items(prefix, n, media_type="movie", start=1):
    return [CatalogItem(id=start + k, title=f"{prefix} {k}", media_type=media_type) for k in range(n)]


MOVIE_GENRES = [
    Genre(28, "Action"), Genre(12, "Adventure"), Genre(16, "Animation"),
    Genre(35, "Comedy"), Genre(80, "Crime"), Genre(18, "Drama"),
    Genre(27, "Horror"), Genre(10749, "Romance"), Genre(878, "Science Fiction"),
]


class StubClient:
    """Canned answers keyed by method name; records every call."""

    def __init__(self, fail=None):
        self.calls = []
        self.fail = fail or {}

    def _hit(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail:
            raise self.fail[name]

    def trending_movies(self):
        self._hit("trending_movies")
        return items("Trending", 20)

    def top_rated_movies(self):
        self._hit("top_rated_movies")
        return items("Top", 20)

    def popular_movies(self):
        self._hit("popular_movies")
        return items("Popular", 20)

    def now_playing_movies(self):
        self._hit("now_playing_movies")
        return items("Now", 20)

    def popular_tv(self):
        self._hit("popular_tv")
        return items("Show", 20, "tv")

    def top_rated_tv(self):
        self._hit("top_rated_tv")
        return items("Top Show", 20, "tv")

    def trending_tv(self):
        self._hit("trending_tv")
        return items("Hot Show", 20, "tv")

    def airing_today_tv(self):
        self._hit("airing_today_tv")
        return items("Today", 20, "tv")

    def genres(self, media_type):
        self._hit("genres", media_type)
        return list(MOVIE_GENRES) if media_type == "movie" else [Genre(18, "Drama")]

    def discover_by_genre(self, genre_id, media_type="movie"):
        self._hit("discover_by_genre", genre_id, media_type)
        return items(f"Genre{genre_id}", 20, media_type, start=genre_id * 100)

    def movie_details(self, movie_id):
        self._hit("movie_details", movie_id)
        return MovieDetails(summary=CatalogItem(id=movie_id, title=f"Movie {movie_id}"))

    def tv_details(self, tv_id):
        self._hit("tv_details", tv_id)
        return ShowDetails(summary=CatalogItem(id=tv_id, title=f"Show {tv_id}", media_type="tv"))

    def similar(self, item_id, media_type):
        self._hit("similar", item_id, media_type)
        return items("Similar", 3, media_type)

    def recommendations(self, item_id, media_type):
        self._hit("recommendations", item_id, media_type)
        return items("Rec", 2, media_type)

    def watch_providers(self, item_id, media_type):
        self._hit("watch_providers", item_id, media_type)
        return WatchProviders(region="US")

    def search(self, query, kind="movie"):
        self._hit("search", query, kind)
        return [
            CatalogItem(id=1, title="Alien"),
            CatalogItem(id=2, title="Aliens"),
            CatalogItem(id=3, title="The Alienist"),
            CatalogItem(id=4, title="alien: covenant"),
        ]


class ManualFetch:
    """
    Stands in for `gui.controller.start_fetch`: jobs are recorded instead of
    started on a QThread, and the test decides when (and in which order) each
    one finishes. Callbacks run on the calling thread.
    """

    def __init__(self):
        self.jobs = []

    def __call__(self, fn, on_done, on_error=None, label="fetch"):
        self.jobs.append((fn, on_done, on_error, label))

    def finish(self, index=-1):
        fn, on_done, on_error, _ = self.jobs[index]
        try:
            result = fn()
        except Exception as exc:
            if on_error is not None:
                on_error(exc)
            return
        on_done(result)

    def labels(self):
        return [label for *_, label in self.jobs]
