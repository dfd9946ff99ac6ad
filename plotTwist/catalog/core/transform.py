"""catalog.core.transform
Pure functions turning raw TMDb JSON into the dataclasses in `models`.

No HTTP, no storage: everything here is testable with plain dicts.
"""

from __future__ import annotations
import math
from typing import Any, Dict, Iterable, List, Optional

from plotTwist import settings
from plotTwist.catalog.core.models import (
    CastMember, CatalogItem, Genre, MovieDetails, Provider, Season,
    ShowDetails, WatchProviders,
)


def image_url(path: str | None, size: str = "w500") -> Optional[str]:
    """`/abc.jpg` → `https://image.tmdb.org/t/p/w500/abc.jpg`; no path → None."""
    if not path:
        return None
    return f"{settings.TMDB_IMAGE_URL}/{size}{path}"


def year_of(date_str: str | None) -> Optional[int]:
    """Year from a `YYYY-MM-DD` string, None when missing or malformed."""
    if not date_str or len(date_str) < 4 or not date_str[:4].isdigit():
        return None
    return int(date_str[:4])


def match_percentage(vote_average: float | None) -> int:
    """TMDb 0–10 user score → whole "% match" (floored)."""
    if not vote_average:
        return 0
    return int(math.floor(float(vote_average) * 10))


def media_type_of(raw: Dict[str, Any], hint: str | None = None) -> str:
    return raw.get("media_type") or hint or ("movie" if raw.get("title") else "tv")


def to_summary(raw: Dict[str, Any], media_type: str | None = None) -> CatalogItem:
    """One TMDb list/search result → `CatalogItem`."""
    return CatalogItem(
        id=int(raw["id"]),
        title=raw.get("title") or raw.get("name") or "",
        media_type=media_type_of(raw, media_type),
        match_percentage=match_percentage(raw.get("vote_average")),
        year=year_of(raw.get("release_date")) or year_of(raw.get("first_air_date")),
        image_url=image_url(raw.get("poster_path")),
        backdrop_url=image_url(raw.get("backdrop_path"), "original"),
        overview=raw.get("overview"),
        genre_ids=list(raw.get("genre_ids") or []),
    )


def to_summaries(payload: Dict[str, Any], media_type: str | None = None) -> List[CatalogItem]:
    """`{"results": [...]}` → list of summaries, in API order."""
    return [to_summary(r, media_type) for r in payload.get("results", [])]


def genres_of(items: Iterable[Dict[str, Any]]) -> List[Genre]:
    return [Genre(id=int(g["id"]), name=g.get("name", "")) for g in items or []]


def trailer_url(videos: Iterable[Dict[str, Any]]) -> Optional[str]:
    """First YouTube *Trailer* in the video list, as a watch URL."""
    return next(
        (f"https://www.youtube.com/watch?v={v['key']}"
         for v in videos or []
         if v.get("site") == "YouTube" and v.get("type") == "Trailer"),
        None,
    )


def cast_of(credits: Dict[str, Any] | None, limit: int = settings.CAST_LIMIT) -> List[CastMember]:
    """Top-billed cast from a `/credits` payload."""
    cast = (credits or {}).get("cast") or []
    return [
        CastMember(
            id=int(c["id"]),
            name=c.get("name", ""),
            character=c.get("character") or None,
            profile_url=image_url(c.get("profile_path"), "w185"),
        )
        for c in cast[:limit]
    ]


def _companies(raw: Dict[str, Any]) -> List[str]:
    return [c.get("name", "") for c in (raw.get("production_companies") or [])[:settings.COMPANY_LIMIT]]


def _videos(raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    videos = raw.get("videos") or {}
    return videos.get("results", []) if isinstance(videos, dict) else list(videos)


def movie_details(raw: Dict[str, Any]) -> MovieDetails:
    """`/movie/{id}?append_to_response=videos,credits,images` → `MovieDetails`."""
    logos = (raw.get("images") or {}).get("logos") or []
    return MovieDetails(
        summary=to_summary(raw, "movie"),
        tagline=raw.get("tagline") or None,
        runtime=raw.get("runtime") or None,
        status=raw.get("status"),
        release_date=raw.get("release_date") or None,
        genres=genres_of(raw.get("genres")),
        budget=raw.get("budget") or 0,
        revenue=raw.get("revenue") or 0,
        companies=_companies(raw),
        trailer_url=trailer_url(_videos(raw)),
        logo_url=image_url(logos[0].get("file_path")) if logos else None,
        cast=cast_of(raw.get("credits")),
    )


def show_details(raw: Dict[str, Any]) -> ShowDetails:
    """`/tv/{id}?append_to_response=videos,credits` → `ShowDetails`.

    Season 0 ("Specials") is left out.
    """
    run_times = raw.get("episode_run_time") or []
    seasons = [
        Season(
            number=int(s["season_number"]),
            name=s.get("name") or f"Season {s['season_number']}",
            episode_count=s.get("episode_count") or 0,
            air_date=s.get("air_date"),
            poster_url=image_url(s.get("poster_path")),
            overview=s.get("overview") or None,
        )
        for s in raw.get("seasons") or []
        if (s.get("season_number") or 0) > 0
    ]
    return ShowDetails(
        summary=to_summary(raw, "tv"),
        tagline=raw.get("tagline") or None,
        status=raw.get("status"),
        first_air_date=raw.get("first_air_date") or None,
        last_air_date=raw.get("last_air_date") or None,
        number_of_seasons=raw.get("number_of_seasons") or 0,
        number_of_episodes=raw.get("number_of_episodes") or 0,
        episode_run_time=run_times[0] if run_times else None,
        creators=[c.get("name", "") for c in raw.get("created_by") or []],
        networks=[n.get("name", "") for n in raw.get("networks") or []],
        seasons=seasons,
        genres=genres_of(raw.get("genres")),
        companies=_companies(raw),
        trailer_url=trailer_url(_videos(raw)),
        cast=cast_of(raw.get("credits")),
    )


def watch_providers(payload: Dict[str, Any], region: str = settings.WATCH_REGION) -> WatchProviders:
    """Pick *region* out of a `/watch/providers` payload."""
    block = (payload.get("results") or {}).get(region) or {}

    def _providers(kind: str) -> List[Provider]:
        return [
            Provider(name=p.get("provider_name", ""), logo_url=image_url(p.get("logo_path"), "w92"))
            for p in block.get(kind) or []
        ]

    return WatchProviders(
        region=region,
        link=block.get("link"),
        flatrate=_providers("flatrate"),
        rent=_providers("rent"),
        buy=_providers("buy"),
    )
