# Catalogue dataclasses (+ small DTOs the pages consume)
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class Genre:
    id: int
    name: str


@dataclass(slots=True)
class CatalogItem:
    """Denormalized movie / show summary shown on cards and kept in the watchlist."""
    id: int
    title: str
    media_type: str = "movie"
    match_percentage: int = 0
    year: int | None = None
    image_url: str | None = None
    backdrop_url: str | None = None
    overview: str | None = None
    genre_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogItem":
        """Rebuild from stored JSON; unknown keys are ignored."""
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            media_type=data.get("media_type") or "movie",
            match_percentage=int(data.get("match_percentage") or 0),
            year=data.get("year"),
            image_url=data.get("image_url"),
            backdrop_url=data.get("backdrop_url"),
            overview=data.get("overview"),
            genre_ids=list(data.get("genre_ids") or []),
        )


@dataclass(slots=True)
class CastMember:
    id: int
    name: str
    character: str | None = None
    profile_url: str | None = None


@dataclass(slots=True)
class Season:
    number: int
    name: str
    episode_count: int = 0
    air_date: str | None = None
    poster_url: str | None = None
    overview: str | None = None


@dataclass(slots=True)
class Provider:
    name: str
    logo_url: str | None = None


@dataclass(slots=True)
class WatchProviders:
    region: str
    link: str | None = None
    flatrate: List[Provider] = field(default_factory=list)
    rent: List[Provider] = field(default_factory=list)
    buy: List[Provider] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.flatrate or self.rent or self.buy)


@dataclass(slots=True)
class MovieDetails:
    summary: CatalogItem
    tagline: str | None = None
    runtime: int | None = None
    status: str | None = None
    release_date: str | None = None
    genres: List[Genre] = field(default_factory=list)
    budget: int = 0
    revenue: int = 0
    companies: List[str] = field(default_factory=list)
    trailer_url: str | None = None
    logo_url: str | None = None
    cast: List[CastMember] = field(default_factory=list)


@dataclass(slots=True)
class ShowDetails:
    summary: CatalogItem
    tagline: str | None = None
    status: str | None = None
    first_air_date: str | None = None
    last_air_date: str | None = None
    number_of_seasons: int = 0
    number_of_episodes: int = 0
    episode_run_time: int | None = None
    creators: List[str] = field(default_factory=list)
    networks: List[str] = field(default_factory=list)
    seasons: List[Season] = field(default_factory=list)
    genres: List[Genre] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)
    trailer_url: str | None = None
    cast: List[CastMember] = field(default_factory=list)


# ── page bundles returned by catalog.service ──────────────────────────────
@dataclass(slots=True)
class Row:
    title: str
    items: List[CatalogItem]
    genre_id: int | None = None          # set on genre rows ("See all")


@dataclass(slots=True)
class HomeFeed:
    rows: List[Row]
    popular: List[CatalogItem]
    genres: List[Genre]
    featured: List[MovieDetails] = field(default_factory=list)


@dataclass(slots=True)
class BrowseFeed:
    """Movies page or TV page: genre chips, the unfiltered grid, category rows."""
    media_type: str
    popular: List[CatalogItem]
    genres: List[Genre]
    rows: List[Row]


@dataclass(slots=True)
class MoviePage:
    details: MovieDetails
    similar: List[CatalogItem]
    recommendations: List[CatalogItem]
    providers: Optional[WatchProviders] = None


@dataclass(slots=True)
class ShowPage:
    details: ShowDetails
    similar: List[CatalogItem]
    recommendations: List[CatalogItem]
