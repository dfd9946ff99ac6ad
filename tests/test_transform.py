"""Raw TMDb JSON → catalogue dataclasses."""

from plotTwist.catalog.core import transform
from plotTwist.catalog.core.models import CatalogItem

from tests.helpers import movie_result, show_result, results


IMG = "https://image.tmdb.org/t/p"


def test_image_url_builds_sized_url():
    assert transform.image_url("/abc.jpg") == f"{IMG}/w500/abc.jpg"
    assert transform.image_url("/abc.jpg", "original") == f"{IMG}/original/abc.jpg"


def test_image_url_missing_path_is_none():
    assert transform.image_url(None) is None
    assert transform.image_url("") is None


def test_year_of():
    assert transform.year_of("2010-07-16") == 2010
    assert transform.year_of("") is None
    assert transform.year_of(None) is None
    assert transform.year_of("TBA") is None


def test_match_percentage_floors_vote_average():
    assert transform.match_percentage(7.89) == 78
    assert transform.match_percentage(10) == 100
    assert transform.match_percentage(0) == 0
    assert transform.match_percentage(None) == 0


def test_movie_result_becomes_summary():
    item = transform.to_summary(movie_result(27205, "Inception", vote=8.368, date="2010-07-15"))
    assert item == CatalogItem(
        id=27205,
        title="Inception",
        media_type="movie",
        match_percentage=83,
        year=2010,
        image_url=f"{IMG}/w500/p27205.jpg",
        backdrop_url=f"{IMG}/original/b27205.jpg",
        overview="About Inception",
        genre_ids=[28],
    )


def test_show_result_uses_name_and_first_air_date():
    item = transform.to_summary(show_result(1399, "Game of Thrones", date="2011-04-17"))
    assert item.title == "Game of Thrones"
    assert item.media_type == "tv"
    assert item.year == 2011
    assert item.backdrop_url is None


def test_media_type_prefers_raw_then_hint():
    assert transform.media_type_of({"media_type": "tv", "title": "x"}, "movie") == "tv"
    assert transform.media_type_of({"name": "x"}, "movie") == "movie"
    assert transform.media_type_of({"title": "x"}) == "movie"
    assert transform.media_type_of({"name": "x"}) == "tv"


def test_to_summaries_keeps_api_order():
    payload = results(movie_result(3, "C"), movie_result(1, "A"), movie_result(2, "B"))
    assert [i.id for i in transform.to_summaries(payload, "movie")] == [3, 1, 2]
    assert transform.to_summaries({}, "movie") == []


def test_trailer_url_picks_first_youtube_trailer():
    videos = [
        {"site": "Vimeo", "type": "Trailer", "key": "vim"},
        {"site": "YouTube", "type": "Teaser", "key": "teas"},
        {"site": "YouTube", "type": "Trailer", "key": "first"},
        {"site": "YouTube", "type": "Trailer", "key": "second"},
    ]
    assert transform.trailer_url(videos) == "https://www.youtube.com/watch?v=first"
    assert transform.trailer_url([]) is None


def test_cast_is_capped_and_uses_profile_size():
    credits = {"cast": [
        {"id": n, "name": f"Actor {n}", "character": f"Role {n}", "profile_path": f"/a{n}.jpg"}
        for n in range(12)
    ]}
    cast = transform.cast_of(credits)
    assert len(cast) == 7
    assert cast[0].name == "Actor 0"
    assert cast[0].profile_url == f"{IMG}/w185/a0.jpg"
    assert transform.cast_of(None) == []


def test_movie_details_from_appended_response():
    raw = movie_result(
        27205, "Inception",
        tagline="Your mind is the scene of the crime.",
        runtime=148,
        status="Released",
        budget=160000000,
        revenue=825532764,
        genres=[{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
        production_companies=[{"name": n} for n in ("Legendary", "Syncopy", "WB", "Extra")],
        videos={"results": [{"site": "YouTube", "type": "Trailer", "key": "YoHD9XEInc0"}]},
        credits={"cast": [{"id": 6193, "name": "Leonardo DiCaprio", "character": "Cobb"}]},
        images={"logos": [{"file_path": "/logo.png"}]},
    )
    details = transform.movie_details(raw)
    assert details.summary.id == 27205
    assert details.runtime == 148
    assert [g.name for g in details.genres] == ["Action", "Science Fiction"]
    assert details.companies == ["Legendary", "Syncopy", "WB"]
    assert details.trailer_url == "https://www.youtube.com/watch?v=YoHD9XEInc0"
    assert details.logo_url == f"{IMG}/w500/logo.png"
    assert details.cast[0].character == "Cobb"
    assert details.cast[0].profile_url is None


def test_movie_details_tolerates_missing_extras():
    details = transform.movie_details(movie_result(1, "Bare"))
    assert details.trailer_url is None
    assert details.logo_url is None
    assert details.cast == []
    assert details.runtime is None
    assert details.budget == 0


def test_show_details_skips_specials_season():
    raw = show_result(
        1399, "Game of Thrones",
        number_of_seasons=2,
        number_of_episodes=20,
        episode_run_time=[60, 57],
        created_by=[{"name": "David Benioff"}, {"name": "D. B. Weiss"}],
        networks=[{"name": "HBO"}],
        seasons=[
            {"season_number": 0, "name": "Specials", "episode_count": 3},
            {"season_number": 1, "name": "Season 1", "episode_count": 10, "air_date": "2011-04-17"},
            {"season_number": 2, "episode_count": 10},
        ],
    )
    details = transform.show_details(raw)
    assert [s.number for s in details.seasons] == [1, 2]
    assert details.seasons[1].name == "Season 2"
    assert details.episode_run_time == 60
    assert details.creators == ["David Benioff", "D. B. Weiss"]
    assert details.networks == ["HBO"]
    assert details.summary.media_type == "tv"


def test_watch_providers_for_region():
    payload = {"results": {
        "US": {
            "link": "https://www.themoviedb.org/movie/1/watch",
            "flatrate": [{"provider_name": "Netflix", "logo_path": "/n.png"}],
            "buy": [{"provider_name": "Apple TV", "logo_path": None}],
        },
        "GB": {"rent": [{"provider_name": "Sky"}]},
    }}
    us = transform.watch_providers(payload, "US")
    assert us.region == "US"
    assert [p.name for p in us.flatrate] == ["Netflix"]
    assert us.flatrate[0].logo_url == f"{IMG}/w92/n.png"
    assert us.rent == []
    assert not us.empty

    nowhere = transform.watch_providers(payload, "FR")
    assert nowhere.empty
    assert nowhere.link is None
