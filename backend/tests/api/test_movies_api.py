from collections.abc import Callable

from fastapi.testclient import TestClient

from movieshelf.core.config import settings
from movieshelf.models.movie import Movie
from movieshelf.models.user import User
from movieshelf.models.user_movie import UserMovie
from tests.fixtures.omdb import FakeOmdb, omdb_movie


def test_search_movies(client: TestClient, fake_omdb: FakeOmdb) -> None:
    fake_omdb.search_results["Heat"] = ["tt0113277"]
    fake_omdb.details["tt0113277"] = omdb_movie("tt0113277", Title="Heat", Poster="N/A")

    r = client.get(f"{settings.API_V1_STR}/search", params={"query": "Heat"})

    assert r.status_code == 200
    assert r.json() == [
        {
            "id": "tt0113277",
            "title": "Heat",
            "year": "2019",
            "runtime": "101 min",
            "genre": "Action",
            "director": "Jane Doe",
            "isFavorite": False,
            "poster": "",
        }
    ]


def test_search_movies_with_username_overlay(
    *,
    client: TestClient,
    fake_omdb: FakeOmdb,
    movie_factory: Callable[..., Movie],
    user_factory: Callable[..., User],
    user_movie_factory: Callable[..., UserMovie],
) -> None:
    user = user_factory(username="alice")
    movie = movie_factory(title="My Heat")
    user_movie_factory(user_id=user.id, movie_id=movie.id, is_favorite=True)
    fake_omdb.search_results["Heat"] = [movie.id, "tt9999999"]
    fake_omdb.add_movies(movie.id, "tt9999999")

    r = client.get(
        f"{settings.API_V1_STR}/search",
        params={"query": "Heat", "username": "alice"},
    )

    assert r.status_code == 200
    body = r.json()
    assert [item["id"] for item in body] == [movie.id, "tt9999999"]
    assert body[0]["title"] == "My Heat"
    assert body[0]["isFavorite"] is True
    assert body[1]["isFavorite"] is False


def test_search_movies_without_query_uses_seeds(
    client: TestClient, fake_omdb: FakeOmdb
) -> None:
    fake_omdb.add_movies("tt3896198")

    r = client.get(f"{settings.API_V1_STR}/search")

    assert r.status_code == 200
    assert [item["id"] for item in r.json()] == ["tt3896198"]
    assert fake_omdb.search_calls == ["Avengers", "Batman"]


def test_search_movies_omdb_failure(client: TestClient, fake_omdb: FakeOmdb) -> None:
    fake_omdb.failing_searches.add("Heat")

    r = client.get(f"{settings.API_V1_STR}/search", params={"query": "Heat"})

    assert r.status_code == 500
    assert r.json() == {"error": "OMDB request failed"}


def test_read_movie_from_omdb(client: TestClient, fake_omdb: FakeOmdb) -> None:
    fake_omdb.add_movies("tt0113277")

    r = client.get(f"{settings.API_V1_STR}/movie/tt0113277")

    assert r.status_code == 200
    assert r.json() == omdb_movie("tt0113277")


def test_read_movie_from_database(
    client: TestClient,
    fake_omdb: FakeOmdb,
    movie_factory: Callable[..., Movie],
) -> None:
    movie = movie_factory(title="Stored")

    r = client.get(f"{settings.API_V1_STR}/movie/{movie.id}")

    assert r.status_code == 200
    assert r.json()["Title"] == "Stored"
    assert r.json()["Response"] == "True"
    assert fake_omdb.detail_calls == []


def test_read_movie_not_found(client: TestClient, fake_omdb: FakeOmdb) -> None:
    r = client.get(f"{settings.API_V1_STR}/movie/tt0000404")

    assert r.status_code == 404
    assert r.json() == {"error": "Movie not found"}
