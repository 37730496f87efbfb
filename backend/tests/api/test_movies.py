from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient
from sqlmodel import Session

from catalog.core.config import settings

MOVIES_URL = f"{settings.API_V1_STR}/movies"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def _movie_payload(genre_id: int, director_id: int, **overrides) -> dict:
    payload = {
        "title": "Blade Runner",
        "release_year": 1982,
        "duration": 117,
        "rating": 8.1,
        "genre_id": genre_id,
        "director_id": director_id,
    }
    payload.update(overrides)
    return payload


def test_create_and_read_movie(
    client: TestClient, db_transaction: Session, genre_factory, director_factory
) -> None:
    genre = genre_factory(name="Science Fiction")
    director = director_factory(first_name="Ridley", last_name="Scott")
    db_transaction.commit()

    r = client.post(f"{MOVIES_URL}/", json=_movie_payload(genre.id, director.id))
    assert r.status_code == 201
    created = r.json()
    assert created["rating"] == 8.1
    assert created["genre"]["name"] == "Science Fiction"

    r = client.get(f"{MOVIES_URL}/{created['id']}")
    assert r.status_code == 200
    movie = r.json()
    assert movie["title"] == "Blade Runner"
    assert movie["director"]["full_name"] == "Ridley Scott"
    assert movie["poster_url"] is None


def test_create_and_patch_ignore_poster_url(
    client: TestClient, db_transaction: Session, genre_factory, director_factory
) -> None:
    genre = genre_factory()
    director = director_factory()
    db_transaction.commit()

    r = client.post(
        f"{MOVIES_URL}/",
        json=_movie_payload(
            genre.id, director.id, poster_url="/uploads/posters/poster-other.jpg"
        ),
    )
    assert r.status_code == 201
    movie_id = r.json()["id"]
    assert r.json()["poster_url"] is None

    r = client.patch(
        f"{MOVIES_URL}/{movie_id}",
        json={"poster_url": "/uploads/posters/poster-other.jpg"},
    )
    assert r.status_code == 200
    assert r.json()["poster_url"] is None


def test_create_movie_with_unknown_genre(
    client: TestClient, db_transaction: Session, director_factory
) -> None:
    director = director_factory()
    db_transaction.commit()

    r = client.post(f"{MOVIES_URL}/", json=_movie_payload(999, director.id))

    assert r.status_code == 400
    assert r.json() == {"detail": "Genre with ID 999 not found."}


def test_create_movie_invalid_body(client: TestClient) -> None:
    r = client.post(
        f"{MOVIES_URL}/", json=_movie_payload(1, 1, rating=7.25, release_year=1700)
    )

    assert r.status_code == 422


def test_read_movie_not_found(client: TestClient) -> None:
    r = client.get(f"{MOVIES_URL}/424242")

    assert r.status_code == 404
    assert r.json()["detail"] == "Movie with ID 424242 not found."


def test_list_movies_envelope_and_last_page(
    client: TestClient, db_transaction: Session, movie_factory
) -> None:
    movie_factory.create_batch(7)
    db_transaction.commit()

    r = client.get(f"{MOVIES_URL}/", params={"page": 3, "limit": 3})

    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"data", "total", "page", "limit"}
    assert body["total"] == 7
    assert body["page"] == 3
    assert body["limit"] == 3
    assert len(body["data"]) == 1


def test_list_movies_rejects_bad_pagination(client: TestClient) -> None:
    assert client.get(f"{MOVIES_URL}/", params={"page": 0}).status_code == 422
    assert client.get(f"{MOVIES_URL}/", params={"limit": 101}).status_code == 422
    assert client.get(f"{MOVIES_URL}/", params={"sort_by": "budget"}).status_code == 422


def test_list_movies_cached_until_write(
    client: TestClient,
    db_transaction: Session,
    movie_factory,
    genre_factory,
    director_factory,
) -> None:
    movie_factory(title="Ran")
    genre = genre_factory()
    director = director_factory()
    db_transaction.commit()

    first = client.get(f"{MOVIES_URL}/")
    movie_factory(title="Sneaky insert")
    db_transaction.commit()
    second = client.get(f"{MOVIES_URL}/")

    assert second.content == first.content

    r = client.post(f"{MOVIES_URL}/", json=_movie_payload(genre.id, director.id))
    assert r.status_code == 201

    third = client.get(f"{MOVIES_URL}/")
    assert third.json()["total"] == 3


def test_list_movies_with_filters(
    client: TestClient,
    db_transaction: Session,
    movie_factory,
    genre_factory,
) -> None:
    horror = genre_factory(name="Horror")
    movie_factory(title="The Shining", release_year=1980, genre=horror)
    movie_factory(title="Paddington", release_year=2014)
    db_transaction.commit()

    r = client.get(f"{MOVIES_URL}/", params={"genre": "horr"})
    assert [m["title"] for m in r.json()["data"]] == ["The Shining"]

    r = client.get(f"{MOVIES_URL}/", params={"year": 2014})
    assert [m["title"] for m in r.json()["data"]] == ["Paddington"]

    r = client.get(
        f"{MOVIES_URL}/", params={"sort_by": "title", "order": "ASC"}
    )
    assert [m["title"] for m in r.json()["data"]] == ["Paddington", "The Shining"]


def test_popular_genre_and_director_listings(
    client: TestClient,
    db_transaction: Session,
    movie_factory,
    genre_factory,
    director_factory,
) -> None:
    genre = genre_factory()
    director = director_factory()
    movie_factory(title="Top", rating=Decimal("9.2"), genre=genre)
    movie_factory(title="Low", rating=Decimal("3.0"), director=director)
    db_transaction.commit()

    r = client.get(f"{MOVIES_URL}/popular")
    assert [m["title"] for m in r.json()["data"]] == ["Top"]

    r = client.get(f"{MOVIES_URL}/genre/{genre.id}")
    assert [m["title"] for m in r.json()["data"]] == ["Top"]

    r = client.get(f"{MOVIES_URL}/director/{director.id}")
    assert [m["title"] for m in r.json()["data"]] == ["Low"]


def test_update_movie(
    client: TestClient, db_transaction: Session, movie_factory
) -> None:
    movie = movie_factory(title="Draft", duration=90)
    db_transaction.commit()

    r = client.patch(f"{MOVIES_URL}/{movie.id}", json={"title": "Final"})

    assert r.status_code == 200
    assert r.json()["title"] == "Final"
    assert r.json()["duration"] == 90


def test_update_movie_null_title_rejected(
    client: TestClient, db_transaction: Session, movie_factory
) -> None:
    movie = movie_factory()
    db_transaction.commit()

    r = client.patch(f"{MOVIES_URL}/{movie.id}", json={"title": None})

    assert r.status_code == 422


def test_delete_movie(
    client: TestClient, db_transaction: Session, movie_factory
) -> None:
    movie_id = movie_factory().id
    db_transaction.commit()

    r = client.delete(f"{MOVIES_URL}/{movie_id}")
    assert r.status_code == 204
    assert r.content == b""

    assert client.get(f"{MOVIES_URL}/{movie_id}").status_code == 404
    assert client.delete(f"{MOVIES_URL}/{movie_id}").status_code == 404


def test_upload_and_delete_poster(
    client: TestClient, db_transaction: Session, movie_factory, poster_dir: Path
) -> None:
    movie = movie_factory()
    db_transaction.commit()

    r = client.post(
        f"{MOVIES_URL}/{movie.id}/poster",
        files={"file": ("original-name.jpg", JPEG_BYTES, "image/jpeg")},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Poster uploaded successfully"
    assert body["poster_url"].endswith(body["file_name"])
    assert "original-name" not in body["file_name"]
    assert (poster_dir / body["file_name"]).exists()

    assert client.get(f"{MOVIES_URL}/{movie.id}").json()["poster_url"] == body["poster_url"]

    r = client.delete(f"{MOVIES_URL}/{movie.id}/poster")
    assert r.status_code == 204
    assert not (poster_dir / body["file_name"]).exists()
    assert client.get(f"{MOVIES_URL}/{movie.id}").json()["poster_url"] is None


def test_upload_poster_with_wrong_signature(
    client: TestClient, db_transaction: Session, movie_factory
) -> None:
    movie = movie_factory()
    db_transaction.commit()

    r = client.post(
        f"{MOVIES_URL}/{movie.id}/poster",
        files={"file": ("poster.png", JPEG_BYTES, "image/png")},
    )

    assert r.status_code == 400
    assert r.json()["detail"].startswith("Invalid poster:")


def test_upload_poster_without_file(
    client: TestClient, db_transaction: Session, movie_factory
) -> None:
    movie = movie_factory()
    db_transaction.commit()

    r = client.post(f"{MOVIES_URL}/{movie.id}/poster")

    assert r.status_code == 422
