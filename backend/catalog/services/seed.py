from logging import getLogger
from pathlib import Path
from typing import Any

import yaml
from sqlmodel import Session, select

from catalog.crud import director as directors_crud
from catalog.crud import genre as genres_crud
from catalog.crud import movie as movies_crud
from catalog.exceptions.base import StorageError
from catalog.models.director import Director, DirectorCreate
from catalog.models.genre import Genre, GenreCreate
from catalog.models.movie import MovieCreate

logger = getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _load(data_dir: Path, name: str) -> list[dict[str, Any]]:
    path = data_dir / f"{name}.yaml"
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or []


def seed_catalog(*, session: Session, data_dir: Path = DEFAULT_DATA_DIR) -> dict[str, int]:
    """
    Insert the genres, directors and movies listed in the YAML files of
    `data_dir`. Does nothing if the catalog already has genres.

    Movies reference their genre by name and their director by full name.

    Parameters:
        session (Session): Database session.
        data_dir (Path): Directory holding genres.yaml, directors.yaml and movies.yaml.
    Returns:
        dict[str, int]: Number of inserted rows per entity.
    Raises:
        KeyError: If a movie references a genre or director that is not listed.
        StorageError: If the database rejects the rows.
    """
    if session.exec(select(Genre.id).limit(1)).first() is not None:
        logger.info("Catalog already has data, skipping seed")
        return {"genres": 0, "directors": 0, "movies": 0}

    genre_rows = _load(data_dir, "genres")
    director_rows = _load(data_dir, "directors")
    movie_rows = _load(data_dir, "movies")

    try:
        genres: dict[str, Genre] = {}
        for row in genre_rows:
            genre = genres_crud.create_genre(
                session=session, genre_create=GenreCreate.model_validate(row)
            )
            genres[genre.name] = genre

        directors: dict[str, Director] = {}
        for row in director_rows:
            director = directors_crud.create_director(
                session=session, director_create=DirectorCreate.model_validate(row)
            )
            directors[director.full_name] = director

        for row in movie_rows:
            data = dict(row)
            genre = genres[data.pop("genre")]
            director = directors[data.pop("director")]
            movies_crud.create_movie(
                session=session,
                movie_create=MovieCreate.model_validate(
                    {**data, "genre_id": genre.id, "director_id": director.id}
                ),
            )
        session.commit()
    except KeyError:
        session.rollback()
        raise
    except Exception as e:
        session.rollback()
        raise StorageError from e

    counts = {
        "genres": len(genre_rows),
        "directors": len(director_rows),
        "movies": len(movie_rows),
    }
    logger.info("Seeded catalog: %s", counts)
    return counts
