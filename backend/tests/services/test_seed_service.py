from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import Session, select

from catalog.models.director import Director
from catalog.models.genre import Genre
from catalog.models.movie import Movie
from catalog.services.seed import DEFAULT_DATA_DIR, seed_catalog


def _write(directory: Path, name: str, content: str) -> None:
    (directory / f"{name}.yaml").write_text(content, encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    _write(tmp_path, "genres", "- name: Drama\n- name: Horror\n  description: Scary\n")
    _write(
        tmp_path,
        "directors",
        "- first_name: John\n  last_name: Carpenter\n  birth_date: 1948-01-16\n",
    )
    _write(
        tmp_path,
        "movies",
        "- title: Halloween\n"
        "  release_year: 1978\n"
        '  rating: "7.7"\n'
        "  genre: Horror\n"
        "  director: John Carpenter\n",
    )
    return tmp_path


def test_seed_catalog_inserts_rows(*, db_transaction: Session, data_dir: Path):
    counts = seed_catalog(session=db_transaction, data_dir=data_dir)

    assert counts == {"genres": 2, "directors": 1, "movies": 1}
    movie = db_transaction.exec(select(Movie)).one()
    assert movie.title == "Halloween"
    assert movie.rating == Decimal("7.7")
    assert movie.genre.name == "Horror"
    assert movie.director.full_name == "John Carpenter"


def test_seed_catalog_is_idempotent(*, db_transaction: Session, data_dir: Path):
    seed_catalog(session=db_transaction, data_dir=data_dir)

    counts = seed_catalog(session=db_transaction, data_dir=data_dir)

    assert counts == {"genres": 0, "directors": 0, "movies": 0}
    assert len(db_transaction.exec(select(Genre)).all()) == 2


def test_seed_catalog_unknown_reference(*, db_transaction: Session, data_dir: Path):
    _write(
        data_dir,
        "movies",
        "- title: Alien\n  release_year: 1979\n  genre: Sci-Fi\n  director: John Carpenter\n",
    )

    with pytest.raises(KeyError):
        seed_catalog(session=db_transaction, data_dir=data_dir)

    assert db_transaction.exec(select(Director)).all() == []


def test_bundled_seed_data_loads(*, db_transaction: Session):
    counts = seed_catalog(session=db_transaction, data_dir=DEFAULT_DATA_DIR)

    assert counts["genres"] > 0
    assert counts["movies"] == len(db_transaction.exec(select(Movie)).all())
