from decimal import Decimal

import pytest
from factory import (
    Factory,  # type: ignore
    Faker,  # type: ignore
    LazyFunction,  # type: ignore
    SelfAttribute,  # type: ignore
    Sequence,  # type: ignore
    SubFactory,  # type: ignore
)
from factory.alchemy import SQLAlchemyModelFactory
from faker import Faker as FakerGenerator
from sqlmodel import Session

from catalog.models.director import Director, DirectorCreate
from catalog.models.genre import Genre, GenreCreate
from catalog.models.movie import Movie, MovieCreate

__all__ = [
    "genre_create_factory",
    "genre_factory",
    "director_create_factory",
    "director_factory",
    "movie_create_factory",
    "movie_factory",
]

fake = FakerGenerator()


def random_rating() -> Decimal:
    return Decimal(fake.random_int(min=0, max=100)) / 10


class SQLModelFactory(SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session_persistence = "flush"


# --------------------------------------
# FACTORIES
# --------------------------------------


class GenreCreateFactory(Factory):
    class Meta:
        model = GenreCreate

    name = Sequence(lambda n: f"Genre {n}")
    description = Faker("sentence")


@pytest.fixture
def genre_create_factory():
    return GenreCreateFactory


class GenreFactory(SQLModelFactory):
    class Meta:
        model = Genre

    name = Sequence(lambda n: f"Genre {n}")
    description = Faker("sentence")


@pytest.fixture
def genre_factory(db_transaction: Session):
    GenreFactory._meta.sqlalchemy_session = db_transaction
    return GenreFactory


class DirectorCreateFactory(Factory):
    class Meta:
        model = DirectorCreate

    first_name = Faker("first_name")
    last_name = Faker("last_name")
    birth_date = Faker("date_of_birth", minimum_age=25, maximum_age=90)
    nationality = Faker("country")
    biography = Faker("paragraph")


@pytest.fixture
def director_create_factory():
    return DirectorCreateFactory


class DirectorFactory(SQLModelFactory):
    class Meta:
        model = Director

    first_name = Faker("first_name")
    last_name = Faker("last_name")
    birth_date = Faker("date_of_birth", minimum_age=25, maximum_age=90)
    nationality = Faker("country")
    biography = Faker("paragraph")


@pytest.fixture
def director_factory(db_transaction: Session):
    DirectorFactory._meta.sqlalchemy_session = db_transaction
    return DirectorFactory


class MovieCreateFactory(Factory):
    class Meta:
        model = MovieCreate

    title = Faker("catch_phrase")
    description = Faker("sentence")
    release_year = Faker("random_int", min=1950, max=2025)
    duration = Faker("random_int", min=60, max=200)
    rating = LazyFunction(random_rating)
    synopsis = Faker("paragraph")
    genre_id: int
    director_id: int


@pytest.fixture
def movie_create_factory():
    return MovieCreateFactory


class MovieFactory(SQLModelFactory):
    class Meta:
        model = Movie

    title = Faker("catch_phrase")
    description = Faker("sentence")
    release_year = Faker("random_int", min=1950, max=2025)
    duration = Faker("random_int", min=60, max=200)
    rating = LazyFunction(random_rating)
    synopsis = Faker("paragraph")
    genre = SubFactory(GenreFactory)
    genre_id = SelfAttribute("genre.id")
    director = SubFactory(DirectorFactory)
    director_id = SelfAttribute("director.id")


@pytest.fixture
def movie_factory(db_transaction: Session, genre_factory, director_factory):
    MovieFactory._meta.sqlalchemy_session = db_transaction
    return MovieFactory
