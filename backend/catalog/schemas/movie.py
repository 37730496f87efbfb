from datetime import datetime
from decimal import Decimal

from pydantic import field_serializer

from catalog.models.movie import MovieBase

from .director import DirectorPublic
from .genre import GenrePublic

__all__ = [
    "MovieSummaryPublic",
    "MoviePublic",
    "GenreWithMovies",
    "DirectorWithMovies",
]


class MovieSummaryPublic(MovieBase):
    """A movie without its embedded genre and director."""

    id: int
    genre_id: int
    director_id: int
    poster_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("rating")
    def serialize_rating(self, rating: Decimal | None) -> float | None:
        return float(rating) if rating is not None else None


class MoviePublic(MovieSummaryPublic):
    genre: GenrePublic
    director: DirectorPublic


class GenreWithMovies(GenrePublic):
    movies: list[MovieSummaryPublic]


class DirectorWithMovies(DirectorPublic):
    movies: list[MovieSummaryPublic]
