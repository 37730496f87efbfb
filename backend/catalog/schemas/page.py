from typing import Generic, TypeVar

from pydantic import BaseModel

from .director import DirectorPublic
from .genre import GenrePublic
from .movie import MoviePublic

__all__ = [
    "Page",
    "MoviesPage",
    "GenresPage",
    "DirectorsPage",
]

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: list[T]
    total: int
    page: int
    limit: int


MoviesPage = Page[MoviePublic]
GenresPage = Page[GenrePublic]
DirectorsPage = Page[DirectorPublic]
