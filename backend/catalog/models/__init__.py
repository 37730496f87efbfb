from .director import Director, DirectorCreate, DirectorUpdate
from .genre import Genre, GenreCreate, GenreUpdate
from .movie import Movie, MovieCreate, MovieUpdate

Genre.model_rebuild()
Director.model_rebuild()
Movie.model_rebuild()

__all__ = [
    "Genre",
    "GenreCreate",
    "GenreUpdate",
    "Director",
    "DirectorCreate",
    "DirectorUpdate",
    "Movie",
    "MovieCreate",
    "MovieUpdate",
]
