from catalog.converters import movie as movie_converters
from catalog.models.genre import Genre
from catalog.schemas.genre import GenrePublic
from catalog.schemas.movie import GenreWithMovies


def to_public(genre: Genre) -> GenrePublic:
    return GenrePublic.model_validate(genre)


def to_with_movies(genre: Genre) -> GenreWithMovies:
    return GenreWithMovies(
        **to_public(genre).model_dump(),
        movies=[movie_converters.to_summary(movie) for movie in genre.movies],
    )
