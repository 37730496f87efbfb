from catalog.converters import movie as movie_converters
from catalog.models.director import Director
from catalog.schemas.director import DirectorPublic
from catalog.schemas.movie import DirectorWithMovies


def to_public(director: Director) -> DirectorPublic:
    return DirectorPublic.model_validate(director)


def to_with_movies(director: Director) -> DirectorWithMovies:
    return DirectorWithMovies(
        **to_public(director).model_dump(exclude={"full_name"}),
        movies=[movie_converters.to_summary(movie) for movie in director.movies],
    )
