from catalog.models.movie import Movie
from catalog.schemas.movie import MoviePublic, MovieSummaryPublic
from catalog.schemas.page import MoviesPage


def to_summary(movie: Movie) -> MovieSummaryPublic:
    return MovieSummaryPublic.model_validate(movie)


def to_public(movie: Movie) -> MoviePublic:
    """
    Convert a Movie row to its public schema with genre and director embedded.
    The relationships must be loadable, i.e. the row is still attached to a session.
    """
    return MoviePublic.model_validate(movie)


def to_page(movies: list[Movie], *, total: int, page: int, limit: int) -> MoviesPage:
    return MoviesPage(
        data=[to_public(movie) for movie in movies],
        total=total,
        page=page,
        limit=limit,
    )
