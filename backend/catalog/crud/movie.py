from decimal import Decimal

from sqlalchemy import func, or_
from sqlmodel import Session, col, select
from sqlmodel.sql.expression import SelectOfScalar

from catalog.core.enums import MovieSortField, SortOrder
from catalog.models.director import Director
from catalog.models.genre import Genre
from catalog.models.movie import Movie, MovieCreate, MovieUpdate
from catalog.utils import LIKE_ESCAPE, contains_pattern

SORT_COLUMNS = {
    MovieSortField.TITLE: Movie.title,
    MovieSortField.RELEASE_YEAR: Movie.release_year,
    MovieSortField.RATING: Movie.rating,
    MovieSortField.CREATED_AT: Movie.created_at,
}


def _paginate(
    *,
    session: Session,
    stmt: SelectOfScalar[Movie],
    limit: int,
    offset: int,
) -> tuple[list[Movie], int]:
    total = session.exec(select(func.count()).select_from(stmt.subquery())).one()
    movies = list(session.exec(stmt.limit(limit).offset(offset)).all())
    return movies, total


def get_movie_by_id(*, session: Session, id: int) -> Movie | None:
    """
    Retrieve a movie by its ID. Genre and director are loaded with it.

    Parameters:
        session (Session): The database session.
        id (int): The ID of the movie to retrieve.
    Returns:
        Movie | None: The movie object if found, otherwise None.
    """
    movie = session.get(Movie, id)
    return movie


def create_movie(*, session: Session, movie_create: MovieCreate) -> Movie:
    """
    Create a new movie. The caller is responsible for making sure the
    referenced genre and director exist.

    Parameters:
        session (Session): The database session.
        movie_create (MovieCreate): The movie data to create.
    Returns:
        Movie: The created movie object.
    Raises:
        IntegrityError: If the store rejects the row.
    """
    db_obj = Movie(**movie_create.model_dump())
    session.add(db_obj)
    session.flush()  # Generate the ID, check integrity
    session.refresh(db_obj)
    return db_obj


def update_movie(*, db_movie: Movie, movie_update: MovieUpdate) -> Movie:
    """
    Update an existing movie with the fields that were set on the update.
    Does not flush, its the callers responsibility to validate references.

    Parameters:
        db_movie (Movie): The existing movie object to update.
        movie_update (MovieUpdate): The updated movie data.
    Returns:
        Movie: The updated movie object.
    """
    movie_data = movie_update.model_dump(exclude_unset=True)
    db_movie.sqlmodel_update(movie_data)
    return db_movie


def delete_movie(*, session: Session, db_movie: Movie) -> None:
    session.delete(db_movie)
    session.flush()


def get_movies(
    *,
    session: Session,
    limit: int,
    offset: int,
    search: str | None = None,
    genre: str | None = None,
    director: str | None = None,
    year: int | None = None,
    sort_by: MovieSortField = MovieSortField.CREATED_AT,
    order: SortOrder = SortOrder.DESC,
) -> tuple[list[Movie], int]:
    """
    Retrieve a page of movies matching the given filters.

    Parameters:
        session (Session): The database session.
        limit (int): The maximum number of movies to retrieve.
        offset (int): The offset for pagination.
        search (str | None): Case-insensitive substring of the title.
        genre (str | None): Case-insensitive substring of the genre name.
        director (str | None): Case-insensitive substring of the director's first or last name.
        year (int | None): Exact release year.
        sort_by (MovieSortField): The column to sort on.
        order (SortOrder): The sort direction.
    Returns:
        tuple[list[Movie], int]: The movies on the page and the total number of matches.
    """
    stmt = (
        select(Movie)
        .join(Genre, col(Movie.genre_id) == col(Genre.id))
        .join(Director, col(Movie.director_id) == col(Director.id))
    )
    if search:
        stmt = stmt.where(
            col(Movie.title).ilike(contains_pattern(search), escape=LIKE_ESCAPE)
        )
    if genre:
        stmt = stmt.where(
            col(Genre.name).ilike(contains_pattern(genre), escape=LIKE_ESCAPE)
        )
    if director:
        pattern = contains_pattern(director)
        stmt = stmt.where(
            or_(
                col(Director.first_name).ilike(pattern, escape=LIKE_ESCAPE),
                col(Director.last_name).ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if year is not None:
        stmt = stmt.where(col(Movie.release_year) == year)

    sort_column = col(SORT_COLUMNS[sort_by])
    tie_breaker = col(Movie.id)
    if order == SortOrder.ASC:
        stmt = stmt.order_by(sort_column.asc(), tie_breaker.asc())
    else:
        stmt = stmt.order_by(sort_column.desc(), tie_breaker.desc())

    return _paginate(session=session, stmt=stmt, limit=limit, offset=offset)


def get_movies_by_genre(
    *,
    session: Session,
    genre_id: int,
    limit: int,
    offset: int,
) -> tuple[list[Movie], int]:
    """
    Retrieve a page of movies of one genre, newest first.

    Parameters:
        session (Session): The database session.
        genre_id (int): The ID of the genre.
        limit (int): The maximum number of movies to retrieve.
        offset (int): The offset for pagination.
    Returns:
        tuple[list[Movie], int]: The movies on the page and the total number of movies in the genre.
    """
    stmt = (
        select(Movie)
        .where(col(Movie.genre_id) == genre_id)
        .order_by(col(Movie.created_at).desc(), col(Movie.id).desc())
    )
    return _paginate(session=session, stmt=stmt, limit=limit, offset=offset)


def get_movies_by_director(
    *,
    session: Session,
    director_id: int,
    limit: int,
    offset: int,
) -> tuple[list[Movie], int]:
    """
    Retrieve a page of movies by one director, newest first.

    Parameters:
        session (Session): The database session.
        director_id (int): The ID of the director.
        limit (int): The maximum number of movies to retrieve.
        offset (int): The offset for pagination.
    Returns:
        tuple[list[Movie], int]: The movies on the page and the total number of movies by the director.
    """
    stmt = (
        select(Movie)
        .where(col(Movie.director_id) == director_id)
        .order_by(col(Movie.created_at).desc(), col(Movie.id).desc())
    )
    return _paginate(session=session, stmt=stmt, limit=limit, offset=offset)


def get_popular_movies(
    *,
    session: Session,
    min_rating: Decimal,
    limit: int,
    offset: int,
) -> tuple[list[Movie], int]:
    """
    Retrieve a page of movies rated at least min_rating, highest rated first.
    Unrated movies are never included.

    Parameters:
        session (Session): The database session.
        min_rating (Decimal): The lowest rating to include.
        limit (int): The maximum number of movies to retrieve.
        offset (int): The offset for pagination.
    Returns:
        tuple[list[Movie], int]: The movies on the page and the total number of rated movies.
    """
    stmt = (
        select(Movie)
        .where(col(Movie.rating) >= min_rating)
        .order_by(
            col(Movie.rating).desc(),
            col(Movie.created_at).desc(),
            col(Movie.id).desc(),
        )
    )
    return _paginate(session=session, stmt=stmt, limit=limit, offset=offset)
