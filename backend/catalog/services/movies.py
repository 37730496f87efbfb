from decimal import Decimal
from logging import getLogger

from sqlmodel import Session

from catalog.converters import movie as movie_converters
from catalog.core.enums import CacheNamespace, EntityKind
from catalog.crud import movie as movies_crud
from catalog.exceptions.base import StorageError
from catalog.exceptions.movie_exceptions import MovieNotFoundError
from catalog.inputs.movie import MovieFilters
from catalog.inputs.pagination import Pagination
from catalog.models.director import Director
from catalog.models.genre import Genre
from catalog.models.movie import Movie, MovieCreate, MovieUpdate
from catalog.schemas.movie import MoviePublic
from catalog.schemas.page import MoviesPage
from catalog.schemas.poster import PosterUploadResponse
from catalog.services.cache import CacheService
from catalog.services.references import require_reference
from catalog.services.uploads import UploadService

logger = getLogger(__name__)

POPULAR_MIN_RATING = Decimal("5.0")


def _get_movie_or_raise(*, session: Session, movie_id: int) -> Movie:
    movie = movies_crud.get_movie_by_id(session=session, id=movie_id)
    if movie is None:
        raise MovieNotFoundError(movie_id)
    return movie


def create_movie(
    *,
    session: Session,
    cache: CacheService,
    movie_create: MovieCreate,
) -> MoviePublic:
    """
    Create a new movie after checking that its genre and director exist.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Cache to invalidate after the write.
        movie_create (MovieCreate): Movie data to insert.
    Returns:
        MoviePublic: The created movie with genre and director attached.
    Raises:
        ReferencedEntityNotFoundError: If the genre or director does not exist.
        StorageError: If the database rejects the write.
    """
    require_reference(session=session, model=Genre, entity_id=movie_create.genre_id)
    require_reference(
        session=session, model=Director, entity_id=movie_create.director_id
    )

    try:
        movie = movies_crud.create_movie(session=session, movie_create=movie_create)
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.MOVIE)
    return movie_converters.to_public(movie)


def get_movies(
    *,
    session: Session,
    cache: CacheService,
    pagination: Pagination,
    filters: MovieFilters,
) -> MoviesPage:
    """
    Get a filtered, sorted page of movies. Unfiltered listings and searches
    are cached under separate namespaces.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Listing cache.
        pagination (Pagination): Page and page size.
        filters (MovieFilters): Search, filter and sort options.
    Returns:
        MoviesPage: The requested page.
    """
    namespace = (
        CacheNamespace.MOVIES_SEARCH
        if filters.has_filters
        else CacheNamespace.MOVIES_ALL
    )
    params = {**pagination.cache_params(), **filters.cache_params()}
    cached = cache.get_model(namespace, MoviesPage, params)
    if cached is not None:
        return cached

    movies, total = movies_crud.get_movies(
        session=session,
        limit=pagination.limit,
        offset=pagination.offset,
        search=filters.search,
        genre=filters.genre,
        director=filters.director,
        year=filters.year,
        sort_by=filters.sort_by,
        order=filters.order,
    )
    result = movie_converters.to_page(
        movies, total=total, page=pagination.page, limit=pagination.limit
    )
    cache.set_model(namespace, result, params)
    return result


def get_movies_by_genre(
    *,
    session: Session,
    cache: CacheService,
    genre_id: int,
    pagination: Pagination,
) -> MoviesPage:
    params = {**pagination.cache_params(), "genre_id": genre_id}
    cached = cache.get_model(CacheNamespace.MOVIES_BY_GENRE, MoviesPage, params)
    if cached is not None:
        return cached

    movies, total = movies_crud.get_movies_by_genre(
        session=session,
        genre_id=genre_id,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    result = movie_converters.to_page(
        movies, total=total, page=pagination.page, limit=pagination.limit
    )
    cache.set_model(CacheNamespace.MOVIES_BY_GENRE, result, params)
    return result


def get_movies_by_director(
    *,
    session: Session,
    cache: CacheService,
    director_id: int,
    pagination: Pagination,
) -> MoviesPage:
    params = {**pagination.cache_params(), "director_id": director_id}
    cached = cache.get_model(CacheNamespace.MOVIES_BY_DIRECTOR, MoviesPage, params)
    if cached is not None:
        return cached

    movies, total = movies_crud.get_movies_by_director(
        session=session,
        director_id=director_id,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    result = movie_converters.to_page(
        movies, total=total, page=pagination.page, limit=pagination.limit
    )
    cache.set_model(CacheNamespace.MOVIES_BY_DIRECTOR, result, params)
    return result


def get_popular_movies(
    *,
    session: Session,
    cache: CacheService,
    pagination: Pagination,
) -> MoviesPage:
    """Rated movies of at least 5.0, best rated first."""
    params = pagination.cache_params()
    cached = cache.get_model(CacheNamespace.MOVIES_POPULAR, MoviesPage, params)
    if cached is not None:
        return cached

    movies, total = movies_crud.get_popular_movies(
        session=session,
        min_rating=POPULAR_MIN_RATING,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    result = movie_converters.to_page(
        movies, total=total, page=pagination.page, limit=pagination.limit
    )
    cache.set_model(CacheNamespace.MOVIES_POPULAR, result, params)
    return result


def get_movie(*, session: Session, movie_id: int) -> MoviePublic:
    """
    Get a single movie with its genre and director.

    Raises:
        MovieNotFoundError: If the movie does not exist.
    """
    movie = _get_movie_or_raise(session=session, movie_id=movie_id)
    return movie_converters.to_public(movie)


def update_movie(
    *,
    session: Session,
    cache: CacheService,
    movie_id: int,
    movie_update: MovieUpdate,
) -> MoviePublic:
    """
    Update the fields that were set on an existing movie. A changed genre or
    director is checked the same way as on creation.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Cache to invalidate after the write.
        movie_id (int): ID of the movie to update.
        movie_update (MovieUpdate): Fields to change.
    Returns:
        MoviePublic: The updated movie.
    Raises:
        MovieNotFoundError: If the movie does not exist.
        ReferencedEntityNotFoundError: If a new genre or director does not exist.
        StorageError: If the database rejects the write.
    """
    movie = _get_movie_or_raise(session=session, movie_id=movie_id)

    changes = movie_update.model_dump(exclude_unset=True)
    if changes.get("genre_id") is not None and changes["genre_id"] != movie.genre_id:
        require_reference(session=session, model=Genre, entity_id=changes["genre_id"])
    if (
        changes.get("director_id") is not None
        and changes["director_id"] != movie.director_id
    ):
        require_reference(
            session=session, model=Director, entity_id=changes["director_id"]
        )

    try:
        movies_crud.update_movie(db_movie=movie, movie_update=movie_update)
        session.commit()
        session.refresh(movie)
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.MOVIE)
    return movie_converters.to_public(movie)


def delete_movie(
    *,
    session: Session,
    cache: CacheService,
    uploads: UploadService,
    movie_id: int,
) -> None:
    """
    Delete a movie. Its poster is removed afterwards on a best-effort basis.

    Raises:
        MovieNotFoundError: If the movie does not exist.
        StorageError: If the database rejects the delete.
    """
    movie = _get_movie_or_raise(session=session, movie_id=movie_id)
    poster_url = movie.poster_url

    try:
        movies_crud.delete_movie(session=session, db_movie=movie)
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.MOVIE)
    if poster_url:
        uploads.delete_poster(poster_url)


def upload_poster(
    *,
    session: Session,
    cache: CacheService,
    uploads: UploadService,
    movie_id: int,
    content: bytes,
    mime_type: str | None,
    original_name: str | None,
) -> PosterUploadResponse:
    """
    Store a poster for a movie, replacing the previous one if there was any.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Cache to invalidate after the write.
        uploads (UploadService): Poster storage.
        movie_id (int): ID of the movie.
        content (bytes): Raw file content.
        mime_type (str | None): Declared content type of the upload.
        original_name (str | None): File name as sent by the client.
    Returns:
        PosterUploadResponse: Location and generated file name of the poster.
    Raises:
        MovieNotFoundError: If the movie does not exist.
        InvalidPosterError: If the file fails validation.
        PosterStorageError: If the file could not be stored.
        StorageError: If the database rejects the write.
    """
    movie = _get_movie_or_raise(session=session, movie_id=movie_id)
    previous_url = movie.poster_url

    poster_url = uploads.store_poster(
        content=content, mime_type=mime_type, original_name=original_name
    )
    logger.info("Stored poster for movie %s at %s", movie_id, poster_url)

    try:
        movie.poster_url = poster_url
        session.add(movie)
        session.commit()
    except Exception as e:
        session.rollback()
        uploads.delete_poster(poster_url)
        raise StorageError from e

    cache.invalidate(EntityKind.MOVIE)
    if previous_url and previous_url != poster_url:
        uploads.delete_poster(previous_url)

    return PosterUploadResponse(
        poster_url=poster_url,
        message="Poster uploaded successfully",
        file_name=poster_url.rsplit("/", 1)[-1],
    )


def delete_poster(
    *,
    session: Session,
    cache: CacheService,
    uploads: UploadService,
    movie_id: int,
) -> None:
    """
    Remove the poster of a movie. A movie without a poster is left as is.

    Raises:
        MovieNotFoundError: If the movie does not exist.
        StorageError: If the database rejects the write.
    """
    movie = _get_movie_or_raise(session=session, movie_id=movie_id)
    poster_url = movie.poster_url
    if not poster_url:
        return

    try:
        movie.poster_url = None
        session.add(movie)
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.MOVIE)
    uploads.delete_poster(poster_url)
