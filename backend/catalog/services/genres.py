from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from catalog.converters import genre as genre_converters
from catalog.core.enums import CacheNamespace, EntityKind
from catalog.crud import genre as genres_crud
from catalog.exceptions.base import EntityInUseError, StorageError
from catalog.exceptions.genre_exceptions import (
    GenreNameAlreadyExistsError,
    GenreNotFoundError,
)
from catalog.inputs.pagination import Pagination
from catalog.models.genre import Genre, GenreCreate, GenreUpdate
from catalog.schemas.genre import GenrePublic
from catalog.schemas.movie import GenreWithMovies
from catalog.schemas.page import GenresPage
from catalog.services.cache import CacheService


def _get_genre_or_raise(*, session: Session, genre_id: int) -> Genre:
    genre = genres_crud.get_genre_by_id(session=session, id=genre_id)
    if genre is None:
        raise GenreNotFoundError(genre_id)
    return genre


def _ensure_name_available(
    *, session: Session, name: str, genre_id: int | None = None
) -> None:
    existing = genres_crud.get_genre_by_name(session=session, name=name)
    if existing is not None and existing.id != genre_id:
        raise GenreNameAlreadyExistsError(name)


def create_genre(
    *,
    session: Session,
    cache: CacheService,
    genre_create: GenreCreate,
) -> GenrePublic:
    """
    Create a new genre.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Cache to invalidate after the write.
        genre_create (GenreCreate): Genre data to insert.
    Returns:
        GenrePublic: The created genre.
    Raises:
        GenreNameAlreadyExistsError: If the name is already taken.
        StorageError: If the database rejects the write.
    """
    _ensure_name_available(session=session, name=genre_create.name)
    try:
        genre = genres_crud.create_genre(session=session, genre_create=genre_create)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise GenreNameAlreadyExistsError(genre_create.name) from e
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.GENRE)
    return genre_converters.to_public(genre)


def get_genres(
    *,
    session: Session,
    cache: CacheService,
    pagination: Pagination,
) -> GenresPage:
    """
    Get a page of genres ordered by name. Served from the cache when possible.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Listing cache.
        pagination (Pagination): Page and page size.
    Returns:
        GenresPage: The requested page.
    """
    params = pagination.cache_params()
    cached = cache.get_model(CacheNamespace.GENRES_ALL, GenresPage, params)
    if cached is not None:
        return cached

    genres, total = genres_crud.get_genres(
        session=session,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    result = GenresPage(
        data=[genre_converters.to_public(genre) for genre in genres],
        total=total,
        page=pagination.page,
        limit=pagination.limit,
    )
    cache.set_model(CacheNamespace.GENRES_ALL, result, params)
    return result


def get_genre(*, session: Session, genre_id: int) -> GenreWithMovies:
    """
    Get a genre with its movies.

    Raises:
        GenreNotFoundError: If the genre does not exist.
    """
    genre = _get_genre_or_raise(session=session, genre_id=genre_id)
    return genre_converters.to_with_movies(genre)


def update_genre(
    *,
    session: Session,
    cache: CacheService,
    genre_id: int,
    genre_update: GenreUpdate,
) -> GenrePublic:
    """
    Update the fields that were set on an existing genre.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Cache to invalidate after the write.
        genre_id (int): ID of the genre to update.
        genre_update (GenreUpdate): Fields to change.
    Returns:
        GenrePublic: The updated genre.
    Raises:
        GenreNotFoundError: If the genre does not exist.
        GenreNameAlreadyExistsError: If the new name belongs to another genre.
        StorageError: If the database rejects the write.
    """
    genre = _get_genre_or_raise(session=session, genre_id=genre_id)
    if genre_update.name is not None:
        _ensure_name_available(
            session=session, name=genre_update.name, genre_id=genre_id
        )

    try:
        genres_crud.update_genre(db_genre=genre, genre_update=genre_update)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise GenreNameAlreadyExistsError(genre_update.name or genre.name) from e
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.GENRE)
    return genre_converters.to_public(genre)


def delete_genre(*, session: Session, cache: CacheService, genre_id: int) -> None:
    """
    Delete a genre. Genres that still have movies are not deleted.

    Raises:
        GenreNotFoundError: If the genre does not exist.
        EntityInUseError: If movies still reference the genre.
        StorageError: If the database rejects the delete.
    """
    genre = _get_genre_or_raise(session=session, genre_id=genre_id)
    movie_count = genres_crud.count_movies_for_genre(session=session, genre_id=genre_id)
    if movie_count:
        raise EntityInUseError("Genre", genre_id, movie_count)

    try:
        genres_crud.delete_genre(session=session, db_genre=genre)
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.GENRE)
