from sqlmodel import Session

from catalog.converters import director as director_converters
from catalog.core.enums import CacheNamespace, EntityKind
from catalog.crud import director as directors_crud
from catalog.exceptions.base import EntityInUseError, StorageError
from catalog.exceptions.director_exceptions import DirectorNotFoundError
from catalog.inputs.pagination import Pagination
from catalog.models.director import Director, DirectorCreate, DirectorUpdate
from catalog.schemas.director import DirectorPublic
from catalog.schemas.movie import DirectorWithMovies
from catalog.schemas.page import DirectorsPage
from catalog.services.cache import CacheService


def _get_director_or_raise(*, session: Session, director_id: int) -> Director:
    director = directors_crud.get_director_by_id(session=session, id=director_id)
    if director is None:
        raise DirectorNotFoundError(director_id)
    return director


def create_director(
    *,
    session: Session,
    cache: CacheService,
    director_create: DirectorCreate,
) -> DirectorPublic:
    """
    Create a new director.

    Parameters:
        session (Session): Database session.
        cache (CacheService): Cache to invalidate after the write.
        director_create (DirectorCreate): Director data to insert.
    Returns:
        DirectorPublic: The created director.
    Raises:
        StorageError: If the database rejects the write.
    """
    try:
        director = directors_crud.create_director(
            session=session, director_create=director_create
        )
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.DIRECTOR)
    return director_converters.to_public(director)


def get_directors(
    *,
    session: Session,
    cache: CacheService,
    pagination: Pagination,
    search: str | None = None,
) -> DirectorsPage:
    """
    Get a page of directors ordered by last name, optionally filtered by name.
    Served from the cache when possible.
    """
    params = {**pagination.cache_params(), "search": search}
    cached = cache.get_model(CacheNamespace.DIRECTORS_ALL, DirectorsPage, params)
    if cached is not None:
        return cached

    directors, total = directors_crud.get_directors(
        session=session,
        limit=pagination.limit,
        offset=pagination.offset,
        search=search,
    )
    result = DirectorsPage(
        data=[director_converters.to_public(director) for director in directors],
        total=total,
        page=pagination.page,
        limit=pagination.limit,
    )
    cache.set_model(CacheNamespace.DIRECTORS_ALL, result, params)
    return result


def get_director(*, session: Session, director_id: int) -> DirectorWithMovies:
    director = _get_director_or_raise(session=session, director_id=director_id)
    return director_converters.to_with_movies(director)


def update_director(
    *,
    session: Session,
    cache: CacheService,
    director_id: int,
    director_update: DirectorUpdate,
) -> DirectorPublic:
    """
    Update the fields that were set on an existing director.

    Raises:
        DirectorNotFoundError: If the director does not exist.
        StorageError: If the database rejects the write.
    """
    director = _get_director_or_raise(session=session, director_id=director_id)
    try:
        directors_crud.update_director(
            db_director=director, director_update=director_update
        )
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.DIRECTOR)
    return director_converters.to_public(director)


def delete_director(
    *, session: Session, cache: CacheService, director_id: int
) -> None:
    """
    Delete a director. Directors that still have movies are not deleted.

    Raises:
        DirectorNotFoundError: If the director does not exist.
        EntityInUseError: If movies still reference the director.
        StorageError: If the database rejects the delete.
    """
    director = _get_director_or_raise(session=session, director_id=director_id)
    movie_count = directors_crud.count_movies_for_director(
        session=session, director_id=director_id
    )
    if movie_count:
        raise EntityInUseError("Director", director_id, movie_count)

    try:
        directors_crud.delete_director(session=session, db_director=director)
        session.commit()
    except Exception as e:
        session.rollback()
        raise StorageError from e

    cache.invalidate(EntityKind.DIRECTOR)
