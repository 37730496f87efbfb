from typing import Annotated

from fastapi import APIRouter, Depends, status

from catalog.api.deps import CacheDep, SessionDep
from catalog.inputs.pagination import Pagination, get_pagination
from catalog.models.genre import GenreCreate, GenreUpdate
from catalog.schemas.genre import GenrePublic
from catalog.schemas.movie import GenreWithMovies
from catalog.schemas.page import GenresPage
from catalog.services import genres as genres_service

router = APIRouter(prefix="/genres", tags=["genres"])


@router.post("/", response_model=GenrePublic, status_code=status.HTTP_201_CREATED)
def create_genre(
    *,
    session: SessionDep,
    cache: CacheDep,
    genre_in: GenreCreate,
) -> GenrePublic:
    return genres_service.create_genre(
        session=session,
        cache=cache,
        genre_create=genre_in,
    )


@router.get("/", response_model=GenresPage)
def read_genres(
    session: SessionDep,
    cache: CacheDep,
    pagination: Annotated[Pagination, Depends(get_pagination)],
) -> GenresPage:
    return genres_service.get_genres(
        session=session,
        cache=cache,
        pagination=pagination,
    )


@router.get("/{id}", response_model=GenreWithMovies)
def read_genre(*, session: SessionDep, id: int) -> GenreWithMovies:
    return genres_service.get_genre(session=session, genre_id=id)


@router.patch("/{id}", response_model=GenrePublic)
def update_genre(
    *,
    session: SessionDep,
    cache: CacheDep,
    id: int,
    genre_in: GenreUpdate,
) -> GenrePublic:
    return genres_service.update_genre(
        session=session,
        cache=cache,
        genre_id=id,
        genre_update=genre_in,
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_genre(*, session: SessionDep, cache: CacheDep, id: int) -> None:
    genres_service.delete_genre(session=session, cache=cache, genre_id=id)
