from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from catalog.api.deps import CacheDep, SessionDep
from catalog.inputs.pagination import Pagination, get_pagination
from catalog.models.director import DirectorCreate, DirectorUpdate
from catalog.schemas.director import DirectorPublic
from catalog.schemas.movie import DirectorWithMovies
from catalog.schemas.page import DirectorsPage
from catalog.services import directors as directors_service

router = APIRouter(prefix="/directors", tags=["directors"])


@router.post("/", response_model=DirectorPublic, status_code=status.HTTP_201_CREATED)
def create_director(
    *,
    session: SessionDep,
    cache: CacheDep,
    director_in: DirectorCreate,
) -> DirectorPublic:
    return directors_service.create_director(
        session=session,
        cache=cache,
        director_create=director_in,
    )


@router.get("/", response_model=DirectorsPage)
def read_directors(
    session: SessionDep,
    cache: CacheDep,
    pagination: Annotated[Pagination, Depends(get_pagination)],
    search: str | None = Query(
        None, description="Substring of the director's first or last name"
    ),
) -> DirectorsPage:
    return directors_service.get_directors(
        session=session,
        cache=cache,
        pagination=pagination,
        search=search or None,
    )


@router.get("/{id}", response_model=DirectorWithMovies)
def read_director(*, session: SessionDep, id: int) -> DirectorWithMovies:
    return directors_service.get_director(session=session, director_id=id)


@router.patch("/{id}", response_model=DirectorPublic)
def update_director(
    *,
    session: SessionDep,
    cache: CacheDep,
    id: int,
    director_in: DirectorUpdate,
) -> DirectorPublic:
    return directors_service.update_director(
        session=session,
        cache=cache,
        director_id=id,
        director_update=director_in,
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_director(*, session: SessionDep, cache: CacheDep, id: int) -> None:
    directors_service.delete_director(session=session, cache=cache, director_id=id)
