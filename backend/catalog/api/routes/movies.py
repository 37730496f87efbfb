from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from catalog.api.deps import CacheDep, SessionDep, UploadDep
from catalog.inputs.movie import MovieFilters, get_movie_filters
from catalog.inputs.pagination import Pagination, get_pagination
from catalog.models.movie import MovieCreate, MovieUpdate
from catalog.schemas.movie import MoviePublic
from catalog.schemas.page import MoviesPage
from catalog.schemas.poster import PosterUploadResponse
from catalog.services import movies as movies_service

router = APIRouter(prefix="/movies", tags=["movies"])

PaginationDep = Annotated[Pagination, Depends(get_pagination)]


@router.post("/", response_model=MoviePublic, status_code=status.HTTP_201_CREATED)
def create_movie(
    *,
    session: SessionDep,
    cache: CacheDep,
    movie_in: MovieCreate,
) -> MoviePublic:
    return movies_service.create_movie(
        session=session,
        cache=cache,
        movie_create=movie_in,
    )


@router.get("/", response_model=MoviesPage)
def read_movies(
    session: SessionDep,
    cache: CacheDep,
    pagination: PaginationDep,
    filters: Annotated[MovieFilters, Depends(get_movie_filters)],
) -> MoviesPage:
    return movies_service.get_movies(
        session=session,
        cache=cache,
        pagination=pagination,
        filters=filters,
    )


@router.get("/popular", response_model=MoviesPage)
def read_popular_movies(
    session: SessionDep,
    cache: CacheDep,
    pagination: PaginationDep,
) -> MoviesPage:
    return movies_service.get_popular_movies(
        session=session,
        cache=cache,
        pagination=pagination,
    )


@router.get("/genre/{genre_id}", response_model=MoviesPage)
def read_movies_by_genre(
    genre_id: int,
    session: SessionDep,
    cache: CacheDep,
    pagination: PaginationDep,
) -> MoviesPage:
    return movies_service.get_movies_by_genre(
        session=session,
        cache=cache,
        genre_id=genre_id,
        pagination=pagination,
    )


@router.get("/director/{director_id}", response_model=MoviesPage)
def read_movies_by_director(
    director_id: int,
    session: SessionDep,
    cache: CacheDep,
    pagination: PaginationDep,
) -> MoviesPage:
    return movies_service.get_movies_by_director(
        session=session,
        cache=cache,
        director_id=director_id,
        pagination=pagination,
    )


# KEEP THE /{id} ROUTES BELOW THE FIXED PATHS
@router.get("/{id}", response_model=MoviePublic)
def read_movie(*, session: SessionDep, id: int) -> MoviePublic:
    return movies_service.get_movie(session=session, movie_id=id)


@router.patch("/{id}", response_model=MoviePublic)
def update_movie(
    *,
    session: SessionDep,
    cache: CacheDep,
    id: int,
    movie_in: MovieUpdate,
) -> MoviePublic:
    return movies_service.update_movie(
        session=session,
        cache=cache,
        movie_id=id,
        movie_update=movie_in,
    )


@router.post(
    "/{id}/poster",
    response_model=PosterUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_movie_poster(
    *,
    session: SessionDep,
    cache: CacheDep,
    uploads: UploadDep,
    id: int,
    file: Annotated[UploadFile, File(description="JPEG or PNG poster image")],
) -> PosterUploadResponse:
    content = file.file.read()
    return movies_service.upload_poster(
        session=session,
        cache=cache,
        uploads=uploads,
        movie_id=id,
        content=content,
        mime_type=file.content_type,
        original_name=file.filename,
    )


@router.delete("/{id}/poster", status_code=status.HTTP_204_NO_CONTENT)
def delete_movie_poster(
    *,
    session: SessionDep,
    cache: CacheDep,
    uploads: UploadDep,
    id: int,
) -> None:
    movies_service.delete_poster(
        session=session,
        cache=cache,
        uploads=uploads,
        movie_id=id,
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movie(
    *,
    session: SessionDep,
    cache: CacheDep,
    uploads: UploadDep,
    id: int,
) -> None:
    movies_service.delete_movie(
        session=session,
        cache=cache,
        uploads=uploads,
        movie_id=id,
    )
