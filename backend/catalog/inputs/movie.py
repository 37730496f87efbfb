from typing import Annotated, Any

from fastapi import Query
from pydantic import BaseModel, field_validator

from catalog.core.enums import MovieSortField, SortOrder
from catalog.models.movie import MAX_RELEASE_YEAR, MIN_RELEASE_YEAR


class MovieFilters(BaseModel):
    search: str | None = None
    genre: str | None = None
    director: str | None = None
    year: int | None = None
    sort_by: MovieSortField = MovieSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC

    @field_validator("search", "genre", "director")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def has_filters(self) -> bool:
        return any(
            value is not None
            for value in (self.search, self.genre, self.director, self.year)
        )

    def cache_params(self) -> dict[str, Any]:
        return {
            "search": self.search,
            "genre": self.genre,
            "director": self.director,
            "year": self.year,
            "sort_by": self.sort_by,
            "order": self.order,
        }


def get_movie_filters(
    search: Annotated[str | None, Query(description="Substring of the title")] = None,
    genre: Annotated[str | None, Query(description="Substring of the genre name")] = None,
    director: Annotated[
        str | None, Query(description="Substring of the director's first or last name")
    ] = None,
    year: Annotated[
        int | None, Query(ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR)
    ] = None,
    sort_by: Annotated[MovieSortField, Query()] = MovieSortField.CREATED_AT,
    order: Annotated[SortOrder, Query()] = SortOrder.DESC,
) -> MovieFilters:
    return MovieFilters(
        search=search,
        genre=genre,
        director=director,
        year=year,
        sort_by=sort_by,
        order=order,
    )
