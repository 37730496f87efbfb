from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import model_validator
from sqlmodel import Field, Relationship, SQLModel

from catalog.utils import now_utc_naive, reject_explicit_nulls

if TYPE_CHECKING:
    from .director import Director
    from .genre import Genre

__all__ = [
    "MIN_RELEASE_YEAR",
    "MAX_RELEASE_YEAR",
    "MovieBase",
    "MovieCreate",
    "MovieUpdate",
    "Movie",
]

MIN_RELEASE_YEAR = 1888
MAX_RELEASE_YEAR = 2030


# Shared properties
class MovieBase(SQLModel):
    title: str = Field(max_length=200, index=True)
    description: str | None = None
    release_year: int = Field(ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR, index=True)
    duration: int | None = Field(default=None, gt=0, description="Minutes")
    # NUMERIC(3, 1): at most one decimal place, never rounded
    rating: Decimal | None = Field(
        default=None, ge=0, le=10, max_digits=3, decimal_places=1
    )
    synopsis: str | None = None


# Properties to receive on movie creation
class MovieCreate(MovieBase):
    title: str = Field(min_length=1, max_length=200)
    genre_id: int = Field(gt=0)
    director_id: int = Field(gt=0)


# Properties to receive on movie update, all are optional
class MovieUpdate(SQLModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    release_year: int | None = Field(
        default=None, ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR
    )
    duration: int | None = Field(default=None, gt=0)
    rating: Decimal | None = Field(
        default=None, ge=0, le=10, max_digits=3, decimal_places=1
    )
    synopsis: str | None = None
    genre_id: int | None = Field(default=None, gt=0)
    director_id: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_required_not_null(self) -> "MovieUpdate":
        reject_explicit_nulls(
            self, "title", "release_year", "genre_id", "director_id"
        )
        return self


# Database model, database table inferred from class name
class Movie(MovieBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    # Written only by the poster upload endpoints
    poster_url: str | None = Field(default=None, max_length=500)
    genre_id: int = Field(foreign_key="genre.id", index=True)
    director_id: int = Field(foreign_key="director.id", index=True)
    created_at: datetime = Field(default_factory=now_utc_naive, index=True)
    updated_at: datetime = Field(
        default_factory=now_utc_naive,
        sa_column_kwargs={"onupdate": now_utc_naive},
    )
    genre: "Genre" = Relationship(
        back_populates="movies", sa_relationship_kwargs={"lazy": "joined"}
    )
    director: "Director" = Relationship(
        back_populates="movies", sa_relationship_kwargs={"lazy": "joined"}
    )
