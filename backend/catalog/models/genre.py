from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import model_validator
from sqlmodel import Field, Relationship, SQLModel

from catalog.utils import now_utc_naive, reject_explicit_nulls

if TYPE_CHECKING:
    from .movie import Movie

__all__ = [
    "GenreBase",
    "GenreCreate",
    "GenreUpdate",
    "Genre",
]


# Shared properties
class GenreBase(SQLModel):
    name: str = Field(max_length=100, unique=True, index=True)
    description: str | None = None


# Properties to receive on genre creation
class GenreCreate(GenreBase):
    name: str = Field(min_length=1, max_length=100)


# Properties to receive on genre update, all are optional
class GenreUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None

    @model_validator(mode="after")
    def check_required_not_null(self) -> "GenreUpdate":
        reject_explicit_nulls(self, "name")
        return self


# Database model, database table inferred from class name
class Genre(GenreBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=now_utc_naive)
    updated_at: datetime = Field(
        default_factory=now_utc_naive,
        sa_column_kwargs={"onupdate": now_utc_naive},
    )
    movies: list["Movie"] = Relationship(back_populates="genre")
