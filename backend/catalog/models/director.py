from datetime import date, datetime
from typing import TYPE_CHECKING

from pydantic import model_validator
from sqlmodel import Field, Relationship, SQLModel

from catalog.utils import now_utc_naive, reject_explicit_nulls

if TYPE_CHECKING:
    from .movie import Movie

__all__ = [
    "DirectorBase",
    "DirectorCreate",
    "DirectorUpdate",
    "Director",
]


# Shared properties
class DirectorBase(SQLModel):
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100, index=True)
    birth_date: date | None = None
    nationality: str | None = Field(default=None, max_length=100)
    biography: str | None = None


# Properties to receive on director creation
class DirectorCreate(DirectorBase):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)


# Properties to receive on director update, all are optional
class DirectorUpdate(SQLModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    birth_date: date | None = None
    nationality: str | None = Field(default=None, max_length=100)
    biography: str | None = None

    @model_validator(mode="after")
    def check_required_not_null(self) -> "DirectorUpdate":
        reject_explicit_nulls(self, "first_name", "last_name")
        return self


# Database model, database table inferred from class name
class Director(DirectorBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=now_utc_naive)
    updated_at: datetime = Field(
        default_factory=now_utc_naive,
        sa_column_kwargs={"onupdate": now_utc_naive},
    )
    movies: list["Movie"] = Relationship(back_populates="director")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
