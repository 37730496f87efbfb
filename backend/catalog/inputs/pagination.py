from typing import Annotated, Any

from fastapi import Query
from pydantic import BaseModel, Field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class Pagination(BaseModel):
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def cache_params(self) -> dict[str, Any]:
        return {"page": self.page, "limit": self.limit}


def get_pagination(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = DEFAULT_PAGE,
    limit: Annotated[
        int, Query(ge=1, le=MAX_LIMIT, description="Number of items per page")
    ] = DEFAULT_LIMIT,
) -> Pagination:
    return Pagination(page=page, limit=limit)
