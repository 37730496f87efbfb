from datetime import datetime

from catalog.models.genre import GenreBase

__all__ = [
    "GenrePublic",
]


class GenrePublic(GenreBase):
    id: int
    created_at: datetime
    updated_at: datetime
