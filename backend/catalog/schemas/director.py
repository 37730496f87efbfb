from datetime import datetime

from pydantic import computed_field

from catalog.models.director import DirectorBase

__all__ = [
    "DirectorPublic",
]


class DirectorPublic(DirectorBase):
    id: int
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
