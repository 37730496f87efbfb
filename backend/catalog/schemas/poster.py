from pydantic import BaseModel

__all__ = [
    "PosterUploadResponse",
]


class PosterUploadResponse(BaseModel):
    poster_url: str
    message: str
    file_name: str
