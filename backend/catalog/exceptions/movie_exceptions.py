from .base import NotFoundError


class MovieNotFoundError(NotFoundError):
    def __init__(self, movie_id: int):
        self.movie_id = movie_id
        super().__init__("Movie", movie_id)
