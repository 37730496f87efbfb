from .base import NotFoundError


class DirectorNotFoundError(NotFoundError):
    def __init__(self, director_id: int):
        self.director_id = director_id
        super().__init__("Director", director_id)
