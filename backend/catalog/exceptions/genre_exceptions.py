from .base import ConflictError, NotFoundError


class GenreNotFoundError(NotFoundError):
    def __init__(self, genre_id: int):
        self.genre_id = genre_id
        super().__init__("Genre", genre_id)


class GenreNameAlreadyExistsError(ConflictError):
    def __init__(self, name: str):
        self.name = name
        detail = f"Genre with name '{name}' already exists."
        super().__init__(detail)
