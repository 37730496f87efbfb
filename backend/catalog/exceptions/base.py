from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(self, detail: str | None = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity_name: str, entity_id: int):
        self.entity_name = entity_name
        self.entity_id = entity_id
        detail = f"{entity_name} with ID {entity_id} not found."
        super().__init__(detail)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid input."


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "The request conflicts with the current state of the resource."


class InfrastructureError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StorageError(InfrastructureError):
    detail = "The catalog database could not complete the operation."


class ReferencedEntityNotFoundError(ValidationError):
    def __init__(self, entity_name: str, entity_id: int):
        self.entity_name = entity_name
        self.entity_id = entity_id
        detail = f"{entity_name} with ID {entity_id} not found."
        super().__init__(detail)


class EntityInUseError(ConflictError):
    def __init__(self, entity_name: str, entity_id: int, movie_count: int):
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.movie_count = movie_count
        detail = (
            f"{entity_name} with ID {entity_id} is still referenced by "
            f"{movie_count} movie(s) and cannot be deleted."
        )
        super().__init__(detail)
