from .base import InfrastructureError, ValidationError


class InvalidPosterError(ValidationError):
    """Raised when an uploaded poster violates one of the upload constraints."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid poster: {reason}")


class PosterStorageError(InfrastructureError):
    detail = "The poster could not be stored."
