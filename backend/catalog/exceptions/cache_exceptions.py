from .base import InfrastructureError


class CacheBackendError(InfrastructureError):
    detail = "The cache backend is unavailable."
