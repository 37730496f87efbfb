from logging import getLogger
from pathlib import PurePath
from uuid import uuid4

from catalog.core.storage import PosterStore, UploadConfig, build_poster_store
from catalog.exceptions.upload_exceptions import InvalidPosterError

__all__ = [
    "ALLOWED_MIME_TYPES",
    "ALLOWED_EXTENSIONS",
    "MAGIC_BYTES",
    "validate_poster",
    "generate_file_name",
    "UploadService",
]

logger = getLogger(__name__)

JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG"

ALLOWED_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png")
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png")
MAGIC_BYTES = {
    "image/jpeg": JPEG_SIGNATURE,
    "image/jpg": JPEG_SIGNATURE,
    "image/png": PNG_SIGNATURE,
}


def _format_megabytes(size: int) -> str:
    return f"{size / (1024 * 1024):.2f}".rstrip("0").rstrip(".")


def validate_poster(
    *,
    content: bytes,
    mime_type: str | None,
    original_name: str | None,
    max_file_size: int,
) -> None:
    """
    Check an uploaded poster before anything is written. The payload must
    carry an allowed MIME type, fit under the size ceiling, have an allowed
    file extension and start with the signature of the claimed type.

    Raises:
        InvalidPosterError: naming the first constraint that was violated.
    """
    if not content:
        raise InvalidPosterError("no file provided")

    if mime_type not in ALLOWED_MIME_TYPES:
        raise InvalidPosterError(
            f"file type {mime_type} is not allowed, only {', '.join(ALLOWED_MIME_TYPES)} are allowed"
        )

    if len(content) > max_file_size:
        raise InvalidPosterError(
            f"file size {_format_megabytes(len(content))}MB exceeds the maximum of "
            f"{_format_megabytes(max_file_size)}MB"
        )

    extension = PurePath(original_name or "").suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise InvalidPosterError(
            f"file extension '{extension}' is not allowed, only {', '.join(ALLOWED_EXTENSIONS)} are allowed"
        )

    if not content.startswith(MAGIC_BYTES[mime_type]):
        raise InvalidPosterError(f"file content does not match its type {mime_type}")


def generate_file_name(original_name: str) -> str:
    """Random file name that keeps only the lowercased extension of the upload."""
    extension = PurePath(original_name).suffix.lower()
    return f"poster-{uuid4()}{extension}"


class UploadService:
    def __init__(self, config: UploadConfig, store: PosterStore | None = None):
        self.config = config
        self.store = store or build_poster_store(config.backend)

    @property
    def max_file_size(self) -> int:
        return self.config.max_file_size

    def store_poster(
        self,
        content: bytes,
        mime_type: str | None,
        original_name: str | None,
    ) -> str:
        """
        Validate and store a poster.

        Returns:
            str: Location of the stored poster (local path or object storage URL).
        Raises:
            InvalidPosterError: If the upload fails validation.
            PosterStorageError: If the backend could not store the file.
        """
        validate_poster(
            content=content,
            mime_type=mime_type,
            original_name=original_name,
            max_file_size=self.max_file_size,
        )
        file_name = generate_file_name(original_name or "")
        return self.store.save(
            content=content,
            file_name=file_name,
            content_type=mime_type or "application/octet-stream",
        )

    def delete_poster(self, location: str | None) -> None:
        """Delete a stored poster. Failures are logged and never raised."""
        if not location:
            return
        try:
            self.store.delete(location)
            logger.info("Deleted poster: %s", location)
        except Exception:
            logger.exception("Failed to delete poster: %s", location)
