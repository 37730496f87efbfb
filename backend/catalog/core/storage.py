from logging import getLogger
from pathlib import Path
from typing import Annotated, Any, Literal, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, Field, SecretStr

from catalog.core.config import Settings
from catalog.exceptions.upload_exceptions import PosterStorageError

__all__ = [
    "LocalBackend",
    "ObjectStorageCredentials",
    "ObjectStorageBackend",
    "StorageBackend",
    "UploadConfig",
    "upload_config_from_settings",
    "PosterStore",
    "LocalPosterStore",
    "S3PosterStore",
    "build_poster_store",
]

logger = getLogger(__name__)


class LocalBackend(BaseModel):
    kind: Literal["local"] = "local"
    directory: Path
    public_path: str = "/uploads/posters"


class ObjectStorageCredentials(BaseModel):
    access_key: str
    secret_key: SecretStr


class ObjectStorageBackend(BaseModel):
    kind: Literal["s3"] = "s3"
    bucket: str
    credentials: ObjectStorageCredentials
    region: str = "us-east-1"
    key_prefix: str = "posters"


StorageBackend = Annotated[
    LocalBackend | ObjectStorageBackend, Field(discriminator="kind")
]


class UploadConfig(BaseModel):
    backend: StorageBackend
    max_file_size: int = Field(gt=0)


def upload_config_from_settings(settings: Settings) -> UploadConfig:
    """
    Resolve where posters are stored. Object storage is only used in
    production and only when access key, secret key and bucket are all set;
    everything else stores posters on local disk.
    """
    backend: LocalBackend | ObjectStorageBackend
    if settings.ENVIRONMENT == "production" and settings.object_storage_configured:
        backend = ObjectStorageBackend(
            bucket=settings.AWS_S3_BUCKET_NAME,  # type: ignore[arg-type]
            credentials=ObjectStorageCredentials(
                access_key=settings.AWS_ACCESS_KEY,  # type: ignore[arg-type]
                secret_key=SecretStr(settings.AWS_SECRET_KEY),  # type: ignore[arg-type]
            ),
            region=settings.AWS_REGION,
        )
    else:
        if settings.ENVIRONMENT == "production":
            logger.warning(
                "Object storage credentials not provided, falling back to local storage in production"
            )
        backend = LocalBackend(
            directory=Path(settings.UPLOAD_DIR),
            public_path=settings.UPLOAD_URL_PREFIX,
        )
    return UploadConfig(backend=backend, max_file_size=settings.MAX_UPLOAD_SIZE)


class PosterStore(Protocol):
    def save(self, *, content: bytes, file_name: str, content_type: str) -> str: ...

    def delete(self, location: str) -> None: ...


class LocalPosterStore:
    def __init__(self, backend: LocalBackend):
        self.directory = backend.directory
        self.public_path = backend.public_path.rstrip("/")
        self.ensure_directory()

    def ensure_directory(self) -> None:
        if not self.directory.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info("Created upload directory: %s", self.directory)

    def save(self, *, content: bytes, file_name: str, content_type: str) -> str:
        try:
            (self.directory / file_name).write_bytes(content)
        except OSError as e:
            logger.exception("Local upload failed")
            raise PosterStorageError(
                "Failed to upload image to local storage"
            ) from e
        url = f"{self.public_path}/{file_name}"
        logger.info("Uploaded locally: %s", url)
        return url

    def delete(self, location: str) -> None:
        # /uploads/posters/poster-<uuid>.jpg -> poster-<uuid>.jpg
        if not location.startswith(f"{self.public_path}/"):
            logger.warning(
                "Refusing to delete poster outside %s: %s", self.public_path, location
            )
            return
        file_name = Path(location.rsplit("/", 1)[-1]).name
        if not file_name:
            return
        file_path = self.directory / file_name
        if file_path.exists():
            file_path.unlink()


class S3PosterStore:
    def __init__(self, backend: ObjectStorageBackend, client: Any | None = None):
        self.bucket = backend.bucket
        self.key_prefix = backend.key_prefix.strip("/")
        self.client = client or boto3.client(
            "s3",
            region_name=backend.region,
            aws_access_key_id=backend.credentials.access_key,
            aws_secret_access_key=backend.credentials.secret_key.get_secret_value(),
        )
        logger.info("Initialized S3 client for bucket %s", self.bucket)

    @property
    def base_url(self) -> str:
        return f"https://{self.bucket}.s3.amazonaws.com/"

    def save(self, *, content: bytes, file_name: str, content_type: str) -> str:
        key = f"{self.key_prefix}/{file_name}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
                ContentDisposition="inline",
                CacheControl="max-age=31536000",
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("S3 upload failed")
            raise PosterStorageError(
                "Failed to upload image to cloud storage"
            ) from e
        url = f"{self.base_url}{key}"
        logger.info("Uploaded to S3: %s", url)
        return url

    def delete(self, location: str) -> None:
        # https://bucket.s3.amazonaws.com/posters/file.jpg -> posters/file.jpg
        if not location.startswith(self.base_url):
            logger.warning(
                "Refusing to delete poster outside bucket %s: %s", self.bucket, location
            )
            return
        key = location.removeprefix(self.base_url)
        if not key.startswith(f"{self.key_prefix}/") or ".." in key.split("/"):
            logger.warning(
                "Refusing to delete key outside %s/: %s", self.key_prefix, key
            )
            return
        self.client.delete_object(Bucket=self.bucket, Key=key)


def build_poster_store(backend: LocalBackend | ObjectStorageBackend) -> PosterStore:
    if isinstance(backend, ObjectStorageBackend):
        return S3PosterStore(backend)
    return LocalPosterStore(backend)
