from dataclasses import dataclass
from threading import Lock

import urllib3
from flask import current_app
from minio import Minio

from postfeed.config import REQUIRED_IMAGE_STORE_SETTINGS


EXTENSION_KEY = "image_bucket"
MULTIPART_PART_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class ImageStoreSettings:
    endpoint: str
    access_key: str
    secret_key: str
    bucket: str
    public_base_url: str
    secure: bool = False
    connect_timeout: float = 5.0
    read_timeout: float = 20.0
    pool_maxsize: int = 32

    @classmethod
    def from_config(cls, config):
        """Read the image-store block of an app config.

        Raises ``RuntimeError`` naming the first missing credential.
        """
        for name in REQUIRED_IMAGE_STORE_SETTINGS:
            value = config.get(name)
            if not isinstance(value, str) or not value.strip():
                raise RuntimeError(f"{name} is not set")

        return cls(
            endpoint=config["MINIO_ENDPOINT"].strip(),
            access_key=config["MINIO_ACCESS_KEY"].strip(),
            secret_key=config["MINIO_SECRET_KEY"].strip(),
            bucket=config.get("MINIO_BUCKET", "posts"),
            public_base_url=config.get("MINIO_PUBLIC_BASE_URL", "").rstrip("/"),
            secure=bool(config.get("MINIO_SECURE", False)),
            connect_timeout=float(config.get("MINIO_CONNECT_TIMEOUT", 5)),
            read_timeout=float(config.get("MINIO_READ_TIMEOUT", 20)),
            pool_maxsize=int(config.get("MINIO_HTTP_POOL_MAXSIZE", 32)),
        )


def build_minio_client(settings: ImageStoreSettings) -> Minio:
    # One attempt per upload; a failed post submission is not retried.
    http_client = urllib3.PoolManager(
        timeout=urllib3.Timeout(
            connect=settings.connect_timeout,
            read=settings.read_timeout,
        ),
        retries=False,
        maxsize=settings.pool_maxsize,
    )
    return Minio(
        settings.endpoint,
        access_key=settings.access_key,
        secret_key=settings.secret_key,
        secure=settings.secure,
        http_client=http_client,
    )


class ImageBucket:
    """The bucket post images are written to, created on first use."""

    def __init__(self, client, settings: ImageStoreSettings):
        self.client = client
        self.settings = settings
        self._ready = False
        self._lock = Lock()

    def ensure_bucket(self):
        with self._lock:
            if self._ready:
                return
            if not self.client.bucket_exists(self.settings.bucket):
                self.client.make_bucket(self.settings.bucket)
            self._ready = True

    def public_url(self, object_name: str) -> str:
        return f"{self.settings.public_base_url}/{self.settings.bucket}/{object_name}"

    def put(self, object_name: str, stream, length: int, content_type: str) -> str:
        self.ensure_bucket()

        upload_kwargs = {
            "bucket_name": self.settings.bucket,
            "object_name": object_name,
            "data": stream,
            "length": length,
            "content_type": content_type,
        }
        if length == -1:
            upload_kwargs["part_size"] = MULTIPART_PART_SIZE

        self.client.put_object(**upload_kwargs)
        return self.public_url(object_name)


def init_image_store(app):
    settings = ImageStoreSettings.from_config(app.config)
    app.extensions[EXTENSION_KEY] = ImageBucket(build_minio_client(settings), settings)


def get_image_bucket() -> ImageBucket:
    return current_app.extensions[EXTENSION_KEY]
