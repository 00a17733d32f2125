import os

from dotenv import load_dotenv


load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Image hosting credentials; the app refuses to start without them.
REQUIRED_IMAGE_STORE_SETTINGS = (
    "MINIO_ENDPOINT",
    "MINIO_ACCESS_KEY",
    "MINIO_SECRET_KEY",
)


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///posts.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    MINIO_ENDPOINT = os.getenv("MINIO_ENDPOINT")
    MINIO_ACCESS_KEY = os.getenv("MINIO_ACCESS_KEY")
    MINIO_SECRET_KEY = os.getenv("MINIO_SECRET_KEY")
    MINIO_BUCKET = os.getenv("MINIO_BUCKET", "posts")
    MINIO_SECURE = _env_bool("MINIO_SECURE", False)
    MINIO_CONNECT_TIMEOUT = float(os.getenv("MINIO_CONNECT_TIMEOUT", "5"))
    MINIO_READ_TIMEOUT = float(os.getenv("MINIO_READ_TIMEOUT", "20"))
    MINIO_HTTP_POOL_MAXSIZE = int(os.getenv("MINIO_HTTP_POOL_MAXSIZE", "32"))
    MINIO_PUBLIC_BASE_URL = os.getenv(
        "MINIO_PUBLIC_BASE_URL",
        "https://127.0.0.1:9000"
    )

    # No auth layer yet: posts are owned by one seed user, the feed is
    # rendered for the other.
    DEFAULT_AUTHOR_ID = int(os.getenv("DEFAULT_AUTHOR_ID", "1"))
    VIEWER_USER_ID = int(os.getenv("VIEWER_USER_ID", "2"))

    LATEST_POSTS_LIMIT = int(os.getenv("LATEST_POSTS_LIMIT", "2"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
