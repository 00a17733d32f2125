import io
import uuid

from postfeed.errors import ImageUploadError
from postfeed.extensions.minio_client import get_image_bucket


ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/png",
}


def _extension_for_mimetype(mimetype: str) -> str:
    mapping = {
        "image/jpeg": "jpg",
        "image/png": "png",
    }
    return mapping.get(mimetype, mimetype.split("/")[-1] or "bin")


def _get_stream_and_length(image):
    if isinstance(image, (bytes, bytearray)):
        return io.BytesIO(image), len(image)

    stream = getattr(image, "stream", image)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except (AttributeError, OSError):
        return stream, -1


def get_image_size(image) -> int:
    """Size of an uploaded image in bytes, or -1 if the stream can't tell."""
    if image is None:
        return 0
    _, length = _get_stream_and_length(image)
    return length


def upload_image(image, content_type: str | None = None) -> str:
    """Store an image payload and return the URL it is served from.

    ``image`` is a werkzeug ``FileStorage``, a file-like object, or raw
    bytes. Any storage failure is raised as ``ImageUploadError`` with the
    original exception chained.
    """
    mimetype = content_type or getattr(image, "mimetype", None) or "application/octet-stream"
    object_name = f"posts/{uuid.uuid4()}.{_extension_for_mimetype(mimetype)}"

    try:
        stream, length = _get_stream_and_length(image)
        return get_image_bucket().put(object_name, stream, length, mimetype)
    except Exception as e:
        raise ImageUploadError() from e
