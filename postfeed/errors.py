IMAGE_UPLOAD_FAILED_MESSAGE = (
    "Image upload failed, post was not created. Please try again later."
)


class PostValidationError(ValueError):
    """Raised with every problem found in a post submission."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ImageUploadError(Exception):
    def __init__(self, message=IMAGE_UPLOAD_FAILED_MESSAGE):
        super().__init__(message)


class ConstraintViolation(Exception):
    pass


class PostNotFoundError(LookupError):
    def __init__(self, post_id):
        self.post_id = post_id
        super().__init__("Post not found")


class FeedApiError(Exception):
    """Non-2xx answer (or no answer) from the feed HTTP API."""

    def __init__(self, status, payload=None):
        self.status = status
        self.payload = payload or {}
        message = self.payload.get("error") or "; ".join(self.payload.get("errors", []))
        super().__init__(f"HTTP {status}: {message}" if message else f"HTTP {status}")
