from flask import current_app

from postfeed.errors import ImageUploadError, PostValidationError
from postfeed.repositories.post_repository import get_post_repository
from postfeed.services import image_store
from postfeed.signals import POST_CREATED, feed_invalidated


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_submission(title, content, image) -> list[str]:
    """Return every problem with a submission, in form order."""
    errors = []

    if _is_blank(title):
        errors.append("Title is required.")

    if _is_blank(content):
        errors.append("Content is required.")

    if image is None or image_store.get_image_size(image) == 0:
        errors.append("Image is required.")
    else:
        mimetype = getattr(image, "mimetype", None) or ""
        if mimetype not in image_store.ALLOWED_IMAGE_MIME_TYPES:
            errors.append("Image must be a PNG or JPEG file.")

    return errors


def create_post(title, content, image, owner_id: int) -> int:
    errors = validate_submission(title, content, image)
    if errors:
        raise PostValidationError(errors)

    try:
        image_url = image_store.upload_image(image)
    except ImageUploadError:
        current_app.logger.exception("Image upload failed; post was not created")
        raise

    post_id = get_post_repository().insert_post(
        image_url=image_url,
        title=title.strip(),
        content=content.strip(),
        owner_user_id=owner_id,
    )
    current_app.logger.info("Created post %s for user %s", post_id, owner_id)

    feed_invalidated.send(
        current_app._get_current_object(),
        reason=POST_CREATED,
        post_id=post_id,
    )
    return post_id


def list_posts(viewer_id: int, limit: int | None = None):
    return get_post_repository().list_posts(viewer_id, limit=limit)


def list_latest_posts(viewer_id: int):
    return list_posts(viewer_id, limit=current_app.config["LATEST_POSTS_LIMIT"])
