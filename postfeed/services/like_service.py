from flask import current_app

from postfeed.errors import PostNotFoundError
from postfeed.repositories.post_repository import get_post_repository
from postfeed.signals import LIKE_TOGGLED, feed_invalidated


def toggle_like(post_id: int, viewer_id: int) -> bool:
    repository = get_post_repository()
    if not repository.post_exists(post_id):
        raise PostNotFoundError(post_id)

    liked = repository.toggle_like(post_id, viewer_id)
    current_app.logger.debug(
        "User %s %s post %s", viewer_id, "liked" if liked else "unliked", post_id
    )

    feed_invalidated.send(
        current_app._get_current_object(),
        reason=LIKE_TOGGLED,
        post_id=post_id,
    )
    return liked
