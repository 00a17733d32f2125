import logging
from dataclasses import dataclass, replace
from threading import Lock

from postfeed.errors import FeedApiError


logger = logging.getLogger(__name__)

PENDING = "pending"
CONFIRMED = "confirmed"


def toggle_post_like(posts, post_id):
    """Return ``posts`` with one post's like flipped, leaving the input intact."""
    index = next(
        (i for i, post in enumerate(posts) if post.id == post_id),
        None,
    )
    if index is None:
        return posts

    post = posts[index]
    updated = replace(
        post,
        likes=post.likes + (-1 if post.is_liked else 1),
        is_liked=not post.is_liked,
    )

    new_posts = list(posts)
    new_posts[index] = updated
    return new_posts


@dataclass(eq=False)
class PendingToggle:
    post_id: int
    state: str = PENDING


class OptimisticFeed:
    """Working copy of the feed that shows like toggles before the server does.

    The visible list is the last authoritative listing with every
    outstanding toggle replayed on top, in click order. A toggle whose
    request fails is dropped again (a ``FeedApiError`` is reported as
    ``False``, anything else is re-raised); confirmed toggles stay until
    ``refresh`` brings in a listing that already contains them.
    """

    def __init__(self, posts, toggle_like):
        self._posts = list(posts)
        self._edits = []
        self._toggle_like = toggle_like
        self._lock = Lock()

    @classmethod
    def from_client(cls, client, limit=None):
        return cls(client.list_posts(limit), client.toggle_like)

    @property
    def posts(self):
        with self._lock:
            return list(self._derive())

    @property
    def pending(self):
        with self._lock:
            return [edit.post_id for edit in self._edits if edit.state == PENDING]

    def _derive(self):
        posts = self._posts
        for edit in self._edits:
            posts = toggle_post_like(posts, edit.post_id)
        return posts

    def toggle(self, post_id) -> bool:
        edit = PendingToggle(post_id)
        with self._lock:
            self._edits.append(edit)

        try:
            self._toggle_like(post_id)
        except FeedApiError as e:
            logger.warning("Like toggle for post %s failed, reverting: %s", post_id, e)
            with self._lock:
                self._edits.remove(edit)
            return False
        except Exception:
            # Transport blew up: the edit will never be confirmed either.
            with self._lock:
                self._edits.remove(edit)
            raise

        with self._lock:
            edit.state = CONFIRMED
        return True

    def refresh(self, posts):
        with self._lock:
            self._posts = list(posts)
            self._edits = [edit for edit in self._edits if edit.state == PENDING]
