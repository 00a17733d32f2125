from blinker import Namespace


_signals = Namespace()

# Sent with the Flask app as sender and ``reason``/``post_id`` keywords
# whenever the rendered feed no longer matches the store.
feed_invalidated = _signals.signal("feed-invalidated")

POST_CREATED = "post_created"
LIKE_TOGGLED = "like_toggled"


def log_feed_invalidation(sender, reason=None, post_id=None, **extra):
    sender.logger.info("Feed invalidated (%s) for post %s", reason, post_id)
