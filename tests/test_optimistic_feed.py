import json
import threading
import unittest
from dataclasses import replace
from datetime import datetime

from postfeed.client.api_client import FeedApiClient
from postfeed.client.optimistic_feed import OptimisticFeed, toggle_post_like
from postfeed.errors import FeedApiError
from postfeed.models.post_view import PostView


def make_post(post_id, likes=0, is_liked=False):
    return PostView(
        id=post_id,
        image_url=f"https://media.example.com/posts/{post_id}.png",
        title=f"Post {post_id}",
        content="Content",
        created_at=datetime(2026, 10, 1, 12, 0, post_id),
        user_first_name="John",
        user_last_name="Doe",
        likes=likes,
        is_liked=is_liked,
    )


class TestTogglePostLike(unittest.TestCase):
    def test_like_copies_list_and_post(self):
        posts = [make_post(1), make_post(2, likes=5)]

        updated = toggle_post_like(posts, 2)

        self.assertIsNot(updated, posts)
        self.assertIs(updated[0], posts[0])
        self.assertEqual((updated[1].likes, updated[1].is_liked), (6, True))
        self.assertEqual((posts[1].likes, posts[1].is_liked), (5, False))

    def test_unlike_decrements(self):
        updated = toggle_post_like([make_post(1, likes=3, is_liked=True)], 1)
        self.assertEqual((updated[0].likes, updated[0].is_liked), (2, False))

    def test_unknown_post_leaves_list_unchanged(self):
        posts = [make_post(1)]
        self.assertIs(toggle_post_like(posts, 99), posts)


class TestOptimisticFeed(unittest.TestCase):
    def test_rapid_toggles_apply_in_sequence(self):
        calls = []
        feed = OptimisticFeed([make_post(1, likes=4)], calls.append)

        self.assertTrue(feed.toggle(1))
        self.assertEqual((feed.posts[0].likes, feed.posts[0].is_liked), (5, True))

        self.assertTrue(feed.toggle(1))
        self.assertEqual((feed.posts[0].likes, feed.posts[0].is_liked), (4, False))

        self.assertTrue(feed.toggle(1))
        self.assertEqual((feed.posts[0].likes, feed.posts[0].is_liked), (5, True))
        self.assertEqual(calls, [1, 1, 1])

    def test_edit_is_visible_while_request_is_in_flight(self):
        seen = []
        feed = None

        def toggle_like(post_id):
            seen.append((feed.posts[0].likes, feed.posts[0].is_liked, feed.pending))

        feed = OptimisticFeed([make_post(1)], toggle_like)
        feed.toggle(1)

        self.assertEqual(seen, [(1, True, [1])])
        self.assertEqual(feed.pending, [])

    def test_failed_toggle_is_reverted(self):
        def toggle_like(post_id):
            raise FeedApiError(500, {"error": "boom"})

        feed = OptimisticFeed([make_post(1, likes=2)], toggle_like)

        with self.assertLogs("postfeed.client.optimistic_feed", level="WARNING"):
            self.assertFalse(feed.toggle(1))

        self.assertEqual((feed.posts[0].likes, feed.posts[0].is_liked), (2, False))

    def test_transport_failure_is_reverted_and_reraised(self):
        def toggle_like(post_id):
            raise ConnectionResetError("connection reset by peer")

        feed = OptimisticFeed([make_post(1, likes=2)], toggle_like)

        with self.assertRaises(ConnectionResetError):
            feed.toggle(1)

        self.assertEqual(feed.pending, [])
        feed.refresh([make_post(1, likes=2)])
        self.assertEqual(feed.pending, [])
        self.assertEqual((feed.posts[0].likes, feed.posts[0].is_liked), (2, False))

    def test_failure_reverts_only_its_own_edit(self):
        outcomes = iter([None, FeedApiError(503), None])

        def toggle_like(post_id):
            outcome = next(outcomes)
            if outcome is not None:
                raise outcome

        feed = OptimisticFeed([make_post(1), make_post(2)], toggle_like)
        with self.assertLogs("postfeed.client.optimistic_feed", level="WARNING"):
            results = [feed.toggle(1), feed.toggle(2), feed.toggle(1)]

        self.assertEqual(results, [True, False, True])
        self.assertEqual(
            [(post.likes, post.is_liked) for post in feed.posts],
            [(0, False), (0, False)],
        )

    def test_refresh_replaces_confirmed_edits(self):
        feed = OptimisticFeed([make_post(1)], lambda post_id: None)
        feed.toggle(1)

        feed.refresh([make_post(1, likes=1, is_liked=True), make_post(2)])

        self.assertEqual(
            [(post.id, post.likes, post.is_liked) for post in feed.posts],
            [(1, 1, True), (2, 0, False)],
        )

    def test_refresh_keeps_pending_edits(self):
        release = threading.Event()
        started = threading.Event()

        def toggle_like(post_id):
            started.set()
            release.wait(timeout=5)

        feed = OptimisticFeed([make_post(1)], toggle_like)
        worker = threading.Thread(target=feed.toggle, args=(1,))
        worker.start()
        self.assertTrue(started.wait(timeout=5))

        feed.refresh([make_post(1, likes=10)])
        self.assertEqual((feed.posts[0].likes, feed.posts[0].is_liked), (11, True))

        release.set()
        worker.join(timeout=5)
        self.assertEqual(feed.pending, [])

    def test_posts_returns_a_copy(self):
        feed = OptimisticFeed([make_post(1)], lambda post_id: None)
        feed.posts.clear()
        self.assertEqual(len(feed.posts), 1)


class FakeResponse:
    def __init__(self, status, payload=None):
        self.status = status
        self.data = json.dumps(payload).encode("utf-8") if payload is not None else b""


class FakeHttp:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        return self.responses.pop(0)


def post_payload(post_id, likes=0, is_liked=False):
    return {
        "id": post_id,
        "image_url": f"https://media.example.com/posts/{post_id}.png",
        "title": f"Post {post_id}",
        "content": "Content",
        "created_at": "2026-10-01T12:00:00",
        "user_first_name": "John",
        "user_last_name": "Doe",
        "likes": likes,
        "is_liked": is_liked,
    }


class TestFeedApiClient(unittest.TestCase):
    def test_list_posts_parses_post_views(self):
        http = FakeHttp([FakeResponse(200, {"posts": [post_payload(3, likes=2, is_liked=True)]})])
        client = FeedApiClient("http://feed.local/", http=http)

        posts = client.list_posts(limit=2)

        self.assertEqual(http.requests, [("GET", "http://feed.local/api/posts", {"fields": {"limit": "2"}})])
        self.assertEqual(posts[0].id, 3)
        self.assertEqual(posts[0].created_at, datetime(2026, 10, 1, 12, 0, 0))
        self.assertEqual((posts[0].likes, posts[0].is_liked), (2, True))

    def test_latest_posts_parses_post_views(self):
        http = FakeHttp([FakeResponse(200, {"posts": [post_payload(5), post_payload(4, likes=1)]})])
        client = FeedApiClient("http://feed.local", http=http)

        posts = client.latest_posts()

        self.assertEqual(http.requests, [("GET", "http://feed.local/api/posts/latest", {})])
        self.assertTrue(all(isinstance(post, PostView) for post in posts))
        self.assertEqual([(post.id, post.likes) for post in posts], [(5, 0), (4, 1)])

    def test_malformed_feed_payload_raises(self):
        broken = post_payload(1)
        del broken["title"]
        broken["likes"] = "many"
        http = FakeHttp([FakeResponse(200, {"posts": [broken]})])
        client = FeedApiClient("http://feed.local", http=http)

        with self.assertRaises(FeedApiError) as ctx:
            client.list_posts()

        self.assertEqual(ctx.exception.payload["error"], "Malformed feed payload")
        self.assertEqual(set(ctx.exception.payload["errors"][0]), {"title", "likes"})

    def test_unknown_keys_in_feed_payload_are_ignored(self):
        extra = dict(post_payload(1), comments=3)
        http = FakeHttp([FakeResponse(200, {"posts": [extra]})])

        posts = FeedApiClient("http://feed.local", http=http).list_posts()

        expected = replace(make_post(1), created_at=datetime(2026, 10, 1, 12, 0, 0))
        self.assertEqual(posts, [expected])

    def test_toggle_like_raises_on_error_status(self):
        http = FakeHttp([FakeResponse(404, {"error": "Post not found"})])
        client = FeedApiClient("http://feed.local", http=http)

        with self.assertRaises(FeedApiError) as ctx:
            client.toggle_like(7)

        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(str(ctx.exception), "HTTP 404: Post not found")
        self.assertEqual(http.requests[0][:2], ("POST", "http://feed.local/api/posts/7/like"))

    def test_create_post_sends_multipart_fields(self):
        http = FakeHttp([FakeResponse(201, {"post_id": 12, "redirect": "/api/posts"})])
        client = FeedApiClient("http://feed.local", http=http)

        post_id = client.create_post("Hello", "World", b"png", "pic.png", "image/png")

        self.assertEqual(post_id, 12)
        fields = http.requests[0][2]["fields"]
        self.assertEqual(fields["image"], ("pic.png", b"png", "image/png"))
        self.assertEqual(fields["title"], "Hello")

    def test_create_post_surfaces_validation_errors(self):
        http = FakeHttp([FakeResponse(400, {"errors": ["Title is required.", "Image is required."]})])
        client = FeedApiClient("http://feed.local", http=http)

        with self.assertRaises(FeedApiError) as ctx:
            client.create_post("", "World", b"", "pic.png", "image/png")

        self.assertEqual(
            ctx.exception.payload["errors"],
            ["Title is required.", "Image is required."],
        )

    def test_optimistic_feed_over_client(self):
        http = FakeHttp([
            FakeResponse(200, {"posts": [post_payload(1), post_payload(2, likes=1)]}),
            FakeResponse(200, {"liked": True}),
            FakeResponse(500, {"error": "database unavailable"}),
        ])
        feed = OptimisticFeed.from_client(FeedApiClient("http://feed.local", http=http))

        self.assertTrue(feed.toggle(2))
        with self.assertLogs("postfeed.client.optimistic_feed", level="WARNING"):
            self.assertFalse(feed.toggle(1))

        self.assertEqual(
            [(post.id, post.likes, post.is_liked) for post in feed.posts],
            [(1, 0, False), (2, 2, True)],
        )


if __name__ == "__main__":
    unittest.main()
