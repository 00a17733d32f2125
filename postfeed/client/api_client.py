import json

import urllib3
from marshmallow import ValidationError

from postfeed.errors import FeedApiError
from postfeed.models.post_view import PostView
from postfeed.schemas.post_schema import post_views_schema


class FeedApiClient:
    """Thin HTTP client for the feed API, used by ``OptimisticFeed``."""

    def __init__(self, base_url: str, http=None, connect_timeout: float = 5.0, read_timeout: float = 20.0):
        self.base_url = base_url.rstrip("/")
        self._http = http or urllib3.PoolManager(
            timeout=urllib3.Timeout(connect=connect_timeout, read=read_timeout),
            retries=False,
        )

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self._http.request(method, f"{self.base_url}{path}", **kwargs)
        except urllib3.exceptions.HTTPError as e:
            raise FeedApiError(None, {"error": str(e)}) from e

        payload = {}
        if response.data:
            try:
                payload = json.loads(response.data.decode("utf-8"))
            except ValueError:
                payload = {}

        if response.status >= 400:
            raise FeedApiError(response.status, payload)
        return payload

    @staticmethod
    def _load_posts(payload: dict) -> list[PostView]:
        try:
            return post_views_schema.load(payload.get("posts", []))
        except ValidationError as e:
            raise FeedApiError(None, {"error": "Malformed feed payload", "errors": e.messages}) from e

    def list_posts(self, limit: int | None = None) -> list[PostView]:
        fields = {"limit": str(limit)} if limit is not None else None
        return self._load_posts(self._request("GET", "/api/posts", fields=fields))

    def latest_posts(self) -> list[PostView]:
        return self._load_posts(self._request("GET", "/api/posts/latest"))

    def toggle_like(self, post_id: int) -> bool:
        payload = self._request("POST", f"/api/posts/{post_id}/like")
        return bool(payload.get("liked"))

    def create_post(self, title: str, content: str, image_bytes: bytes, filename: str, content_type: str) -> int:
        payload = self._request(
            "POST",
            "/api/posts",
            fields={
                "title": title,
                "content": content,
                "image": (filename, image_bytes, content_type),
            },
        )
        return payload["post_id"]
