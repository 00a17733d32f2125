from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PostView:
    """A post as one viewer sees it: like count and like flag are derived."""

    id: int
    image_url: str
    title: str
    content: str
    created_at: datetime
    user_first_name: str | None
    user_last_name: str | None
    likes: int
    is_liked: bool

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.id,
            image_url=row.image_url,
            title=row.title,
            content=row.content,
            created_at=row.created_at,
            user_first_name=row.user_first_name,
            user_last_name=row.user_last_name,
            likes=int(row.likes or 0),
            is_liked=bool(row.is_liked),
        )
