from sqlalchemy import delete, exists, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased

from postfeed.db import db
from postfeed.errors import ConstraintViolation
from postfeed.models.like_model import Like
from postfeed.models.post_model import Post
from postfeed.models.post_view import PostView
from postfeed.models.user_model import User


class PostRepository:
    """Reads and writes posts and likes through an injected session.

    Every write commits before returning; a failed write is rolled back
    so the session stays usable.
    """

    def __init__(self, session):
        self.session = session

    def list_posts(self, viewer_id: int, limit: int | None = None) -> list[PostView]:
        viewer_like = aliased(Like)
        is_liked = (
            exists()
            .where(
                viewer_like.post_id == Post.id,
                viewer_like.user_id == viewer_id,
            )
            .label("is_liked")
        )

        stmt = (
            select(
                Post.id,
                Post.image_url,
                Post.title,
                Post.content,
                Post.created_at,
                User.first_name.label("user_first_name"),
                User.last_name.label("user_last_name"),
                func.count(Like.post_id).label("likes"),
                is_liked,
            )
            .join(User, Post.user_id == User.id)
            .outerjoin(Like, Like.post_id == Post.id)
            .group_by(Post.id, User.id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        return [PostView.from_row(row) for row in self.session.execute(stmt).all()]

    def insert_post(self, image_url: str, title: str, content: str, owner_user_id: int) -> int:
        post = Post(
            image_url=image_url,
            title=title,
            content=content,
            user_id=owner_user_id,
        )
        self.session.add(post)

        try:
            self.session.flush()
            post_id = post.id
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConstraintViolation(
                f"Post for user {owner_user_id} violates a store constraint"
            ) from e

        return post_id

    def post_exists(self, post_id: int) -> bool:
        return bool(self.session.scalar(select(exists().where(Post.id == post_id))))

    def count_likes(self, post_id: int) -> int:
        return self.session.scalar(
            select(func.count()).select_from(Like).where(Like.post_id == post_id)
        )

    def like_exists(self, post_id: int, user_id: int) -> bool:
        return bool(
            self.session.scalar(
                select(
                    exists().where(Like.post_id == post_id, Like.user_id == user_id)
                )
            )
        )

    def toggle_like(self, post_id: int, user_id: int) -> bool:
        """Flip the like state of one (user, post) pair; True means liked now."""
        if self._delete_like(post_id, user_id):
            self.session.commit()
            return False

        return self._insert_like(post_id, user_id)

    def like(self, post_id: int, user_id: int) -> bool:
        return self._insert_like(post_id, user_id)

    def _delete_like(self, post_id: int, user_id: int) -> bool:
        result = self.session.execute(
            delete(Like).where(Like.post_id == post_id, Like.user_id == user_id)
        )
        return result.rowcount > 0

    def _insert_like(self, post_id: int, user_id: int) -> bool:
        try:
            self.session.execute(insert(Like).values(user_id=user_id, post_id=post_id))
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            # A racing toggle inserted the same pair first: already liked.
            if self.like_exists(post_id, user_id):
                return True
            raise ConstraintViolation(
                f"User {user_id} cannot like post {post_id}"
            ) from e

        return True


def get_post_repository() -> PostRepository:
    return PostRepository(db.session)
