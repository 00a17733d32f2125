from datetime import datetime

from postfeed.db import db


class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    image_url = db.Column(db.Text, nullable=False)
    title = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    likes = db.relationship(
        "Like",
        backref="post",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        db.CheckConstraint("length(image_url) > 0", name="post_image_url_not_empty"),
        db.CheckConstraint("length(title) > 0", name="post_title_not_empty"),
        db.CheckConstraint("length(content) > 0", name="post_content_not_empty"),
    )
