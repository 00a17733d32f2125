from postfeed.db import db


class Like(db.Model):
    __tablename__ = "likes"

    # A row means "this user likes this post"; the composite key keeps
    # the pair unique.
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
