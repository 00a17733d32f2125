from postfeed.db import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(80))
    last_name = db.Column(db.String(80))
    email = db.Column(db.String(255))

    posts = db.relationship(
        "Post",
        backref="user",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
