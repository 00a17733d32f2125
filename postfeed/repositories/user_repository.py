from postfeed.db import db
from postfeed.models.user_model import User


SEED_USERS = (
    {"first_name": "John", "last_name": "Doe", "email": "john@example.com"},
    {"first_name": "Max", "last_name": "Schwarz", "email": "max@example.com"},
)


def seed_default_users() -> bool:
    if User.query.count() > 0:
        return False

    for fields in SEED_USERS:
        db.session.add(User(**fields))

    db.session.commit()
    return True
