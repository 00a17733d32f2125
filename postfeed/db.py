import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine


db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE and FK checks unless asked per connection.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db():
    """Create the schema if needed and seed the default users.

    Safe to call repeatedly; must run inside an app context.
    """
    # Imported here so every model is registered on db.metadata first.
    from postfeed.models import like_model, post_model, user_model  # noqa: F401
    from postfeed.repositories.user_repository import seed_default_users

    db.create_all()
    seed_default_users()
