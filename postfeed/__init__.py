from flask import Flask

from postfeed.config import Config
from postfeed.db import db, init_db
from postfeed.extensions.extensions import ma
from postfeed.extensions.minio_client import init_image_store
from postfeed.routes.like_routes import like_bp
from postfeed.routes.post_routes import post_bp
from postfeed.signals import feed_invalidated, log_feed_invalidation


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Refuses to start without the image-store credentials.
    init_image_store(app)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    ma.init_app(app)
    app.register_blueprint(post_bp, url_prefix="/api")
    app.register_blueprint(like_bp, url_prefix="/api")

    feed_invalidated.connect(log_feed_invalidation, app)

    with app.app_context():
        init_db()

    return app
