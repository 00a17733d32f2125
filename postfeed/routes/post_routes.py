from flask import Blueprint, jsonify, request, url_for

from postfeed.errors import ImageUploadError, PostValidationError
from postfeed.routes.viewer import current_author_id, current_viewer_id
from postfeed.schemas.post_schema import post_views_schema
from postfeed.services.post_service import (
    create_post,
    list_latest_posts,
    list_posts,
)

post_bp = Blueprint("posts", __name__)


@post_bp.route("/posts", methods=["GET"])
def feed():
    limit = request.args.get("limit")
    if limit is not None:
        try:
            limit = int(limit)
        except ValueError:
            limit = 0
        if limit <= 0:
            return jsonify({"error": "limit must be a positive integer"}), 400

    posts = list_posts(current_viewer_id(), limit=limit)
    return jsonify({"posts": post_views_schema.dump(posts)}), 200


@post_bp.route("/posts/latest", methods=["GET"])
def latest_posts():
    posts = list_latest_posts(current_viewer_id())
    return jsonify({"posts": post_views_schema.dump(posts)}), 200


@post_bp.route("/posts", methods=["POST"])
def submit_post():
    title = request.form.get("title")
    content = request.form.get("content")
    image = request.files.get("image")

    try:
        post_id = create_post(title, content, image, owner_id=current_author_id())
    except PostValidationError as e:
        return jsonify({"errors": e.errors}), 400
    except ImageUploadError as e:
        return jsonify({"errors": [str(e)]}), 503

    feed_url = url_for("posts.feed")
    response = jsonify({
        "message": "Post created successfully",
        "post_id": post_id,
        "redirect": feed_url,
    })
    response.status_code = 201
    response.headers["Location"] = feed_url
    return response
