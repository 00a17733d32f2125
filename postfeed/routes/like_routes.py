from flask import Blueprint, jsonify

from postfeed.errors import PostNotFoundError
from postfeed.routes.viewer import current_viewer_id
from postfeed.services.like_service import toggle_like

like_bp = Blueprint("likes", __name__)


@like_bp.route("/posts/<int:post_id>/like", methods=["POST"])
def toggle_like_route(post_id):
    try:
        liked = toggle_like(post_id, current_viewer_id())
    except PostNotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({"liked": liked}), 200
