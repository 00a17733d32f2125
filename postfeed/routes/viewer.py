from flask import current_app


def current_viewer_id() -> int:
    # Single seam for viewer identity until an auth layer supplies it.
    return current_app.config["VIEWER_USER_ID"]


def current_author_id() -> int:
    return current_app.config["DEFAULT_AUTHOR_ID"]
