from marshmallow import EXCLUDE, post_load

from postfeed.extensions.extensions import ma
from postfeed.models.post_view import PostView


class PostViewSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    id = ma.Integer(required=True)
    image_url = ma.String(required=True)
    title = ma.String(required=True)
    content = ma.String(required=True)
    created_at = ma.DateTime(required=True)
    user_first_name = ma.String(allow_none=True, load_default=None)
    user_last_name = ma.String(allow_none=True, load_default=None)
    likes = ma.Integer(required=True)
    is_liked = ma.Boolean(required=True)

    @post_load
    def make_post_view(self, data, **kwargs):
        return PostView(**data)


post_views_schema = PostViewSchema(many=True)
