from flask import jsonify, request
from flask_cors import cross_origin

from . import posts_public_bp
from ..posts.service import PostService, PUBLISHED
from ...core.context import get_store, get_pressroom
from ...core.errors import NotFoundError

PUBLIC_FIELDS = ('id', 'title', 'slug', 'content', 'excerpt', 'featured_image', 'published_at')


def _public(post, with_content=True):
    fields = PUBLIC_FIELDS if with_content else tuple(f for f in PUBLIC_FIELDS if f != 'content')
    return {field: post.get(field) for field in fields}


def _service():
    return PostService(get_store(), table=get_pressroom().config('POSTS_TABLE', 'posts'))


@posts_public_bp.route('', methods=['GET'])
@cross_origin()
def published_posts():
    """Published posts; ?limit=N caps the list"""
    posts = _service().list_published()
    limit = request.args.get('limit', type=int)
    if limit and limit > 0:
        posts = posts[:limit]
    return jsonify([_public(post, with_content=False) for post in posts])


@posts_public_bp.route('/<slug>', methods=['GET'])
@cross_origin()
def published_post(slug):
    post = _service().get_post_by_slug(slug)
    if post.get('status') != PUBLISHED:
        raise NotFoundError('Post not found')
    return jsonify(_public(post))
