"""
Posts Admin Routes
==================

Editor page and JSON API for posts. Errors raised by the service become
JSON responses through the app-wide PressroomError handler.
"""

from flask import render_template, request, jsonify

from . import posts_bp
from .service import PostService
from ...core.auth import login_required, api_login_required
from ...core.content import generate_slug
from ...core.context import get_store, get_pressroom
from ...core.errors import ValidationError
from ...core.logging_service import LoggingService


def _service(admin):
    return PostService(get_store(admin), table=get_pressroom().config('POSTS_TABLE', 'posts'))


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


# ===== Pages =====

@posts_bp.route('/')
@login_required
def posts_list(admin):
    """Post list with status filter and search"""
    return render_template('posts/list.html', admin=admin)


@posts_bp.route('/new')
@posts_bp.route('/edit/<post_id>')
@login_required
def post_editor(admin, post_id=None):
    """Post editor"""
    return render_template('posts/editor.html', admin=admin, post_id=post_id)


# ===== API =====

@posts_bp.route('/api/posts', methods=['GET'])
@api_login_required
def get_posts(admin):
    """List posts; ?status=draft|published and ?q=search"""
    posts = _service(admin).list_posts(
        status=request.args.get('status') or None,
        search=request.args.get('q') or None,
    )
    return jsonify(posts)


@posts_bp.route('/api/posts/<post_id>', methods=['GET'])
@api_login_required
def get_post(admin, post_id):
    return jsonify(_service(admin).get_post(post_id))


@posts_bp.route('/api/posts', methods=['POST'])
@api_login_required
def create_post(admin):
    post = _service(admin).create_post(_json_body(), admin.user_id)
    LoggingService.log_user_action('posts', f"created post {post.get('slug')}",
                                   user_id=admin.user_id)
    return jsonify({'success': True, 'post': post}), 201


@posts_bp.route('/api/posts/<post_id>', methods=['PUT', 'PATCH'])
@api_login_required
def update_post(admin, post_id):
    data = _json_body()
    post = _service(admin).update_post(
        post_id, data, expected_updated_at=data.get('expected_updated_at'))
    return jsonify({'success': True, 'post': post})


@posts_bp.route('/api/posts/<post_id>', methods=['DELETE'])
@api_login_required
def delete_post(admin, post_id):
    post = _service(admin).delete_post(post_id)
    LoggingService.log_user_action('posts', f"deleted post {post.get('slug')}",
                                   user_id=admin.user_id)
    return jsonify({'success': True})


@posts_bp.route('/api/posts/<post_id>/publish', methods=['POST'])
@api_login_required
def publish_post(admin, post_id):
    post = _service(admin).publish_post(post_id)
    LoggingService.log_user_action('posts', f"published post {post.get('slug')}",
                                   user_id=admin.user_id)
    return jsonify({'success': True, 'post': post})


@posts_bp.route('/api/posts/<post_id>/unpublish', methods=['POST'])
@api_login_required
def unpublish_post(admin, post_id):
    post = _service(admin).unpublish_post(post_id)
    LoggingService.log_user_action('posts', f"unpublished post {post.get('slug')}",
                                   user_id=admin.user_id)
    return jsonify({'success': True, 'post': post})


@posts_bp.route('/api/slug', methods=['POST'])
@api_login_required
def suggest_slug(admin):
    """Slug the editor proposes for a title"""
    title = _json_body().get('title', '')
    return jsonify({'slug': generate_slug(title)})
