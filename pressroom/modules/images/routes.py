"""
Images Admin Routes
===================
"""

from flask import render_template, request, jsonify

from . import images_bp
from .service import ImageService
from ..posts.service import PostService
from ...core.auth import login_required, api_login_required
from ...core.context import get_store, get_pressroom
from ...core.errors import ValidationError
from ...core.logging_service import LoggingService


def _service(admin):
    pressroom = get_pressroom()
    return ImageService(
        get_store(admin),
        bucket=pressroom.config('IMAGES_BUCKET', 'blog-images'),
        table=pressroom.config('IMAGES_TABLE', 'images'),
        max_bytes=pressroom.config('MAX_IMAGE_BYTES', 5 * 1024 * 1024),
    )


@images_bp.route('/')
@login_required
def image_library(admin):
    return render_template('images/library.html', admin=admin)


@images_bp.route('/api/images', methods=['GET'])
@api_login_required
def get_images(admin):
    return jsonify(_service(admin).list_images())


@images_bp.route('/api/images', methods=['POST'])
@api_login_required
def upload_image(admin):
    """Upload one image (multipart field "image", optional "alt_text")"""
    if 'image' not in request.files:
        raise ValidationError('No image file provided', field='image')

    file = request.files['image']
    image = _service(admin).upload_image(
        file.read(),
        file.filename,
        admin.user_id,
        mime_type=file.mimetype or None,
        alt_text=request.form.get('alt_text'),
    )
    LoggingService.log_user_action('images', f"uploaded {image.get('storage_path')}",
                                   user_id=admin.user_id)
    return jsonify({
        'success': True,
        'image': image,
        'image_url': image.get('public_url'),
    }), 201


@images_bp.route('/api/images/<image_id>', methods=['PATCH', 'PUT'])
@api_login_required
def update_image(admin, image_id):
    data = request.get_json(silent=True) or {}
    image = _service(admin).update_image(image_id, data.get('alt_text'))
    return jsonify({'success': True, 'image': image})


@images_bp.route('/api/images/<image_id>', methods=['DELETE'])
@api_login_required
def delete_image(admin, image_id):
    image = _service(admin).delete_image(image_id)
    LoggingService.log_user_action('images', f"deleted {image.get('storage_path')}",
                                   user_id=admin.user_id)
    return jsonify({'success': True})


@images_bp.route('/api/images/<image_id>/usage', methods=['GET'])
@api_login_required
def image_usage(admin, image_id):
    """Posts that reference this image"""
    store = get_store(admin)
    posts = PostService(store, table=get_pressroom().config('POSTS_TABLE', 'posts')).list_posts()
    references = _service(admin).image_usage(image_id, posts)
    return jsonify({'in_use': bool(references), 'references': references})
