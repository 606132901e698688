"""
Images Admin Module
===================

Image library for blog posts.

Provides:
- Upload to the backend storage bucket
- Alt text editing
- Delete (file first, then record)
- Usage lookup across posts
"""

from flask import Blueprint

images_bp = Blueprint(
    'images_admin',
    __name__,
    url_prefix='/admin/images',
    template_folder='templates',
)

from . import routes

__all__ = ['images_bp']
