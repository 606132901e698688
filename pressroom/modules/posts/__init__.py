"""
Posts Admin Module
==================

Admin interface for blog post management.
Plugs into the admin dashboard module.

Provides:
- Post creation and editing
- Draft/publish workflow
- Slug generation and validation
"""

from flask import Blueprint

posts_bp = Blueprint(
    'posts_admin',
    __name__,
    url_prefix='/admin/posts',
    template_folder='templates',
)

from . import routes

__all__ = ['posts_bp']
