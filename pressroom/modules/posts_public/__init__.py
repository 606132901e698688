"""
Public Posts Module
===================

Read-only JSON API of published posts for embedding on other sites:

- /api/posts          published posts, newest first
- /api/posts/<slug>   one published post
"""

from flask import Blueprint

posts_public_bp = Blueprint('posts_public', __name__, url_prefix='/api/posts')

from . import routes

__all__ = ['posts_public_bp']
