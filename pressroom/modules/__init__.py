"""
Pressroom Modules
=================

Flask blueprint modules for the blog admin panel.
"""

__all__ = ['dashboard', 'posts', 'posts_public', 'images']
