"""
Dashboard Module
================

Admin dashboard interface for Pressroom.

Provides core admin functionality:
- Operator sign-in/sign-out against the hosted backend
- Dashboard with post statistics
- Settings overview
- On-demand static site generation

This is the foundation module that other admin features plug into.
"""

from flask import Blueprint

# Blueprint name is 'admin'; login_required redirects to admin.login
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates',
)

from . import routes

__all__ = ['dashboard_bp']
