"""
Admin Dashboard Routes
======================

Sign-in goes through the backend's password grant. The resulting session is
kept as an AdminSession in the signed cookie and passed to each view.
"""

from flask import render_template, request, redirect, url_for, flash, jsonify

from . import dashboard_bp
from ..posts.service import PostService
from ...core.auth import (
    AdminSession, login_required, api_login_required,
    load_admin_session, save_admin_session, clear_admin_session,
)
from ...core.context import get_store, get_pressroom
from ...core.errors import PressroomError
from ...core.logging_service import LoggingService


def _is_safe_next(target):
    return bool(target) and target.startswith('/') and not target.startswith('//')


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('dashboard/login.html'), 400

        result = get_store().sign_in(email, password)
        if result.error is not None:
            LoggingService.warning('auth', f"Failed sign-in for {email}", details=str(result.error))
            flash('Invalid email or password', 'error')
            return render_template('dashboard/login.html'), 401

        try:
            admin = AdminSession.from_backend(result.data)
        except PressroomError as e:
            flash(e.message, 'error')
            return render_template('dashboard/login.html'), 401

        save_admin_session(admin)
        LoggingService.log_user_action('auth', 'login', user_id=admin.user_id)
        flash('Login successful', 'success')

        next_page = request.args.get('next')
        return redirect(next_page if _is_safe_next(next_page) else url_for('admin.dashboard'))

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    admin = load_admin_session()
    if admin is not None:
        result = get_store().sign_out(admin.access_token)
        if result.error is not None:
            LoggingService.warning('auth', 'Backend sign-out failed', details=str(result.error),
                                   user_id=admin.user_id)
        LoggingService.log_user_action('auth', 'logout', user_id=admin.user_id)
    clear_admin_session()
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@login_required
def dashboard(admin):
    """Admin dashboard with post counts and recent posts"""
    return render_template('dashboard/dashboard.html', admin=admin)


@dashboard_bp.route('/settings')
@login_required
def settings(admin):
    """Read-only view of the operator account and site configuration"""
    pressroom = get_pressroom()
    site = {
        'title': pressroom.config('SITE_TITLE'),
        'description': pressroom.config('SITE_DESCRIPTION'),
        'url': pressroom.config('SITE_URL'),
        'output_dir': pressroom.config('OUTPUT_DIR'),
    }
    return render_template('dashboard/settings.html', admin=admin, site=site,
                           logs=LoggingService.recent_logs(limit=20, source='sitegen'))


@dashboard_bp.route('/status')
def status():
    """Check admin login status (API endpoint)"""
    admin = load_admin_session()
    if admin is not None:
        return jsonify({'logged_in': True, 'admin_email': admin.email})
    return jsonify({'logged_in': False}), 401


@dashboard_bp.route('/api/stats')
@api_login_required
def stats(admin):
    posts = PostService(get_store(admin), table=get_pressroom().config('POSTS_TABLE', 'posts'))
    return jsonify(posts.stats())


@dashboard_bp.route('/api/generate', methods=['POST'])
@api_login_required
def generate_site(admin):
    """Rebuild the static site now with the app's configuration"""
    # Import here to avoid circular imports
    from ...sitegen import SiteGenerator

    generator = SiteGenerator.from_config(get_store(admin), get_pressroom().app_config())
    report = generator.generate()
    LoggingService.log_user_action('sitegen', 'generated site', user_id=admin.user_id,
                                   details={'files': len(report['files'])})
    return jsonify({'success': True, 'report': report})
