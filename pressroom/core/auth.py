"""
Admin Session
=============

The signed-in operator is an explicit AdminSession value. It is stored in the
signed Flask session cookie and handed to each protected view as the
``admin`` keyword argument.
"""

from collections import namedtuple
from functools import wraps

from flask import session, redirect, url_for, request, jsonify

from .errors import AuthError

SESSION_KEY = 'pressroom_admin'


class AdminSession(namedtuple('AdminSession', ['user_id', 'email', 'access_token'])):
    __slots__ = ()

    @classmethod
    def from_backend(cls, data):
        """Build from the backend's sign-in payload"""
        user = (data or {}).get('user') or {}
        token = (data or {}).get('access_token')
        if not user.get('id') or not token:
            raise AuthError('Sign-in response did not include a user session')
        return cls(user['id'], user.get('email', ''), token)

    def to_cookie(self):
        return {'user_id': self.user_id, 'email': self.email, 'access_token': self.access_token}


def load_admin_session():
    """Current AdminSession from the cookie, or None"""
    data = session.get(SESSION_KEY)
    if not data or not data.get('user_id') or not data.get('access_token'):
        return None
    return AdminSession(data['user_id'], data.get('email', ''), data['access_token'])


def save_admin_session(admin):
    session[SESSION_KEY] = admin.to_cookie()


def clear_admin_session():
    session.pop(SESSION_KEY, None)


def login_required(f):
    """Require a signed-in operator; passes it to the view as ``admin``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        admin = load_admin_session()
        if admin is None:
            return redirect(url_for('admin.login', next=request.path))
        kwargs['admin'] = admin
        return f(*args, **kwargs)
    return decorated_function


def api_login_required(f):
    """JSON variant of login_required: 401 instead of a redirect."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        admin = load_admin_session()
        if admin is None:
            return jsonify(AuthError('Authentication required').to_dict()), 401
        kwargs['admin'] = admin
        return f(*args, **kwargs)
    return decorated_function
