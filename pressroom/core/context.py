from flask import current_app


def get_pressroom():
    """The Pressroom extension registered on the current app"""
    return current_app.extensions['pressroom']


def get_store(admin=None):
    """Backend client for this request, acting as the signed-in operator when given"""
    store = get_pressroom().store
    if admin is not None:
        return store.with_token(admin.access_token)
    return store
