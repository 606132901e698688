"""
Shared fixtures: an in-memory backend and a Flask app wired to it.
"""

import itertools
from datetime import datetime, timezone

import pytest
from flask import Flask

from pressroom import Pressroom
from pressroom.core.config import Config
from pressroom.core.errors import StoreError
from pressroom.core.store import StoreResult


class FakeStore:
    """In-memory stand-in for BackendClient with the same method signatures."""

    def __init__(self):
        self.tables = {'posts': [], 'images': []}
        self.blobs = {}
        self.users = {}
        self.failures = {}
        self.calls = []
        self.tokens = []
        self._ids = itertools.count(1)

    # ----- test helpers -----

    def fail_on(self, operation, message='network error: connection refused'):
        self.failures[operation] = StoreError.classify(message)

    def add_user(self, email, password, user_id='user-1'):
        self.users[email] = (password, {'id': user_id, 'email': email})

    def add_row(self, table, **fields):
        row = {
            'id': str(next(self._ids)),
            'created_at': '2024-01-01T00:00:00+00:00',
            'updated_at': '2024-01-01T00:00:00+00:00',
        }
        row.update(fields)
        self.tables.setdefault(table, []).append(row)
        return dict(row)

    def add_post(self, slug, published_at=None, status='published', **fields):
        row = {
            'title': slug.upper(),
            'slug': slug,
            'content': f'<p>Content of {slug}</p>',
            'excerpt': None,
            'featured_image': None,
            'status': status,
            'published_at': published_at,
            'user_id': 'user-1',
        }
        row.update(fields)
        return self.add_row('posts', **row)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def _failed(self, operation):
        self.calls.append(operation)
        error = self.failures.get(operation)
        return StoreResult(None, error) if error is not None else None

    @staticmethod
    def _matches(row, filters):
        for column, value in (filters or {}).items():
            if value is None:
                if row.get(column) is not None:
                    return False
            elif str(row.get(column)) != str(value):
                return False
        return True

    # ----- BackendClient interface -----

    def with_token(self, access_token):
        self.tokens.append(access_token)
        return self

    def select(self, table, filters=None, order=None, descending=False, columns='*', single=False):
        failed = self._failed('select')
        if failed:
            return failed
        rows = [dict(row) for row in self.rows(table) if self._matches(row, filters)]
        if order:
            rows.sort(key=lambda row: row.get(order) or '', reverse=descending)
        return StoreResult(rows, None)

    def insert(self, table, row):
        failed = self._failed('insert')
        if failed:
            return failed
        now = datetime.now(timezone.utc).isoformat()
        stored = {'published_at': None, 'created_at': now, 'updated_at': now}
        stored.update(row)
        stored['id'] = str(next(self._ids))
        self.rows(table).append(stored)
        return StoreResult(dict(stored), None)

    def update(self, table, match, values):
        failed = self._failed('update')
        if failed:
            return failed
        updated = None
        for row in self.rows(table):
            if self._matches(row, match):
                row.update(values)
                updated = updated or dict(row)
        return StoreResult(updated, None)

    def delete(self, table, match):
        failed = self._failed('delete')
        if failed:
            return failed
        self.tables[table] = [row for row in self.rows(table) if not self._matches(row, match)]
        return StoreResult(None, None)

    def upload(self, bucket, path, file_bytes, content_type='application/octet-stream'):
        failed = self._failed('upload')
        if failed:
            return failed
        self.blobs[(bucket, path)] = file_bytes
        return StoreResult({'Key': f"{bucket}/{path}"}, None)

    def remove(self, bucket, paths):
        failed = self._failed('remove')
        if failed:
            return failed
        for path in paths:
            self.blobs.pop((bucket, path), None)
        return StoreResult([{'name': path} for path in paths], None)

    def list_objects(self, bucket, prefix=''):
        return StoreResult([{'name': path} for (b, path) in self.blobs
                            if b == bucket and path.startswith(prefix)], None)

    def public_url(self, bucket, path):
        return f"https://backend.test/storage/v1/object/public/{bucket}/{path}"

    def sign_in(self, email, password):
        failed = self._failed('sign_in')
        if failed:
            return failed
        entry = self.users.get(email)
        if entry is None or entry[0] != password:
            return StoreResult(None, StoreError.classify('Invalid login credentials', http_status=400))
        user = entry[1]
        return StoreResult({'access_token': f"token-{user['id']}", 'user': dict(user)}, None)

    def sign_out(self, access_token):
        self.calls.append('sign_out')
        return StoreResult(None, None)

    def get_user(self, access_token):
        for _, user in self.users.values():
            if access_token == f"token-{user['id']}":
                return StoreResult(dict(user), None)
        return StoreResult(None, StoreError.classify('invalid JWT', http_status=401))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_log_db(tmp_path, monkeypatch):
    """Keep application logs out of the working directory."""
    log_db = str(tmp_path / "logs" / "app_logs.db")
    monkeypatch.setattr(Config, 'LOG_DB', log_db)
    return log_db


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def app(store, tmp_path, isolated_log_db):
    """Flask app with every Pressroom module registered against the fake store."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["LOG_DB"] = isolated_log_db
    app.config["OUTPUT_DIR"] = str(tmp_path / "site")
    app.config["SITE_URL"] = "https://blog.test"
    app.config["SITE_TITLE"] = "Test Blog"
    Pressroom(app, store=store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client carrying a signed-in operator session."""
    with client.session_transaction() as sess:
        sess['pressroom_admin'] = {
            'user_id': 'user-1',
            'email': 'editor@blog.test',
            'access_token': 'token-user-1',
        }
    return client
