"""
Backend Store Client
====================

Thin client for the hosted backend (Supabase-style REST API):
PostgREST tables, an object storage bucket and password-grant auth.

Every call returns a StoreResult(data, error) pair. Callers that cannot
continue without the data call result.unwrap(), which raises the StoreError.
The client is constructed explicitly and passed in; there is no module-level
connection.
"""

import logging
from collections import namedtuple
from urllib.parse import quote

import requests

from .errors import StoreError

logger = logging.getLogger(__name__)


class StoreResult(namedtuple('StoreResult', ['data', 'error'])):
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        """Return data, raising the stored StoreError if the call failed"""
        if self.error is not None:
            raise self.error
        return self.data


def _filter_value(value):
    if value is None:
        return 'is.null'
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class BackendClient:
    """REST client bound to one backend project and, optionally, a user token."""

    def __init__(self, base_url, api_key, access_token=None, timeout=30, session=None):
        if not base_url:
            raise ValueError("BACKEND_URL is not configured")
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        """Build a client from a mapping such as app.config or Config.as_dict()"""
        return cls(
            config.get('BACKEND_URL'),
            config.get('BACKEND_ANON_KEY'),
            timeout=config.get('BACKEND_TIMEOUT', 30),
        )

    def with_token(self, access_token):
        """Client sharing this connection but acting as the signed-in user"""
        return BackendClient(self.base_url, self.api_key, access_token=access_token,
                             timeout=self.timeout, session=self.session)

    # ===== Transport =====

    def _headers(self, extra=None, token=None):
        headers = {
            'apikey': self.api_key or '',
            'Authorization': f"Bearer {token or self.access_token or self.api_key or ''}",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method, path, params=None, json=None, data=None, headers=None, token=None):
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method, url,
                params=params,
                json=json,
                data=data,
                headers=self._headers(headers, token=token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Backend %s %s failed: %s", method, path, e)
            return StoreResult(None, StoreError.classify(f"network error: {e}"))

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("Backend %s %s returned %s: %s", method, path, resp.status_code, message)
            return StoreResult(None, StoreError.classify(message, http_status=resp.status_code))

        if resp.status_code == 204 or not resp.content:
            return StoreResult(None, None)
        try:
            return StoreResult(resp.json(), None)
        except ValueError:
            return StoreResult(resp.text, None)

    # ===== Tables =====

    def select(self, table, filters=None, order=None, descending=False, columns='*', single=False):
        """Read rows; filters is a dict of column -> value (equality)."""
        params = {'select': columns}
        for column, value in (filters or {}).items():
            params[column] = _filter_value(value)
        if order:
            params['order'] = f"{order}.{'desc' if descending else 'asc'}"
        headers = {'Accept': 'application/vnd.pgrst.object+json'} if single else None
        return self._request('GET', f"/rest/v1/{table}", params=params, headers=headers)

    def insert(self, table, row):
        """Insert one row and return it as stored"""
        result = self._request(
            'POST', f"/rest/v1/{table}",
            json=[row],
            headers={'Prefer': 'return=representation'},
        )
        return _first_row(result)

    def update(self, table, match, values):
        """Update rows matching every column in match; returns the first updated row or None"""
        params = {column: _filter_value(value) for column, value in match.items()}
        result = self._request(
            'PATCH', f"/rest/v1/{table}",
            params=params,
            json=values,
            headers={'Prefer': 'return=representation'},
        )
        return _first_row(result)

    def delete(self, table, match):
        params = {column: _filter_value(value) for column, value in match.items()}
        return self._request('DELETE', f"/rest/v1/{table}", params=params)

    # ===== Object storage =====

    def upload(self, bucket, path, file_bytes, content_type='application/octet-stream'):
        return self._request(
            'POST', f"/storage/v1/object/{bucket}/{quote(path)}",
            data=file_bytes,
            headers={'Content-Type': content_type, 'x-upsert': 'false'},
        )

    def remove(self, bucket, paths):
        return self._request('DELETE', f"/storage/v1/object/{bucket}", json={'prefixes': list(paths)})

    def list_objects(self, bucket, prefix=''):
        return self._request('POST', f"/storage/v1/object/list/{bucket}",
                             json={'prefix': prefix, 'limit': 1000})

    def public_url(self, bucket, path):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"

    # ===== Auth =====

    def sign_in(self, email, password):
        """Password sign-in; data is the backend session (access_token, user, ...)"""
        return self._request(
            'POST', '/auth/v1/token',
            params={'grant_type': 'password'},
            json={'email': email, 'password': password},
        )

    def sign_out(self, access_token):
        return self._request('POST', '/auth/v1/logout', token=access_token)

    def get_user(self, access_token):
        return self._request('GET', '/auth/v1/user', token=access_token)


def _first_row(result):
    if result.error is not None:
        return result
    data = result.data
    if isinstance(data, list):
        return StoreResult(data[0] if data else None, None)
    return result


def _error_message(resp):
    """Pull the most specific message out of a backend error body"""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ('message', 'error_description', 'msg', 'error'):
            if body.get(key):
                return str(body[key])
    return str(body)
