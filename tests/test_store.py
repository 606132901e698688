"""
BackendClient request building and error classification, against a mocked
requests session.
"""

from unittest.mock import MagicMock

import pytest
import requests

from pressroom.core.errors import StoreError
from pressroom.core.store import BackendClient, StoreResult

BASE = 'https://project.backend.test'


def response(status=200, body=None, text=None):
    resp = MagicMock()
    resp.status_code = status
    if body is not None:
        resp.json.return_value = body
        resp.content = b'json'
        resp.text = 'json'
    else:
        resp.json.side_effect = ValueError('no json')
        resp.text = text or ''
        resp.content = (text or '').encode()
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return BackendClient(BASE + '/', 'anon-key', session=session)


def sent(session):
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_requires_base_url():
    with pytest.raises(ValueError):
        BackendClient('', 'key')


def test_from_config():
    store = BackendClient.from_config({'BACKEND_URL': BASE, 'BACKEND_ANON_KEY': 'k',
                                       'BACKEND_TIMEOUT': 5})
    assert store.base_url == BASE
    assert store.timeout == 5


def test_with_token_sets_bearer(client, session):
    session.request.return_value = response(body=[])
    client.with_token('user-token').select('posts')

    _, _, kwargs = sent(session)
    assert kwargs['headers']['Authorization'] == 'Bearer user-token'
    assert kwargs['headers']['apikey'] == 'anon-key'


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def test_select_builds_filters_and_order(client, session):
    session.request.return_value = response(body=[{'id': 1}])
    result = client.select('posts', filters={'status': 'published', 'published_at': None},
                           order='published_at', descending=True)

    method, url, kwargs = sent(session)
    assert (method, url) == ('GET', BASE + '/rest/v1/posts')
    assert kwargs['params'] == {
        'select': '*',
        'status': 'eq.published',
        'published_at': 'is.null',
        'order': 'published_at.desc',
    }
    assert result == StoreResult([{'id': 1}], None)


def test_insert_returns_first_row(client, session):
    session.request.return_value = response(status=201, body=[{'id': 7, 'slug': 'x'}])
    result = client.insert('posts', {'slug': 'x'})

    method, _, kwargs = sent(session)
    assert method == 'POST'
    assert kwargs['json'] == [{'slug': 'x'}]
    assert kwargs['headers']['Prefer'] == 'return=representation'
    assert result.unwrap() == {'id': 7, 'slug': 'x'}


def test_update_with_no_matching_rows(client, session):
    session.request.return_value = response(body=[])
    result = client.update('posts', {'id': 3, 'updated_at': 'T'}, {'title': 'New'})

    method, _, kwargs = sent(session)
    assert method == 'PATCH'
    assert kwargs['params'] == {'id': 'eq.3', 'updated_at': 'eq.T'}
    assert result.ok and result.data is None


def test_delete_empty_body(client, session):
    session.request.return_value = response(status=204, text='')
    assert client.delete('posts', {'id': 3}) == StoreResult(None, None)


# ---------------------------------------------------------------------------
# Storage and auth
# ---------------------------------------------------------------------------

def test_upload_and_public_url(client, session):
    session.request.return_value = response(body={'Key': 'blog-images/u/2024/01/a b.png'})
    client.upload('blog-images', 'u/2024/01/a b.png', b'data', 'image/png')

    method, url, kwargs = sent(session)
    assert method == 'POST'
    assert url == BASE + '/storage/v1/object/blog-images/u/2024/01/a%20b.png'
    assert kwargs['data'] == b'data'
    assert kwargs['headers']['Content-Type'] == 'image/png'
    assert client.public_url('blog-images', 'u/a.png') == \
        BASE + '/storage/v1/object/public/blog-images/u/a.png'


def test_remove_sends_prefixes(client, session):
    session.request.return_value = response(body=[])
    client.remove('blog-images', ['u/a.png'])

    method, url, kwargs = sent(session)
    assert (method, url) == ('DELETE', BASE + '/storage/v1/object/blog-images')
    assert kwargs['json'] == {'prefixes': ['u/a.png']}


def test_list_objects_posts_prefix(client, session):
    session.request.return_value = response(body=[{'name': 'a.png'}])
    result = client.list_objects('blog-images', prefix='user-1/2024/')

    method, url, kwargs = sent(session)
    assert (method, url) == ('POST', BASE + '/storage/v1/object/list/blog-images')
    assert kwargs['json'] == {'prefix': 'user-1/2024/', 'limit': 1000}
    assert result.data == [{'name': 'a.png'}]


def test_get_user_sends_user_token(client, session):
    """The user's own token is the bearer, not the anon key"""
    session.request.return_value = response(body={'id': 'u', 'email': 'a@b.test'})
    result = client.get_user('user-token')

    method, url, kwargs = sent(session)
    assert (method, url) == ('GET', BASE + '/auth/v1/user')
    assert kwargs['headers']['Authorization'] == 'Bearer user-token'
    assert result.unwrap()['id'] == 'u'


def test_get_user_rejected_token(client, session):
    session.request.return_value = response(status=401, body={'msg': 'invalid JWT: token is expired'})
    result = client.get_user('stale-token')
    assert result.error.code == 'AUTH_ERROR'


def test_sign_in_uses_password_grant(client, session):
    session.request.return_value = response(body={'access_token': 't', 'user': {'id': 'u'}})
    result = client.sign_in('a@b.test', 'pw')

    method, url, kwargs = sent(session)
    assert (method, url) == ('POST', BASE + '/auth/v1/token')
    assert kwargs['params'] == {'grant_type': 'password'}
    assert result.data['access_token'] == 't'


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("status,body,code", [
    (409, {'message': 'duplicate key value violates unique constraint'}, 'DATABASE_ERROR'),
    (401, {'message': 'JWT expired'}, 'AUTH_ERROR'),
    (400, {'error_description': 'Invalid login credentials'}, 'AUTH_ERROR'),
    (403, {'message': 'new row violates row-level security policy'}, 'PERMISSION_ERROR'),
    (404, {'error': 'Bucket not found'}, 'STORAGE_ERROR'),
    (500, {'message': 'something odd'}, 'UNKNOWN_ERROR'),
])
def test_error_responses_are_classified(client, session, status, body, code):
    session.request.return_value = response(status=status, body=body)
    result = client.select('posts')

    assert not result.ok
    assert result.error.code == code
    assert result.error.http_status == status
    with pytest.raises(StoreError):
        result.unwrap()


def test_non_json_error_body(client, session):
    session.request.return_value = response(status=502, text='Bad gateway')
    result = client.select('posts')
    assert result.error.details == 'Bad gateway'


def test_network_failure(client, session):
    session.request.side_effect = requests.ConnectionError('refused')
    result = client.select('posts')

    assert result.error.code == 'NETWORK_ERROR'
    assert result.error.suggestion
