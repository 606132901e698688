"""
Storage Utility
===============

Blob helpers for the backend storage bucket: upload naming, path layout,
content types, and upload/delete against a BackendClient.
"""

import time

from werkzeug.utils import secure_filename

from .content import utc_now

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
}


def file_extension(filename):
    return filename.rsplit('.', 1)[-1].lower() if filename and '.' in filename else ''


def allowed_file(filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS


def guess_content_type(filename):
    return CONTENT_TYPES.get(file_extension(filename), 'application/octet-stream')


def make_filename(original_name, now_ms=None):
    """Time-prefixed, filesystem-safe name: "1718000000000-photo.jpg"."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = file_extension(original_name)
    safe = secure_filename(original_name or '')
    # secure_filename drops non-ASCII names down to the bare extension
    if not safe or file_extension(safe) != ext or safe == ext:
        safe = f"image.{ext}" if ext else 'image'
    return f"{now_ms}-{safe}"


def build_storage_path(user_id, filename, when=None):
    """Object key layout: {user_id}/{year}/{month}/{filename}"""
    when = when or utc_now()
    return f"{user_id}/{when.year}/{when.month:02d}/{filename}"


def upload_file(store, bucket, file_bytes, storage_path, content_type=None):
    """Upload bytes to the bucket and return the public URL.

    Raises StoreError if the upload fails.
    """
    content_type = content_type or guess_content_type(storage_path)
    store.upload(bucket, storage_path, file_bytes, content_type).unwrap()
    return store.public_url(bucket, storage_path)


def delete_file(store, bucket, storage_path):
    """Remove one object from the bucket. Raises StoreError on failure."""
    store.remove(bucket, [storage_path]).unwrap()
    return True

