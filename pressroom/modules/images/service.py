"""
Image Service
=============

Image records live in the backend ``images`` table and their files in the
storage bucket. A record and its blob are created and removed together:

    upload: put blob -> insert record (blob removed again if the insert fails)
    delete: read storage_path -> remove blob -> delete record
            (record kept if the blob removal fails)
"""

import logging

from ...core.content import utc_now
from ...core.errors import ValidationError, NotFoundError, StoreError, StorageConsistencyError
from ...core.storage import (
    allowed_file, make_filename, build_storage_path, guess_content_type,
    upload_file, delete_file, ALLOWED_EXTENSIONS,
)

logger = logging.getLogger(__name__)


class ImageService:

    def __init__(self, store, bucket='blog-images', table='images', max_bytes=5 * 1024 * 1024):
        self.store = store
        self.bucket = bucket
        self.table = table
        self.max_bytes = max_bytes

    def list_images(self):
        """All images, newest first"""
        return self.store.select(self.table, order='created_at', descending=True).unwrap() or []

    def get_image(self, image_id):
        rows = self.store.select(self.table, filters={'id': image_id}).unwrap() or []
        if not rows:
            raise NotFoundError('Image not found')
        return rows[0]

    def upload_image(self, file_bytes, original_name, user_id, mime_type=None, alt_text=None):
        """Store the file and its record; returns the inserted record"""
        if not original_name:
            raise ValidationError('No file selected', field='image')
        if not allowed_file(original_name):
            raise ValidationError(
                f"Invalid file type; allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
                field='image')
        if not file_bytes:
            raise ValidationError('Uploaded file is empty', field='image')
        if len(file_bytes) > self.max_bytes:
            raise ValidationError(f'Image is larger than {self.max_bytes} bytes', field='image')

        now = utc_now()
        filename = make_filename(original_name, now_ms=int(now.timestamp() * 1000))
        storage_path = build_storage_path(user_id, filename, when=now)
        mime_type = mime_type or guess_content_type(original_name)

        public_url = upload_file(self.store, self.bucket, file_bytes, storage_path, mime_type)

        result = self.store.insert(self.table, {
            'filename': filename,
            'original_name': original_name,
            'size': len(file_bytes),
            'mime_type': mime_type,
            'storage_path': storage_path,
            'public_url': public_url,
            'alt_text': (alt_text or '').strip() or None,
            'user_id': user_id,
        })
        if result.error is not None:
            cleanup = self.store.remove(self.bucket, [storage_path])
            if cleanup.error is not None:
                raise StorageConsistencyError(
                    'Image record could not be saved and the uploaded file could not be removed',
                    details=f"{storage_path}: {cleanup.error}")
            raise result.error

        logger.info("Uploaded image %s", storage_path)
        return result.data

    def update_image(self, image_id, alt_text):
        image = self.store.update(self.table, {'id': image_id},
                                  {'alt_text': (alt_text or '').strip() or None}).unwrap()
        if image is None:
            raise NotFoundError('Image not found')
        return image

    def delete_image(self, image_id):
        """Remove the blob, then the record. Returns the deleted record."""
        image = self.get_image(image_id)
        storage_path = image.get('storage_path')

        try:
            delete_file(self.store, self.bucket, storage_path)
        except StoreError as e:
            raise StorageConsistencyError(
                'Image file could not be removed; the image record was kept',
                details=str(e), suggestion=e.suggestion)

        self.store.delete(self.table, {'id': image_id}).unwrap()
        logger.info("Deleted image %s", storage_path)
        return image

    def image_usage(self, image_id, posts):
        """Posts that show this image, as a featured image or inline in their content"""
        url = self.get_image(image_id).get('public_url')
        if not url:
            return []
        references = []
        for post in posts:
            if post.get('featured_image') == url:
                references.append({'id': post.get('id'), 'title': post.get('title'), 'type': 'featured'})
            elif url in (post.get('content') or ''):
                references.append({'id': post.get('id'), 'title': post.get('title'), 'type': 'inline'})
        return references
