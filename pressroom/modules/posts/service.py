"""
Post Service
============

Article reads and writes against the backend ``posts`` table.
Validation runs before any write reaches the backend.
"""

import logging

from ...core.content import (
    generate_slug, validate_slug, extract_excerpt, parse_timestamp, utc_now, isoformat,
)
from ...core.errors import ValidationError, NotFoundError, ConflictError

logger = logging.getLogger(__name__)

DRAFT = 'draft'
PUBLISHED = 'published'
STATUSES = (DRAFT, PUBLISHED)

# posts/index.html is the archive page
RESERVED_SLUGS = {'index'}

EDITABLE_FIELDS = ('title', 'slug', 'content', 'excerpt', 'featured_image', 'status')


def _clean(value):
    return value.strip() if isinstance(value, str) else value


class PostService:
    """CRUD and publishing workflow for posts"""

    def __init__(self, store, table='posts'):
        self.store = store
        self.table = table

    # ===== Reads =====

    def list_posts(self, status=None, search=None):
        """All posts, most recently updated first, optionally filtered"""
        filters = {}
        if status:
            self._check_status(status)
            filters['status'] = status
        posts = self.store.select(self.table, filters=filters, order='updated_at',
                                  descending=True).unwrap() or []

        if search:
            needle = search.strip().lower()
            posts = [
                post for post in posts
                if needle in (post.get('title') or '').lower()
                or needle in (post.get('excerpt') or '').lower()
            ]
        return posts

    def list_published(self):
        """Published posts, newest publication first. Raises StoreError on failure."""
        return self.store.select(self.table, filters={'status': PUBLISHED},
                                 order='published_at', descending=True).unwrap() or []

    def get_post(self, post_id):
        rows = self.store.select(self.table, filters={'id': post_id}).unwrap() or []
        if not rows:
            raise NotFoundError('Post not found')
        return rows[0]

    def get_post_by_slug(self, slug):
        rows = self.store.select(self.table, filters={'slug': slug}).unwrap() or []
        if not rows:
            raise NotFoundError('Post not found')
        return rows[0]

    def stats(self, recent=5):
        posts = self.list_posts()
        published = [p for p in posts if p.get('status') == PUBLISHED]
        return {
            'total': len(posts),
            'published': len(published),
            'drafts': len(posts) - len(published),
            'recent': posts[:recent],
        }

    # ===== Validation =====

    def _check_status(self, status):
        if status not in STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(STATUSES)}", field='status')

    def _check_slug(self, slug, post_id=None):
        if not slug:
            raise ValidationError('Slug is required', field='slug')
        if not validate_slug(slug):
            raise ValidationError(
                'Slug may only contain lowercase letters, digits and single hyphens',
                field='slug')
        if slug in RESERVED_SLUGS:
            raise ValidationError(f'Slug "{slug}" is reserved', field='slug')

        rows = self.store.select(self.table, filters={'slug': slug}, columns='id').unwrap() or []
        if any(str(row.get('id')) != str(post_id) for row in rows):
            raise ValidationError(f'Slug "{slug}" is already used by another post', field='slug')

    # ===== Writes =====

    def create_post(self, data, user_id):
        """Validate and insert a new post; returns the stored row"""
        title = _clean(data.get('title')) or ''
        content = _clean(data.get('content')) or ''
        if not title or not content:
            raise ValidationError('Title and content are required')

        slug = _clean(data.get('slug')) or generate_slug(title)
        status = data.get('status') or DRAFT
        self._check_status(status)
        self._check_slug(slug)

        row = {
            'title': title,
            'slug': slug,
            'content': content,
            'excerpt': _clean(data.get('excerpt')) or extract_excerpt(content),
            'featured_image': _clean(data.get('featured_image')) or None,
            'status': status,
            'user_id': user_id,
        }
        if status == PUBLISHED:
            row['published_at'] = isoformat(utc_now())

        post = self.store.insert(self.table, row).unwrap()
        logger.info("Created post %s (%s)", slug, status)
        return post

    def update_post(self, post_id, changes, expected_updated_at=None):
        """
        Apply a partial update.

        published_at is stamped on the first move to published and never
        changed afterwards. When expected_updated_at is given, the update only
        applies if the stored row has not changed since then.
        """
        current = self.get_post(post_id)

        if expected_updated_at is not None:
            if parse_timestamp(expected_updated_at) != parse_timestamp(current.get('updated_at')):
                raise ConflictError('Post was modified by someone else; reload and retry')

        values = {}
        for field in EDITABLE_FIELDS:
            if field not in changes:
                continue
            value = _clean(changes[field])

            if field in ('title', 'content'):
                if not value:
                    raise ValidationError(f'{field.capitalize()} cannot be empty', field=field)
            elif field == 'slug':
                if value != current.get('slug'):
                    self._check_slug(value, post_id)
            elif field == 'status':
                self._check_status(value)
            elif field == 'excerpt':
                value = value or extract_excerpt(values.get('content') or changes.get('content')
                                                 or current.get('content', ''))
            else:
                value = value or None
            values[field] = value

        if not values:
            raise ValidationError('No changes supplied')

        now = isoformat(utc_now())
        if values.get('status') == PUBLISHED and not current.get('published_at'):
            values['published_at'] = now
        values['updated_at'] = now

        match = {'id': post_id}
        if expected_updated_at is not None:
            match['updated_at'] = current.get('updated_at')

        post = self.store.update(self.table, match, values).unwrap()
        if post is None:
            if expected_updated_at is not None:
                raise ConflictError('Post was modified by someone else; reload and retry')
            raise NotFoundError('Post not found')
        return post

    def publish_post(self, post_id):
        return self.update_post(post_id, {'status': PUBLISHED})

    def unpublish_post(self, post_id):
        return self.update_post(post_id, {'status': DRAFT})

    def delete_post(self, post_id):
        post = self.get_post(post_id)
        self.store.delete(self.table, {'id': post_id}).unwrap()
        logger.info("Deleted post %s", post.get('slug'))
        return post
