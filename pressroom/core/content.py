"""
Content Helpers
===============

Slugs, excerpts and date handling shared by the admin panel and the
static-site generator.
"""

import re
import unicodedata
from datetime import datetime, timezone

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
TAG_PATTERN = re.compile(r'<[^>]*>')


def generate_slug(title):
    """Create URL-friendly slug from a title"""
    if not title:
        return ''
    # Fold accents, drop anything that is not ASCII
    slug = unicodedata.normalize('NFKD', title).encode('ascii', 'ignore').decode('ascii')
    slug = slug.lower()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'[-\s]+', '-', slug)
    return slug.strip('-')


def validate_slug(slug):
    return bool(slug) and SLUG_PATTERN.match(slug) is not None


def strip_tags(html):
    """Remove every HTML tag, leaving the text between them"""
    if not html:
        return ''
    return TAG_PATTERN.sub('', html)


def extract_excerpt(content, max_length=200):
    """
    Plain-text excerpt of HTML content.

    Returns the stripped text unchanged when it fits, otherwise cuts at the
    last space within max_length and appends '...'.
    """
    text = strip_tags(content)
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(' ')
    if last_space > 0:
        return truncated[:last_space] + '...'
    return truncated + '...'


def parse_timestamp(value):
    """Parse a backend timestamp into an aware datetime (naive values are UTC)"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip().replace(' ', 'T', 1)
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        # fromisoformat wants 3 or 6 fractional digits on older interpreters
        match = re.match(r'^(.*T\d{2}:\d{2}:\d{2})\.(\d+)(.*)$', text)
        if match:
            head, fraction, tail = match.groups()
            text = f"{head}.{fraction[:6].ljust(6, '0')}{tail}"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_date(value, fmt='%Y-%m-%d'):
    dt = parse_timestamp(value)
    return dt.strftime(fmt) if dt else ''


def utc_now():
    return datetime.now(timezone.utc)


def isoformat(dt):
    return dt.astimezone(timezone.utc).isoformat()
