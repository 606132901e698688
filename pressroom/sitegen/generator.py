"""
Static Site Generator
=====================

Reads published posts from the backend once and writes the whole site:

    index.html, posts/{slug}.html, posts/index.html, feed.xml, sitemap.xml,
    assets/{css,js,images}/

Steps run in a fixed order and any failure stops the run. Files written by
earlier steps are left in place.
"""

import logging
import os

from ..core.config import as_bool
from ..core.content import utc_now
from ..core.logging_service import LoggingService
from ..modules.posts.service import PostService
from .assets import ensure_asset_dirs
from .feeds import render_rss, render_sitemap
from .renderers import Site, published_date, render_homepage, render_post_pages, render_archive
from .templates import TemplateLoader

logger = logging.getLogger(__name__)


class SiteGenerator:

    def __init__(self, store, output_dir, templates_dir=None, site_url='', site_title='My Blog',
                 site_description='', language='en', strict=False,
                 homepage_limit=6, feed_limit=10, posts_table='posts'):
        self.posts = PostService(store, table=posts_table)
        self.output_dir = output_dir
        self.loader = TemplateLoader(templates_dir, strict=strict)
        self.site_url = (site_url or '').rstrip('/')
        self.site_title = site_title
        self.site_description = site_description
        self.language = language
        self.homepage_limit = homepage_limit
        self.feed_limit = feed_limit
        self.written = []

    @classmethod
    def from_config(cls, store, config):
        """Build from a mapping such as app.config or Config.as_dict()"""
        return cls(
            store,
            config.get('OUTPUT_DIR'),
            templates_dir=config.get('TEMPLATES_DIR') or None,
            site_url=config.get('SITE_URL', ''),
            site_title=config.get('SITE_TITLE', 'My Blog'),
            site_description=config.get('SITE_DESCRIPTION', ''),
            language=config.get('SITE_LANGUAGE', 'en'),
            strict=as_bool(config.get('STRICT_TEMPLATES', False)),
            homepage_limit=int(config.get('HOMEPAGE_POST_LIMIT', 6)),
            feed_limit=int(config.get('FEED_POST_LIMIT', 10)),
            posts_table=config.get('POSTS_TABLE', 'posts'),
        )

    def _site(self, now):
        return Site(
            url=self.site_url,
            title=self.site_title,
            description=self.site_description,
            language=self.language,
            now=now,
            loader=self.loader,
            homepage_limit=self.homepage_limit,
            feed_limit=self.feed_limit,
        )

    def _write(self, relative_path, text):
        path = os.path.join(self.output_dir, relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        self.written.append(relative_path)
        return path

    def generate(self, now=None):
        """Run every step; returns a report dict. Raises on the first failure."""
        now = now or utc_now()
        site = self._site(now)
        self.written = []

        LoggingService.info('sitegen', f"Generating static site into {self.output_dir}")
        os.makedirs(self.output_dir, exist_ok=True)

        posts = self.posts.list_published()
        logger.info("Found %d published posts", len(posts))
        for post in posts:
            published_date(post)
        if not posts:
            logger.info("No published posts; generating an empty site")

        logger.info("Generating homepage...")
        self._write('index.html', render_homepage(posts, site))

        logger.info("Generating post pages...")
        for slug, document in render_post_pages(posts, site).items():
            self._write(os.path.join('posts', f"{slug}.html"), document)

        logger.info("Generating archive...")
        self._write(os.path.join('posts', 'index.html'), render_archive(posts, site))

        logger.info("Generating RSS feed...")
        self._write('feed.xml', render_rss(posts, site))

        logger.info("Generating sitemap...")
        self._write('sitemap.xml', render_sitemap(posts, site))

        logger.info("Preparing asset directories...")
        ensure_asset_dirs(self.output_dir)

        report = {
            'output_dir': self.output_dir,
            'post_count': len(posts),
            'files': list(self.written),
            'generated_at': now.isoformat(),
        }
        LoggingService.info('sitegen', f"Static site generated: {len(self.written)} files",
                            details=report)
        return report
