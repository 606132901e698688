"""
Pressroom Site Generator
========================

Renders published posts into a static site (HTML pages, RSS feed, sitemap).

Usage:
    from pressroom.sitegen import SiteGenerator

    SiteGenerator(store, 'docs', site_url='https://example.com').generate()
"""

from .generator import SiteGenerator
from .templates import TemplateLoader, render

__all__ = ['SiteGenerator', 'TemplateLoader', 'render']
