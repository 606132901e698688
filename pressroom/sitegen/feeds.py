"""
RSS feed and XML sitemap.
"""

from datetime import timezone
from email.utils import format_datetime

from markupsafe import escape

from ..core.content import strip_tags
from .renderers import published_date, unique_by_slug

FEED_DESCRIPTION_LENGTH = 300
SITEMAP_CHANGEFREQ = 'weekly'
SITEMAP_PRIORITY = '0.8'


def cdata(text):
    # "]]>" cannot appear inside one CDATA section
    return '<![CDATA[' + (text or '').replace(']]>', ']]]]><![CDATA[>') + ']]>'


def rfc1123(dt):
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def feed_description(post):
    return post.get('excerpt') or strip_tags(post.get('content', ''))[:FEED_DESCRIPTION_LENGTH]


def render_rss(posts, site):
    """RSS 2.0 document with the latest posts, newest first."""
    items = []
    for post in posts[:site.feed_limit]:
        link = f"{site.url}/posts/{post['slug']}.html"
        items.append(f"""
    <item>
      <title>{cdata(post['title'])}</title>
      <link>{escape(link)}</link>
      <description>{cdata(feed_description(post))}</description>
      <pubDate>{rfc1123(published_date(post))}</pubDate>
      <guid>{escape(link)}</guid>
    </item>""")

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>{escape(site.title)}</title>
    <link>{escape(site.url)}</link>
    <description>{escape(site.description)}</description>
    <language>{escape(site.language)}</language>
    <lastBuildDate>{rfc1123(site.now)}</lastBuildDate>{''.join(items)}
  </channel>
</rss>
"""


def sitemap_urls(posts, site):
    """Root, archive and one URL per distinct post slug"""
    return [f"{site.url}/", f"{site.url}/posts/"] + [
        f"{site.url}/posts/{slug}.html" for slug in unique_by_slug(posts)
    ]


def render_sitemap(posts, site):
    """Sitemap with the root, the archive and one entry per post, all dated today."""
    lastmod = site.now.astimezone(timezone.utc).strftime('%Y-%m-%d')
    entries = ''.join(f"""
  <url>
    <loc>{escape(url)}</loc>
    <lastmod>{lastmod}</lastmod>
    <changefreq>{SITEMAP_CHANGEFREQ}</changefreq>
    <priority>{SITEMAP_PRIORITY}</priority>
  </url>""" for url in sitemap_urls(posts, site))

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}
</urlset>
"""
