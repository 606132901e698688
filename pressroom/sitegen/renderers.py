"""
HTML Page Renderers
===================

Homepage, per-post pages and the yearly archive. Each renderer takes the
published posts (newest first) and returns document text; the generator
decides where it is written.
"""

from collections import namedtuple, OrderedDict

from markupsafe import escape

from ..core.content import strip_tags, format_date, parse_timestamp
from ..core.errors import ValidationError

HOMEPAGE_EXCERPT_LENGTH = 150

Site = namedtuple('Site', [
    'url', 'title', 'description', 'language', 'now', 'loader',
    'homepage_limit', 'feed_limit',
])


def published_date(post):
    """published_at as an aware datetime; raises ValidationError naming the post when unset"""
    dt = parse_timestamp(post.get('published_at'))
    if dt is None:
        raise ValidationError(f"Published post \"{post.get('slug')}\" has no published_at",
                              field='published_at')
    return dt


def unique_by_slug(posts):
    """{slug: post} in first-seen order; a repeated slug keeps the later post"""
    by_slug = OrderedDict()
    for post in posts:
        by_slug[post['slug']] = post
    return by_slug


def post_url(post):
    return f"/posts/{post['slug']}.html"


def card_excerpt(post):
    """Stored excerpt, else the first 150 characters of plain text plus '...'"""
    if post.get('excerpt'):
        return post['excerpt']
    return strip_tags(post.get('content', ''))[:HOMEPAGE_EXCERPT_LENGTH] + '...'


def _common_bindings(site, title, description):
    return {
        'title': escape(title),
        'description': escape(description),
        'year': str(site.now.year),
        'site-url': site.url,
    }


def render_post_card(post):
    title = escape(post['title'])
    image = ''
    if post.get('featured_image'):
        image = f"""
        <div class="post-image">
          <img src="{escape(post['featured_image'])}" alt="{title}" loading="lazy">
        </div>"""

    return f"""
      <article class="post-card">{image}
        <div class="post-content">
          <h2 class="post-title">
            <a href="{post_url(post)}">{title}</a>
          </h2>
          <p class="post-date">{format_date(post['published_at'])}</p>
          <p class="post-excerpt">{card_excerpt(post)}</p>
          <a href="{post_url(post)}" class="read-more">Read more &rarr;</a>
        </div>
      </article>"""


def render_homepage(posts, site):
    """index.html: the latest posts as cards (empty list region when there are none)."""
    latest = posts[:site.homepage_limit]
    bindings = _common_bindings(site, site.title, site.description)
    bindings['posts'] = '\n'.join(render_post_card(post) for post in latest)
    return site.loader.render('homepage', bindings)


def render_post_page(post, site):
    bindings = _common_bindings(site, post['title'], post.get('excerpt') or site.description)
    bindings.update({
        'post-title': escape(post['title']),
        'post-date': format_date(post['published_at']),
        # Editor output is trusted HTML
        'post-content': post.get('content', ''),
    })
    return site.loader.render('post', bindings)


def render_post_pages(posts, site):
    """{slug: document} for every post; a repeated slug keeps the later post"""
    return OrderedDict(
        (slug, render_post_page(post, site)) for slug, post in unique_by_slug(posts).items()
    )


def group_by_year(posts):
    """OrderedDict year -> posts, years descending, post order kept within a year"""
    groups = {}
    for post in posts:
        year = published_date(post).strftime('%Y')
        groups.setdefault(year, []).append(post)
    return OrderedDict(sorted(groups.items(), key=lambda item: int(item[0]), reverse=True))


def render_archive(posts, site):
    """posts/index.html: every post grouped by publication year."""
    sections = []
    for year, year_posts in group_by_year(posts).items():
        items = '\n'.join(f"""
            <li class="archive-item">
              <span class="archive-date">{format_date(post['published_at'], '%m-%d')}</span>
              <a href="{post_url(post)}" class="archive-title">{escape(post['title'])}</a>
            </li>""" for post in year_posts)
        sections.append(f"""
        <section class="archive-year">
          <h2 class="year-title">{year}</h2>
          <ul class="archive-list">{items}
          </ul>
        </section>""")

    bindings = _common_bindings(site, f"Archive - {site.title}", f"All posts on {site.title}")
    bindings['archive'] = '\n'.join(sections)
    return site.loader.render('archive', bindings)
