"""Static page rendering for published blog posts.

This module turns stored posts into the public ``<slug>.html`` article pages
and the ``index.html`` listing. Each article body gets heading anchors and a
table of contents built from those anchors, so readers can jump to any section
of a long legal article.

Typical usage mirrors the ``blog build`` command:

>>> from pathlib import Path
>>> from hukuk_blog.config import load_site_config
>>> from hukuk_blog.store import PostStore
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> with PostStore(site.database) as store:  # doctest: +SKIP
...     written = build_site(site, store.list_posts())

Side effects are limited to reading templates from ``hukuk_blog/templates`` and
writing UTF-8 HTML under the configured output directory.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ
from pathlib import Path
from zoneinfo import ZoneInfo

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .renderer import PostBodyRenderer
from .toc import build_outline, extract_headings, inject_anchors, render_outline_html

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .models import PostRecord
    from .toc import Outline

logger = logging.getLogger(__name__)

SITE_TIMEZONE = ZoneInfo("Europe/Istanbul")

TURKISH_MONTHS = (
    "Ocak",
    "Şubat",
    "Mart",
    "Nisan",
    "Mayıs",
    "Haziran",
    "Temmuz",
    "Ağustos",
    "Eylül",
    "Ekim",
    "Kasım",
    "Aralık",
)


def local_date(value: dt.date) -> dt.date:
    """Return the calendar date of ``value`` as seen in Istanbul.

    Aware datetimes, such as the UTC timestamps kept by the store, are
    converted first. Plain dates and naive datetimes are taken as local.
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(SITE_TIMEZONE)
        return value.date()
    return value


def format_date_tr(value: dt.date) -> str:
    """Return ``value`` in Turkish long form, e.g. ``"18 Ekim 2026"``."""
    day = local_date(value)
    return f"{day.day} {TURKISH_MONTHS[day.month - 1]} {day.year}"


@dc.dataclass(slots=True)
class ArticleView:
    """Template context for one rendered article.

    Attributes
    ----------
    post : PostRecord
        Stored post being rendered.
    body_html : str
        Post body as HTML with an ``id`` on every listed heading.
    outline : Outline
        Headings of the body arranged for the TOC panel.
    toc_html : str
        ``outline`` rendered as nested lists.
    """

    post: PostRecord
    body_html: str
    outline: Outline
    toc_html: str

    @property
    def filename(self) -> str:
        """Return the output filename for the article."""
        return f"{self.post.slug}.html"


def _environment(templates_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date_tr"] = format_date_tr
    env.filters["local_date"] = local_date
    return env


def _write(path: Path, html: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not html.endswith("\n"):
        html += "\n"
    path.write_text(html, encoding="utf-8")
    logger.debug("wrote %s", path)
    return path


class PostPageBuilder:
    """Render article pages with anchored headings and a table of contents."""

    def __init__(self, site: SiteConfig, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site : SiteConfig
            Site settings; ``output_dir``, ``pygments_style``, and the ``toc``
            block are used here.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``hukuk_blog/templates``.
        """
        self.site = site
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = _environment(self.templates_dir)
        self.template = self.env.get_template("post.jinja")
        self.renderer = PostBodyRenderer(site.pygments_style)

    def article(self, post: PostRecord) -> ArticleView:
        """Prepare the body, outline, and TOC markup for ``post``."""
        toc = self.site.toc
        html = self.renderer.render(post.content, post.content_format)
        body_html = inject_anchors(
            html, min_level=toc.min_level, max_level=toc.max_level
        )
        items = extract_headings(
            body_html, min_level=toc.min_level, max_level=toc.max_level
        )
        outline = build_outline(items, numbered=toc.numbered, max_depth=toc.max_depth)
        return ArticleView(
            post=post,
            body_html=body_html,
            outline=outline,
            toc_html=render_outline_html(outline),
        )

    def run(self, post: PostRecord) -> Path:
        """Render and write one article page, returning the output path."""
        view = self.article(post)
        html = self.template.render(
            site=self.site,
            article=view,
            stylesheet=self.renderer.stylesheet,
            generated_at=dt.datetime.now(dt.UTC),
        )
        return _write(self.site.output_dir / view.filename, html)


class BlogIndexBuilder:
    """Render the blog landing page listing every post, newest first."""

    def __init__(self, site: SiteConfig, *, templates_dir: Path | None = None) -> None:
        self.site = site
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = _environment(self.templates_dir)
        self.template = self.env.get_template("index.jinja")

    def run(self, posts: cabc.Iterable[PostRecord]) -> Path:
        """Render and write ``index.html``, returning the output path."""
        ordered = sorted(posts, key=lambda post: post.pub_date, reverse=True)
        html = self.template.render(
            site=self.site,
            posts=ordered,
            generated_at=dt.datetime.now(dt.UTC),
        )
        return _write(self.site.output_dir / "index.html", html)


def build_site(site: SiteConfig, posts: cabc.Iterable[PostRecord]) -> list[Path]:
    """Write every article page plus the index; return the written paths."""
    posts = list(posts)
    page_builder = PostPageBuilder(site)
    written = [page_builder.run(post) for post in posts]
    written.append(BlogIndexBuilder(site).run(posts))
    return written


__all__ = [
    "ArticleView",
    "BlogIndexBuilder",
    "PostPageBuilder",
    "build_site",
    "format_date_tr",
    "local_date",
]
