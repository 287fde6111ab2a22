"""Cyclopts CLI entrypoint for managing and publishing the firm's blog.

The ``blog`` console script defined here stores posts in the SQLite post table,
previews the slugs and tables of contents the site will use, and renders the
static article pages. Typical usage is ``blog add`` / ``blog update`` while
editing content, then ``blog build`` locally or in CI to regenerate the pages.

Examples
--------
Preview the slug a title will get:

>>> from hukuk_blog.cli import app
>>> app(["slug", "İş Hukukunda Fesih"])  # doctest: +SKIP
is-hukukunda-fesih

Rebuild every article page with a custom configuration:

>>> app(["build", "--config", "config/site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from bs4 import BeautifulSoup
from cyclopts import App, Parameter

from ._constants import EMPTY_OUTLINE_LABEL
from .config import SiteConfig, load_site_config
from .models import PostDraft
from .pages import build_site, local_date
from .renderer import ContentFormat
from .slugs import create_unique_slug, slugify
from .store import PostNotFoundError, PostStore
from .toc import (
    build_outline,
    collect_headings,
    extract_headings,
    inject_anchors,
    render_outline_html,
    replace_toc,
)

if typ.TYPE_CHECKING:
    from .models import PostRecord
    from .toc import Outline

DEFAULT_CONFIG = Path("config/site.yaml")
LOG_LEVEL_ENV = "BLOG_LOG_LEVEL"

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]

app = App(name="blog", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(path: Path) -> SiteConfig:
    """Load ``path``; a missing default config falls back to built-in defaults."""
    if path == DEFAULT_CONFIG and not path.exists():
        return SiteConfig()
    return load_site_config(path)


def _outline_lines(outline: Outline) -> list[str]:
    """Return one indented ``label  #anchor`` line per outline entry."""
    if outline.is_empty:
        return [EMPTY_OUTLINE_LABEL]
    lines: list[str] = []
    pending = [(node, 0) for node in reversed(outline.roots)]
    while pending:
        node, depth = pending.pop()
        lines.append(f"{'  ' * depth}{node.label}  {node.item.href}")
        pending.extend((child, depth + 1) for child in reversed(node.children))
    return lines


def _describe(post: PostRecord) -> str:
    return f"{post.slug}\t{local_date(post.pub_date).isoformat()}\t{post.title}"


@app.command(help="Print the slug a title would be stored under.")
def slug(
    title: typ.Annotated[str, Parameter(help="Post title")],
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    unique: typ.Annotated[
        bool, Parameter(help="Resolve collisions against stored posts")
    ] = False,
) -> None:
    """Print the slug for ``title``, optionally de-duplicated against the store."""
    if not unique:
        print(slugify(title))
        return
    site = _load_config(config)
    with PostStore(site.database) as store:
        print(create_unique_slug(title, store.exists))


@app.command(help="Show, inject, or embed the table of contents of an HTML file.")
def toc(
    path: typ.Annotated[Path, Parameter(help="HTML file to scan")],
    *,
    min_level: typ.Annotated[int, Parameter(help="Shallowest heading level")] = 2,
    max_level: typ.Annotated[int, Parameter(help="Deepest heading level")] = 4,
    numbered: typ.Annotated[bool, Parameter(help="Prefix dotted numbers")] = False,
    max_depth: typ.Annotated[int, Parameter(help="Deepest level listed")] = 6,
    inject: typ.Annotated[
        bool, Parameter(help="Write heading ids back into the file")
    ] = False,
    embed: typ.Annotated[
        bool, Parameter(help="Write ids and a TOC block into the file")
    ] = False,
    as_html: typ.Annotated[bool, Parameter(help="Print the TOC markup")] = False,
) -> None:
    """Inspect or rewrite the headings of an HTML document.

    Parameters
    ----------
    path : Path
        HTML file to read.
    min_level, max_level : int, optional
        Inclusive heading range considered.
    numbered : bool, optional
        Number outline entries (``1``, ``1.1``, ...).
    max_depth : int, optional
        Drop headings deeper than this level from the outline.
    inject : bool, optional
        Add missing heading ids to the file, leaving everything else as is.
    embed : bool, optional
        Parse the file, add missing ids to headings in range, and replace (or
        insert) the TOC block at the top of ``<body>``, or of the file when it
        is a fragment.
    as_html : bool, optional
        Print the rendered TOC markup instead of an indented text outline.
    """
    html = path.read_text(encoding="utf-8")
    if embed:
        soup = BeautifulSoup(html, "html.parser")
        content = soup.body or soup
        scan = collect_headings(content, min_level=min_level, max_level=max_level)
        outline = build_outline(scan.items, numbered=numbered, max_depth=max_depth)
        replace_toc(content, render_outline_html(outline))
        path.write_text(str(soup), encoding="utf-8")
        print(f"wrote {_format_path(path)}")
        return
    if inject:
        path.write_text(
            inject_anchors(html, min_level=min_level, max_level=max_level),
            encoding="utf-8",
        )
        print(f"wrote {_format_path(path)}")
        return
    items = extract_headings(html, min_level=min_level, max_level=max_level)
    outline = build_outline(items, numbered=numbered, max_depth=max_depth)
    if as_html:
        print(render_outline_html(outline))
        return
    for line in _outline_lines(outline):
        print(line)


@app.command(help="Store a new post.")
def add(
    *,
    title: typ.Annotated[str, Parameter(help="Post title")],
    description: typ.Annotated[str, Parameter(help="Short summary")],
    content_file: typ.Annotated[Path, Parameter(help="File holding the body")],
    markdown: typ.Annotated[bool, Parameter(help="Body is Markdown")] = False,
    hero_image: str = "",
    alt_text: str = "",
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Create a post and print the slug it was stored under."""
    site = _load_config(config)
    draft = PostDraft(
        title=title,
        description=description,
        content=content_file.read_text(encoding="utf-8"),
        content_format=ContentFormat.MARKDOWN if markdown else ContentFormat.HTML,
        hero_image=hero_image,
        alt_text=alt_text,
    )
    with PostStore(site.database) as store:
        record = store.create(draft)
    print(record.slug)


@app.command(help="Edit a stored post; the slug follows title changes.")
def update(
    current_slug: typ.Annotated[str, Parameter(help="Slug of the post to edit")],
    *,
    title: str | None = None,
    description: str | None = None,
    content_file: Path | None = None,
    markdown: bool | None = None,
    hero_image: str | None = None,
    alt_text: str | None = None,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Apply the given field changes and print the post's (new) slug.

    Raises
    ------
    PostNotFoundError
        If no post is stored under ``current_slug``.
    """
    site = _load_config(config)
    with PostStore(site.database) as store:
        existing = store.get(current_slug)
        if existing is None:
            msg = f"No post is stored under slug '{current_slug}'."
            raise PostNotFoundError(msg)
        draft = existing.draft()
        if title is not None:
            draft.title = title
        if description is not None:
            draft.description = description
        if content_file is not None:
            draft.content = content_file.read_text(encoding="utf-8")
        if markdown is not None:
            draft.content_format = (
                ContentFormat.MARKDOWN if markdown else ContentFormat.HTML
            )
        if hero_image is not None:
            draft.hero_image = hero_image
        if alt_text is not None:
            draft.alt_text = alt_text
        record = store.update(current_slug, draft)
    print(record.slug)


@app.command(help="Delete a stored post.")
def delete(
    target_slug: typ.Annotated[str, Parameter(help="Slug of the post to delete")],
    *,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Delete the post stored under ``target_slug``."""
    site = _load_config(config)
    with PostStore(site.database) as store:
        removed = store.delete(target_slug)
    print(f"deleted {target_slug}" if removed else f"{target_slug}: not found")


@app.command(name="list", help="List stored posts, newest first.")
def list_posts(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Print ``slug``, publication date, and title for each post."""
    site = _load_config(config)
    with PostStore(site.database) as store:
        posts = store.list_posts()
    for post in posts:
        print(_describe(post))


@app.command(help="Render every post page and the blog index.")
def build(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Render the static blog into the configured output directory."""
    site = _load_config(config)
    with PostStore(site.database) as store:
        posts = store.list_posts()
    for path in build_site(site, posts):
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Configure logging and invoke the Cyclopts application behind ``blog``.

    The log level comes from ``BLOG_LOG_LEVEL`` (default ``WARNING``).
    """
    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
