"""Typed dataclasses describing hukuk_blog site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class TocConfig:
    """How the table of contents is built for published posts."""

    min_level: int = 2
    max_level: int = 4
    numbered: bool = False
    max_depth: int = 6


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide settings for the blog store and the static page build.

    Attributes
    ----------
    site_name : str
        Firm name shown in page titles and headers.
    database : Path
        SQLite file holding the posts table.
    output_dir : Path
        Directory the post pages and the blog index are written to.
    pygments_style : str
        Pygments style used for code blocks in Markdown posts.
    toc : TocConfig
        Heading range and outline options for post pages.
    """

    site_name: str = "Hukuk Bürosu"
    database: Path = Path("data/blog.db")
    output_dir: Path = Path("public/blog")
    pygments_style: str = "monokai"
    toc: TocConfig = dc.field(default_factory=TocConfig)


__all__ = ["SiteConfig", "SiteConfigError", "TocConfig"]
