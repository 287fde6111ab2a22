"""Load and validate the blog's ``site.yaml`` configuration.

The primary entry point is :func:`load_site_config`, which applies defaults to
any missing keys and returns a :class:`SiteConfig` the store, page builders,
and CLI share.

Examples
--------
>>> from pathlib import Path
>>> from hukuk_blog.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.toc.max_level  # doctest: +SKIP
4
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, TocConfig

__all__ = ["SiteConfig", "SiteConfigError", "TocConfig", "load_site_config"]
