"""Content tooling for the firm's Turkish-language legal blog.

The package derives collision-free slugs from post titles, anchors and
outlines the headings of article bodies, stores posts in SQLite, and renders
the static article pages. The ``blog`` console script wraps all of it.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that configures logging and invokes ``app``.

Examples
--------
>>> from hukuk_blog import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
