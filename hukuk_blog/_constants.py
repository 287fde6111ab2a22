"""Common literal values used across hukuk_blog.

Labels shown to Turkish readers and fallback identifiers live here so the
slug helpers, TOC renderer, templates, and tests agree on the same strings.

Examples
--------
>>> from hukuk_blog import _constants
>>> _constants.EMPTY_HEADING_LABEL
'(boş başlık)'
>>> _constants.ANCHOR_MARKER_TEMPLATE.format(anchor="giris")
'anchor-giris'
"""

DEFAULT_POST_SLUG = "yazi"
DEFAULT_ANCHOR = "heading"
EMPTY_HEADING_LABEL = "(boş başlık)"
EMPTY_OUTLINE_LABEL = "Başlık bulunamadı."
TOC_ROOT_CLASS = "toc-root"
ANCHOR_MARKER_CLASS = "toc-anchor"
ANCHOR_MARKER_TEMPLATE = "anchor-{anchor}"
