"""Heading extraction, anchor injection, and outline rendering for post bodies."""

from .document import (
    add_anchor_markers,
    collect_headings,
    insert_toc,
    remove_toc,
    replace_toc,
)
from .extractor import extract_headings, inject_anchors
from .models import HeadingScan, Outline, OutlineNode, TocItem
from .outline import build_outline, render_outline_html

__all__ = [
    "HeadingScan",
    "Outline",
    "OutlineNode",
    "TocItem",
    "add_anchor_markers",
    "build_outline",
    "collect_headings",
    "extract_headings",
    "inject_anchors",
    "insert_toc",
    "remove_toc",
    "render_outline_html",
    "replace_toc",
]
