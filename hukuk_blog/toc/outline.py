"""Nest a flat heading list into an outline and render it as ordered lists."""

from __future__ import annotations

import typing as typ
from html import escape

from hukuk_blog._constants import EMPTY_OUTLINE_LABEL, TOC_ROOT_CLASS

from .models import Outline, OutlineNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import TocItem


def build_outline(
    items: cabc.Iterable[TocItem], *, numbered: bool = False, max_depth: int = 6
) -> Outline:
    """Arrange headings into a tree that follows their levels.

    Parameters
    ----------
    items : Iterable[TocItem]
        Headings in document order.
    numbered : bool, optional
        Attach dotted numbers (``"2.1.3"``) to every node.
    max_depth : int, optional
        Deepest heading level kept; ``3`` drops ``h4``–``h6``.

    Returns
    -------
    Outline
        Each heading sits under the nearest preceding heading with a smaller
        level; headings without one become roots. Empty when ``items`` is.

    Raises
    ------
    ValueError
        If ``max_depth`` is outside 1–6.
    """
    if not 1 <= max_depth <= 6:
        msg = f"max_depth must be between 1 and 6, got {max_depth}."
        raise ValueError(msg)

    outline = Outline(numbered=numbered)
    open_nodes: list[OutlineNode] = []
    counters: list[int] = []
    for item in items:
        if item.heading_level > max_depth:
            continue
        while open_nodes and open_nodes[-1].item.heading_level >= item.heading_level:
            open_nodes.pop()
        depth = len(open_nodes)
        node = OutlineNode(item=item)
        if numbered:
            del counters[depth + 1 :]
            while len(counters) <= depth:
                counters.append(0)
            counters[depth] += 1
            node.number = ".".join(str(count) for count in counters)
        siblings = open_nodes[-1].children if open_nodes else outline.roots
        siblings.append(node)
        open_nodes.append(node)
    return outline


def _render_list(nodes: list[OutlineNode], css_class: str | None = None) -> str:
    class_attr = f' class="{css_class}"' if css_class else ""
    parts = [f"<ol{class_attr}>"]
    for node in nodes:
        href = escape(node.item.href, quote=True)
        parts.append(f'<li><a href="{href}">{escape(node.label)}</a>')
        if node.children:
            parts.append(_render_list(node.children))
        parts.append("</li>")
    parts.append("</ol>")
    return "".join(parts)


def render_outline_html(outline: Outline) -> str:
    """Render ``outline`` as nested ``<ol>`` markup for the TOC panel.

    Nested lists sit inside the ``<li>`` of their parent heading. An empty
    outline renders a ``toc-empty`` notice instead of an empty list.
    """
    if outline.is_empty:
        return f'<div class="toc-empty">{escape(EMPTY_OUTLINE_LABEL)}</div>'
    body = _render_list(outline.roots, TOC_ROOT_CLASS)
    return f'<div class="toc-wrapper">{body}</div>'


__all__ = ["build_outline", "render_outline_html"]
