"""Edit a parsed post body in place: heading ids, TOC blocks, anchor markers.

These helpers work on a BeautifulSoup tree, the way the admin editor works on
its live document. Ids are only ever added, never replaced, and the set of ids
already in use is passed in and handed back rather than kept globally.

Example
-------
>>> from bs4 import BeautifulSoup
>>> from hukuk_blog.toc.document import collect_headings
>>> soup = BeautifulSoup("<h2>Dava</h2><h2>Dava</h2>", "html.parser")
>>> [item.anchor_id for item in collect_headings(soup).items]
['dava', 'dava-1']
"""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup

from hukuk_blog._constants import (
    ANCHOR_MARKER_CLASS,
    ANCHOR_MARKER_TEMPLATE,
    EMPTY_HEADING_LABEL,
    TOC_ROOT_CLASS,
)
from hukuk_blog.slugs import unique_anchor

from .models import HeadingScan, TocItem

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import Tag

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
TOC_BLOCK_SELECTOR = f".toc-wrapper, .toc-empty, .{TOC_ROOT_CLASS}"


def collect_headings(
    root: Tag,
    *,
    used_ids: cabc.Set[str] = frozenset(),
    min_level: int = 1,
    max_level: int = 6,
) -> HeadingScan:
    """Collect headings under ``root`` and give id-less headings an id.

    Parameters
    ----------
    root : Tag
        Parsed document (or subtree) to scan. Headings without an ``id``
        attribute are modified in place.
    used_ids : Set[str], optional
        Ids reserved outside ``root``; ids found under ``root`` are added to
        them before any new id is generated.
    min_level, max_level : int, optional
        Inclusive heading range to collect. Headings outside it are neither
        listed nor given an id. Defaults to every level, ``h1``–``h6``.

    Returns
    -------
    HeadingScan
        Headings in document order and every id in use afterwards.

    Raises
    ------
    ValueError
        If the level range is outside 1–6 or inverted.
    """
    if not 1 <= min_level <= max_level <= 6:
        msg = (
            "Heading levels must satisfy 1 <= min <= max <= 6, "
            f"got {min_level}..{max_level}."
        )
        raise ValueError(msg)
    taken = frozenset(used_ids) | {
        str(element["id"]) for element in root.find_all(id=True) if element["id"]
    }
    items: list[TocItem] = []
    tags = HEADING_TAGS[min_level - 1 : max_level]
    for index, heading in enumerate(root.find_all(tags)):
        text = " ".join(heading.get_text().split())
        anchor = heading.get("id")
        if not anchor:
            anchor, taken = unique_anchor(text, taken)
            heading["id"] = anchor
        items.append(
            TocItem(
                heading_text=text or EMPTY_HEADING_LABEL,
                heading_level=int(heading.name[1]),
                anchor_id=str(anchor),
                order_index=index,
            )
        )
    return HeadingScan(items=items, used_ids=taken)


def _fragment_nodes(toc_html: str) -> list[typ.Any]:
    fragment = BeautifulSoup(toc_html, "html.parser")
    return [node.extract() for node in list(fragment.contents)]


def insert_toc(root: Tag, toc_html: str) -> None:
    """Insert the rendered TOC block at the very top of ``root``."""
    for node in reversed(_fragment_nodes(toc_html)):
        root.insert(0, node)


def _toc_blocks(root: Tag) -> list[Tag]:
    """Return outermost TOC blocks under ``root`` in document order."""
    blocks: list[Tag] = []
    for element in root.select(TOC_BLOCK_SELECTOR):
        # Tag equality is structural, so compare parents by identity.
        if any(parent is block for parent in element.parents for block in blocks):
            continue
        blocks.append(element)
    return blocks


def replace_toc(root: Tag, toc_html: str) -> None:
    """Swap the first existing TOC block for ``toc_html``.

    Falls back to :func:`insert_toc` when the document has no TOC yet.
    """
    blocks = _toc_blocks(root)
    if not blocks:
        insert_toc(root, toc_html)
        return
    target = blocks[0]
    for node in _fragment_nodes(toc_html):
        target.insert_before(node)
    target.decompose()


def remove_toc(root: Tag) -> int:
    """Delete every TOC block under ``root`` and return how many were removed."""
    blocks = _toc_blocks(root)
    for block in blocks:
        block.decompose()
    return len(blocks)


def add_anchor_markers(root: Tag, items: cabc.Iterable[TocItem]) -> int:
    """Place an empty ``span.toc-anchor`` before each listed heading.

    The marker's id is ``anchor-<heading id>``. Headings that already have a
    marker, or whose id no longer exists under ``root``, are skipped.

    Returns
    -------
    int
        Number of markers inserted.
    """
    factory = BeautifulSoup("", "html.parser")
    added = 0
    for item in items:
        heading = root.find(id=item.anchor_id)
        marker_id = ANCHOR_MARKER_TEMPLATE.format(anchor=item.anchor_id)
        if heading is None or root.find(id=marker_id) is not None:
            continue
        marker = factory.new_tag(
            "span",
            attrs={
                "class": ANCHOR_MARKER_CLASS,
                "id": marker_id,
                "style": "display:block;height:0;margin:0",
            },
        )
        heading.insert_before(marker)
        added += 1
    return added


__all__ = [
    "HEADING_TAGS",
    "add_anchor_markers",
    "collect_headings",
    "insert_toc",
    "remove_toc",
    "replace_toc",
]
