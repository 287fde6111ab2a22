r"""Find headings in stored HTML and give them stable anchor ids.

Post bodies are stored as HTML written in the admin editor. This module scans
that HTML as text, so everything outside a rewritten heading start tag comes
back byte for byte. Only well-formed ``<hN ...>...</hN>`` pairs count as
headings; unclosed or mismatched tags are skipped instead of raising, and
headings inside ``<!-- -->`` comments are ignored.

Example
-------
>>> from hukuk_blog.toc.extractor import extract_headings, inject_anchors
>>> [item.anchor_id for item in extract_headings("<h2>A</h2><h3>B</h3>")]
['a', 'b']
>>> inject_anchors("<h2>Giriş</h2>")
'<h2 id="giris">Giriş</h2>'
"""

from __future__ import annotations

import dataclasses as dc
import html as html_lib
import re
import typing as typ

from hukuk_blog._constants import EMPTY_HEADING_LABEL
from hukuk_blog.slugs import unique_anchor

from .models import TocItem

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_PATTERN = re.compile(
    r"<(h([1-6]))(\s[^<>]*)?>(.*?)</h\2\s*>", re.IGNORECASE | re.DOTALL
)
START_TAG_PATTERN = re.compile(r"<[A-Za-z][^\s/<>]*([^<>]*)>")
ATTRIBUTE_PATTERN = re.compile(
    r"""\s*([^\s"'=<>/]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""
)
COMMENT_PATTERN = re.compile(r"<!--.*?(?:-->|\Z)", re.DOTALL)
TAG_PATTERN = re.compile(r"<[^>]*>")
DEFAULT_LEVELS = (2, 4)


@dc.dataclass(frozen=True, slots=True)
class _HeadingMatch:
    item: TocItem
    tag: str
    attributes: str
    start: int
    end: int
    has_id: bool


def _validate_levels(min_level: int, max_level: int) -> None:
    if not 1 <= min_level <= max_level <= 6:
        msg = (
            "Heading levels must satisfy 1 <= min <= max <= 6, "
            f"got {min_level}..{max_level}."
        )
        raise ValueError(msg)


def _is_id(attribute: re.Match[str]) -> bool:
    return attribute.group(1).lower() == "id"


def _id_value(attributes: str) -> str | None:
    """Return the ``id`` attribute value in a start tag's attribute text.

    Attributes are read one name/value pair at a time, so ``id=`` inside a
    quoted value of another attribute is not mistaken for an id. The first
    ``id`` wins, as in browsers. A bare ``id`` yields an empty string.
    """
    for attribute in ATTRIBUTE_PATTERN.finditer(attributes):
        if not _is_id(attribute):
            continue
        value = attribute.group(2) or ""
        if value[:1] in {'"', "'"}:
            value = value[1:-1]
        return html_lib.unescape(value)
    return None


def _without_id(attributes: str) -> str:
    """Drop every ``id`` attribute from a start tag's attribute text."""
    return ATTRIBUTE_PATTERN.sub(
        lambda attribute: "" if _is_id(attribute) else attribute.group(0),
        attributes,
    )


def _mask_comments(html: str) -> str:
    """Blank out HTML comments while keeping every offset in ``html`` valid."""
    return COMMENT_PATTERN.sub(lambda comment: " " * len(comment.group(0)), html)


def _document_ids(html: str) -> frozenset[str]:
    """Collect every non-empty ``id`` attribute value in ``html``."""
    found: set[str] = set()
    for tag in START_TAG_PATTERN.finditer(html):
        value = _id_value(tag.group(1))
        if value:
            found.add(value)
    return frozenset(found)


def heading_text(inner_html: str) -> str:
    """Return the plain text of a heading's inner HTML, whitespace collapsed."""
    text = html_lib.unescape(TAG_PATTERN.sub("", inner_html))
    return " ".join(text.split())


def _scan(html: str, min_level: int, max_level: int) -> cabc.Iterator[_HeadingMatch]:
    _validate_levels(min_level, max_level)
    # Offsets into the masked text are valid for the original as well.
    visible = _mask_comments(html)
    used_ids = _document_ids(visible)
    order = 0
    for match in HEADING_PATTERN.finditer(visible):
        level = int(match.group(2))
        if not min_level <= level <= max_level:
            continue
        attributes = match.group(3) or ""
        text = heading_text(match.group(4))
        existing = _id_value(attributes)
        if existing:
            anchor = existing
        else:
            anchor, used_ids = unique_anchor(text, used_ids)
        yield _HeadingMatch(
            item=TocItem(
                heading_text=text or EMPTY_HEADING_LABEL,
                heading_level=level,
                anchor_id=anchor,
                order_index=order,
            ),
            tag=match.group(1),
            attributes=attributes,
            start=match.start(),
            end=match.start(4),
            has_id=bool(existing),
        )
        order += 1


def extract_headings(
    html: str,
    *,
    min_level: int = DEFAULT_LEVELS[0],
    max_level: int = DEFAULT_LEVELS[1],
) -> list[TocItem]:
    """Return the headings of ``html`` in document order.

    Parameters
    ----------
    html : str
        Rendered post body.
    min_level, max_level : int, optional
        Inclusive heading range to collect. Defaults to ``h2``–``h4``, the
        levels used inside article bodies.

    Returns
    -------
    list[TocItem]
        One item per recognised heading. Headings that already carry an
        ``id`` report it as their anchor; the rest get a slug of their text,
        suffixed ``-1``, ``-2``... when that id is already taken in the
        document. Returns an empty list for empty input or when nothing
        matches.

    Raises
    ------
    ValueError
        If the level range is outside 1–6 or inverted.
    """
    return [found.item for found in _scan(html, min_level, max_level)]


def inject_anchors(
    html: str,
    *,
    min_level: int = DEFAULT_LEVELS[0],
    max_level: int = DEFAULT_LEVELS[1],
) -> str:
    """Add ``id`` attributes to headings that do not have one.

    Parameters
    ----------
    html : str
        Rendered post body.
    min_level, max_level : int, optional
        Inclusive heading range to annotate.

    Returns
    -------
    str
        ``html`` with each recognised heading's start tag carrying the anchor
        reported by :func:`extract_headings`. Existing ids are left alone, so
        running the function twice yields the same output as running it once.
    """
    pieces: list[str] = []
    cursor = 0
    for found in _scan(html, min_level, max_level):
        if found.has_id:
            continue
        attributes = _without_id(found.attributes).rstrip()
        pieces.append(html[cursor : found.start])
        pieces.append(f'<{found.tag}{attributes} id="{found.item.anchor_id}">')
        cursor = found.end
    if not pieces:
        return html
    pieces.append(html[cursor:])
    return "".join(pieces)


__all__ = ["DEFAULT_LEVELS", "extract_headings", "heading_text", "inject_anchors"]
