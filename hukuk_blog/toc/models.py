"""Shared dataclasses describing a content document's outline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class TocItem:
    """One heading found in a content document.

    Attributes
    ----------
    heading_text : str
        Plain text of the heading with nested markup removed.
    heading_level : int
        Heading rank between 1 and 6 (``<h2>`` is 2).
    anchor_id : str
        Fragment identifier the heading is reachable at.
    order_index : int
        Zero-based position of the heading in document order.
    """

    heading_text: str
    heading_level: int
    anchor_id: str
    order_index: int

    @property
    def href(self) -> str:
        """Return the in-page link target for the heading."""
        return f"#{self.anchor_id}"


@dc.dataclass(slots=True)
class OutlineNode:
    """Heading entry placed in the nested outline.

    Attributes
    ----------
    item : TocItem
        Heading this entry links to.
    number : str
        Dotted position (``"2.1"``) in numbered outlines, otherwise empty.
    children : list[OutlineNode]
        Deeper headings that follow this one before the next heading at the
        same or a shallower level.
    """

    item: TocItem
    number: str = ""
    children: list[OutlineNode] = dc.field(default_factory=list)

    @property
    def label(self) -> str:
        """Return the display label, prefixed with the number when present."""
        if self.number:
            return f"{self.number} {self.item.heading_text}"
        return self.item.heading_text


@dc.dataclass(slots=True)
class Outline:
    """Nested outline built from a flat list of headings."""

    roots: list[OutlineNode] = dc.field(default_factory=list)
    numbered: bool = False

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the document had no headings to list."""
        return not self.roots

    def walk(self) -> list[OutlineNode]:
        """Return every node in document order (depth first)."""
        ordered: list[OutlineNode] = []
        pending = list(reversed(self.roots))
        while pending:
            node = pending.pop()
            ordered.append(node)
            pending.extend(reversed(node.children))
        return ordered


@dc.dataclass(frozen=True, slots=True)
class HeadingScan:
    """Headings collected from a live document and the ids now in use.

    Attributes
    ----------
    items : list[TocItem]
        Headings in document order.
    used_ids : frozenset[str]
        Every id present in the document after missing ids were assigned;
        pass it to the next scan to keep generated ids unique.
    """

    items: list[TocItem]
    used_ids: frozenset[str]


__all__ = ["HeadingScan", "Outline", "OutlineNode", "TocItem"]
