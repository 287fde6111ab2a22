r"""Turn Turkish titles into URL-safe, collision-free identifiers.

Post slugs double as storage keys, and heading anchors double as fragment
targets, so both go through :func:`slugify` and share one collision loop.
Callers provide the existence check; nothing here touches storage.

Example
-------
>>> from hukuk_blog.slugs import create_unique_slug, slugify
>>> slugify("İstanbul Şehri")
'istanbul-sehri'
>>> create_unique_slug("Law 101", {"law-101", "law-101-1"}.__contains__)
'law-101-2'
"""

from __future__ import annotations

import re
import typing as typ

from ._constants import DEFAULT_ANCHOR, DEFAULT_POST_SLUG

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TURKISH_TO_ASCII = str.maketrans(
    {
        "ı": "i",
        "İ": "I",
        "ğ": "g",
        "Ğ": "G",
        "ü": "u",
        "Ü": "U",
        "ş": "s",
        "Ş": "S",
        "ö": "o",
        "Ö": "O",
        "ç": "c",
        "Ç": "C",
    }
)
DISALLOWED_PATTERN = re.compile(r"[^a-z0-9\s_-]")
SEPARATOR_PATTERN = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Return a lowercase ASCII slug for ``text``.

    Parameters
    ----------
    text : str
        Arbitrary title or heading text; may be empty.

    Returns
    -------
    str
        Slug made of ``a-z``, ``0-9`` and single hyphens, without leading or
        trailing hyphens. Empty when ``text`` has no retainable characters.

    Notes
    -----
    Turkish letters are transliterated before lowercasing. ``"İ".lower()``
    produces ``"i"`` plus a combining dot, which the character filter would
    then drop, so the reverse order is not equivalent.
    """
    value = text.strip().translate(TURKISH_TO_ASCII).lower()
    value = DISALLOWED_PATTERN.sub("", value)
    value = SEPARATOR_PATTERN.sub("-", value)
    return value.strip("-")


def _resolve_collision(base: str, exists: cabc.Callable[[str], bool]) -> str:
    """Return ``base`` or the first free ``base-N`` for N = 1, 2, ..."""
    if not exists(base):
        return base
    counter = 1
    candidate = f"{base}-{counter}"
    while exists(candidate):
        counter += 1
        candidate = f"{base}-{counter}"
    return candidate


def create_unique_slug(
    title: str,
    exists: cabc.Callable[[str], bool],
    *,
    fallback: str = DEFAULT_POST_SLUG,
) -> str:
    """Generate a slug for a new record that no stored record uses yet.

    Parameters
    ----------
    title : str
        Human title the slug is derived from.
    exists : Callable[[str], bool]
        Storage lookup returning ``True`` when a slug is taken. It is called
        with the base slug first and then ``base-1``, ``base-2`` and so on.
    fallback : str, optional
        Base used when ``title`` slugifies to the empty string.

    Returns
    -------
    str
        The first candidate for which ``exists`` returned ``False``.
    """
    base = slugify(title) or fallback
    return _resolve_collision(base, exists)


def create_unique_slug_for_update(
    title: str,
    current_slug: str,
    exists_excluding: cabc.Callable[[str, str], bool],
    *,
    fallback: str = DEFAULT_POST_SLUG,
) -> str:
    """Generate a slug for an edited record, keeping it when the title allows.

    Parameters
    ----------
    title : str
        The record's (possibly changed) title.
    current_slug : str
        Slug the record is stored under right now.
    exists_excluding : Callable[[str, str], bool]
        Lookup called as ``exists_excluding(candidate, current_slug)``; it must
        ignore the record identified by ``current_slug``.
    fallback : str, optional
        Base used when ``title`` slugifies to the empty string.

    Returns
    -------
    str
        ``current_slug`` when the title still slugifies to it, otherwise the
        first free candidate among the other records.
    """
    base = slugify(title) or fallback
    if base == current_slug:
        return current_slug
    return _resolve_collision(base, lambda slug: exists_excluding(slug, current_slug))


def unique_anchor(
    text: str,
    used_ids: cabc.Set[str],
    *,
    fallback: str = DEFAULT_ANCHOR,
) -> tuple[str, frozenset[str]]:
    """Allocate a document-local anchor id for heading ``text``.

    Parameters
    ----------
    text : str
        Heading text the anchor is derived from.
    used_ids : Set[str]
        Ids already taken within the document.
    fallback : str, optional
        Base used when ``text`` slugifies to the empty string.

    Returns
    -------
    tuple[str, frozenset[str]]
        The allocated anchor and ``used_ids`` extended with it. The input set
        is never mutated.
    """
    anchor = _resolve_collision(slugify(text) or fallback, used_ids.__contains__)
    return anchor, frozenset(used_ids) | {anchor}


__all__ = [
    "create_unique_slug",
    "create_unique_slug_for_update",
    "slugify",
    "unique_anchor",
]
