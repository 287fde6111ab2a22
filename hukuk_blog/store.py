"""SQLite-backed post table keyed by slug.

The store is the collaborator the slug helpers consult: :meth:`PostStore.exists`
and :meth:`PostStore.exists_excluding` are passed straight to
:func:`~hukuk_blog.slugs.create_unique_slug` and
:func:`~hukuk_blog.slugs.create_unique_slug_for_update`. Those lookups are a
pre-check only; the ``UNIQUE`` constraint on ``slug`` is what actually keeps
two posts from sharing one, and a writer that loses that race gets a
:class:`SlugConflictError`.

Example
-------
>>> from hukuk_blog.models import PostDraft
>>> from hukuk_blog.store import PostStore
>>> with PostStore(":memory:") as store:
...     first = store.create(PostDraft("Kira Hukuku", "Özet", "<p>...</p>"))
...     second = store.create(PostDraft("Kira Hukuku", "Özet", "<p>...</p>"))
>>> (first.slug, second.slug)
('kira-hukuku', 'kira-hukuku-1')
"""

from __future__ import annotations

import datetime as dt
import logging
import sqlite3
import typing as typ
from pathlib import Path

from .models import PostDraft, PostRecord
from .renderer import ContentFormat
from .slugs import create_unique_slug, create_unique_slug_for_update

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from types import TracebackType

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug TEXT UNIQUE NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    content TEXT NOT NULL,
    content_format TEXT NOT NULL DEFAULT 'html',
    hero_image TEXT NOT NULL DEFAULT '',
    alt_text TEXT NOT NULL DEFAULT '',
    pub_date TEXT NOT NULL,
    updated_date TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_posts_pub_date ON posts(pub_date DESC);
"""


class SlugConflictError(ValueError):
    """Raised when another writer claimed a slug between check and insert."""


class PostNotFoundError(LookupError):
    """Raised when an update targets a slug that is not stored."""


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def _row_to_record(row: sqlite3.Row) -> PostRecord:
    return PostRecord(
        id=row["id"],
        slug=row["slug"],
        title=row["title"],
        description=row["description"],
        content=row["content"],
        content_format=ContentFormat(row["content_format"]),
        hero_image=row["hero_image"],
        alt_text=row["alt_text"],
        pub_date=dt.datetime.fromisoformat(row["pub_date"]),
        updated_date=dt.datetime.fromisoformat(row["updated_date"]),
    )


class PostStore:
    """Create, edit, list, and delete blog posts in a SQLite database."""

    def __init__(
        self,
        database: Path | str,
        *,
        clock: cabc.Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        """Open (and if needed create) the posts table.

        Parameters
        ----------
        database : Path or str
            SQLite file path, or ``":memory:"`` for a throwaway store. Parent
            directories are created for file paths.
        clock : Callable[[], datetime], optional
            Source of publication and update timestamps; defaults to the
            current UTC time.
        """
        if str(database) != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._conn = sqlite3.connect(str(database))
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(SCHEMA)
        logger.debug("post store opened at %s", database)

    def __enter__(self) -> PostStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying database connection."""
        self._conn.close()

    def exists(self, slug: str) -> bool:
        """Return ``True`` when any stored post uses ``slug``."""
        row = self._conn.execute(
            "SELECT 1 FROM posts WHERE slug = ? LIMIT 1", (slug,)
        ).fetchone()
        return row is not None

    def exists_excluding(self, slug: str, current_slug: str) -> bool:
        """Return ``True`` when a post other than ``current_slug`` uses ``slug``."""
        row = self._conn.execute(
            "SELECT 1 FROM posts WHERE slug = ? AND slug != ? LIMIT 1",
            (slug, current_slug),
        ).fetchone()
        return row is not None

    def get(self, slug: str) -> PostRecord | None:
        """Return the post stored under ``slug``, or ``None``."""
        row = self._conn.execute(
            "SELECT * FROM posts WHERE slug = ?", (slug,)
        ).fetchone()
        return _row_to_record(row) if row is not None else None

    def list_posts(self) -> list[PostRecord]:
        """Return every post, most recently published first."""
        rows = self._conn.execute(
            "SELECT * FROM posts ORDER BY pub_date DESC, id DESC"
        ).fetchall()
        return [_row_to_record(row) for row in rows]

    def create(self, draft: PostDraft) -> PostRecord:
        """Store a new post under a slug derived from its title.

        Raises
        ------
        SlugConflictError
            If a concurrent writer inserted the same slug after the
            availability check.
        """
        slug = create_unique_slug(draft.title, self.exists)
        timestamp = self._clock().isoformat()
        try:
            with self._conn:
                self._conn.execute(
                    """
                    INSERT INTO posts (
                        slug, title, description, content, content_format,
                        hero_image, alt_text, pub_date, updated_date
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        slug,
                        draft.title,
                        draft.description,
                        draft.content,
                        str(draft.content_format),
                        draft.hero_image,
                        draft.alt_text,
                        timestamp,
                        timestamp,
                    ),
                )
        except sqlite3.IntegrityError as exc:
            msg = f"Slug '{slug}' was claimed by another post; retry the save."
            raise SlugConflictError(msg) from exc
        logger.info("created post %s", slug)
        return self._require(slug)

    def update(self, current_slug: str, draft: PostDraft) -> PostRecord:
        """Replace a post's fields, re-deriving the slug only if the title moved.

        Parameters
        ----------
        current_slug : str
            Slug the post is stored under.
        draft : PostDraft
            New field values. The publication date is kept.

        Returns
        -------
        PostRecord
            The updated post, possibly under a new slug.

        Raises
        ------
        PostNotFoundError
            If no post is stored under ``current_slug``.
        SlugConflictError
            If the new slug was claimed concurrently.
        """
        if not self.exists(current_slug):
            msg = f"No post is stored under slug '{current_slug}'."
            raise PostNotFoundError(msg)
        new_slug = create_unique_slug_for_update(
            draft.title, current_slug, self.exists_excluding
        )
        try:
            with self._conn:
                self._conn.execute(
                    """
                    UPDATE posts
                    SET slug = ?, title = ?, description = ?, content = ?,
                        content_format = ?, hero_image = ?, alt_text = ?,
                        updated_date = ?
                    WHERE slug = ?
                    """,
                    (
                        new_slug,
                        draft.title,
                        draft.description,
                        draft.content,
                        str(draft.content_format),
                        draft.hero_image,
                        draft.alt_text,
                        self._clock().isoformat(),
                        current_slug,
                    ),
                )
        except sqlite3.IntegrityError as exc:
            msg = f"Slug '{new_slug}' was claimed by another post; retry the save."
            raise SlugConflictError(msg) from exc
        if new_slug != current_slug:
            logger.info("renamed post %s -> %s", current_slug, new_slug)
        return self._require(new_slug)

    def delete(self, slug: str) -> bool:
        """Delete the post under ``slug``; return whether one was removed."""
        with self._conn:
            cursor = self._conn.execute("DELETE FROM posts WHERE slug = ?", (slug,))
        removed = cursor.rowcount > 0
        if removed:
            logger.info("deleted post %s", slug)
        return removed

    def _require(self, slug: str) -> PostRecord:
        record = self.get(slug)
        if record is None:  # pragma: no cover - row written in the same call
            msg = f"Post '{slug}' vanished after it was written."
            raise PostNotFoundError(msg)
        return record


__all__ = ["PostNotFoundError", "PostStore", "SlugConflictError"]
