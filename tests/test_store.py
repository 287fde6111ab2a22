"""Unit tests for the SQLite post store and its slug lifecycle."""

from __future__ import annotations

import datetime as dt
import sqlite3
import typing as typ

import pytest

from hukuk_blog.models import PostDraft
from hukuk_blog.renderer import ContentFormat
from hukuk_blog.store import PostNotFoundError, PostStore, SlugConflictError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from pytest_mock import MockerFixture


class _Clock:
    """Deterministic clock advancing one day per call."""

    def __init__(self) -> None:
        self.current = dt.datetime(2026, 1, 1, 9, 0, tzinfo=dt.UTC)

    def __call__(self) -> dt.datetime:
        value = self.current
        self.current += dt.timedelta(days=1)
        return value


@pytest.fixture
def store() -> cabc.Iterator[PostStore]:
    """Yield an in-memory store with a deterministic clock."""
    with PostStore(":memory:", clock=_Clock()) as post_store:
        yield post_store


def _draft(title: str, **overrides: typ.Any) -> PostDraft:
    draft = PostDraft(title=title, description="Özet", content="<h2>Giriş</h2>")
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft


def test_create_assigns_numbered_slugs_for_repeated_titles(store: PostStore) -> None:
    """Repeated titles should never share a slug."""
    slugs = [store.create(_draft("Miras Hukuku")).slug for _ in range(3)]
    assert slugs == ["miras-hukuku", "miras-hukuku-1", "miras-hukuku-2"], (
        f"unexpected slugs {slugs!r}"
    )


def test_create_round_trips_fields(store: PostStore) -> None:
    """Stored fields should come back unchanged."""
    created = store.create(
        _draft(
            "Tapu İptali",
            content="# Başlık",
            content_format=ContentFormat.MARKDOWN,
            hero_image="/images/tapu.jpg",
            alt_text="Tapu",
        )
    )
    fetched = store.get("tapu-iptali")
    assert fetched == created, "expected get() to return the created record"
    assert fetched is not None and fetched.content_format is ContentFormat.MARKDOWN
    assert fetched.pub_date == dt.datetime(2026, 1, 1, 9, 0, tzinfo=dt.UTC), (
        "expected the clock's timestamp as publication date"
    )


def test_exists_excluding_skips_current_slug(store: PostStore) -> None:
    """The exclusion predicate should ignore the record being edited."""
    store.create(_draft("Nafaka"))
    assert store.exists("nafaka"), "expected the slug to exist"
    assert not store.exists_excluding("nafaka", "nafaka"), (
        "expected the current record to be ignored"
    )
    assert store.exists_excluding("nafaka", "other"), (
        "expected other records to still count"
    )


def test_update_keeps_slug_when_title_unchanged(store: PostStore) -> None:
    """Editing the body alone must not renumber or rename the slug."""
    store.create(_draft("Velayet"))
    store.create(_draft("Velayet"))
    updated = store.update("velayet-1", _draft("Velayet", content="<p>yeni</p>"))
    assert updated.slug == "velayet-1", f"expected slug to stay, got {updated.slug!r}"
    assert updated.content == "<p>yeni</p>", "expected content to be updated"
    assert updated.updated_date > updated.pub_date, "expected a fresh update date"


def test_update_renames_slug_when_title_changes(store: PostStore) -> None:
    """A new title should move the post to the new slug."""
    store.create(_draft("Kira Artışı"))
    updated = store.update("kira-artisi", _draft("Kira Artış Oranı"))
    assert updated.slug == "kira-artis-orani", f"unexpected slug {updated.slug!r}"
    assert store.get("kira-artisi") is None, "expected the old slug to be free"


def test_update_avoids_other_posts(store: PostStore) -> None:
    """A renamed post must not take another post's slug."""
    store.create(_draft("Boşanma"))
    store.create(_draft("Tazminat"))
    updated = store.update("tazminat", _draft("Boşanma"))
    assert updated.slug == "bosanma-1", f"unexpected slug {updated.slug!r}"


def test_update_unknown_slug_raises(store: PostStore) -> None:
    """Updating a missing post is an error."""
    with pytest.raises(PostNotFoundError, match="yok"):
        store.update("yok", _draft("Yok"))


def test_list_posts_newest_first(store: PostStore) -> None:
    """Posts should be listed by publication date, newest first."""
    for title in ("Birinci", "İkinci", "Üçüncü"):
        store.create(_draft(title))
    slugs = [post.slug for post in store.list_posts()]
    assert slugs == ["ucuncu", "ikinci", "birinci"], f"unexpected order {slugs!r}"


def test_delete_reports_whether_a_post_was_removed(store: PostStore) -> None:
    """delete() returns True once and False afterwards."""
    store.create(_draft("Arabuluculuk"))
    assert store.delete("arabuluculuk"), "expected the post to be deleted"
    assert not store.delete("arabuluculuk"), "expected nothing left to delete"


def test_lost_race_raises_slug_conflict(
    store: PostStore, mocker: MockerFixture
) -> None:
    """A slug claimed between the pre-check and insert surfaces as a conflict."""
    store.create(_draft("İcra Takibi"))
    mocker.patch.object(store, "exists", return_value=False)
    with pytest.raises(SlugConflictError, match="icra-takibi"):
        store.create(_draft("İcra Takibi"))


def test_file_database_persists(tmp_path: Path) -> None:
    """Posts written to a file database should survive reopening."""
    database = tmp_path / "data" / "blog.db"
    with PostStore(database) as first:
        first.create(_draft("Ceza Hukuku"))
    with PostStore(database) as second:
        assert second.exists("ceza-hukuku"), "expected the post after reopening"
    with sqlite3.connect(database) as conn:
        count = conn.execute("SELECT COUNT(*) FROM posts").fetchone()[0]
    assert count == 1, f"expected one stored row, got {count}"
