"""Behaviour tests for publishing articles with a table of contents.

These pytest-bdd scenarios store an article in a temporary SQLite database,
run the static build, and inspect the generated HTML with BeautifulSoup. They
check that every body heading is reachable from the outline and that editing
an article without renaming it keeps its public address.

Usage
-----
Run ``pytest tests/bdd/test_post_publishing.py -v`` after installing the test
dependencies (``pip install -e .[test]``). The feature file lives at
``features/post_publishing.feature``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from hukuk_blog.config import SiteConfig
from hukuk_blog.models import PostDraft
from hukuk_blog.pages import build_site
from hukuk_blog.store import PostStore

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "post_publishing.feature"
)
scenarios(FEATURE_FILE)

ARTICLE_BODY = (
    "<p>Giriş paragrafı.</p>"
    "<h2>İşe İade Davası</h2>"
    "<h3>Arabuluculuk Şartı</h3>"
    "<h3>Süreler</h3>"
    "<h2>Sonuç</h2>"
)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a site config writing into a temporary directory")
def given_site_config(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Point the store and the build output at ``tmp_path``."""
    scenario_state["site"] = SiteConfig(
        database=tmp_path / "blog.db", output_dir=tmp_path / "public"
    )


@given("a stored article with nested Turkish headings")
def given_stored_article(scenario_state: dict[str, object]) -> None:
    """Store one article whose body has two sections and two subsections."""
    site = typ.cast("SiteConfig", scenario_state["site"])
    with PostStore(site.database) as store:
        record = store.create(
            PostDraft(
                title="İşe İade Rehberi",
                description="İşe iade davasına dair temel bilgiler.",
                content=ARTICLE_BODY,
            )
        )
    scenario_state["slug"] = record.slug


@when("I edit the article body without changing its title")
def when_edit_body(scenario_state: dict[str, object]) -> None:
    """Save a new body under the same title."""
    site = typ.cast("SiteConfig", scenario_state["site"])
    slug = typ.cast("str", scenario_state["slug"])
    with PostStore(site.database) as store:
        existing = store.get(slug)
        assert existing is not None, "expected the stored article"
        draft = existing.draft()
        draft.content = ARTICLE_BODY + "<h2>Ek Not</h2>"
        scenario_state["updated_slug"] = store.update(slug, draft).slug


@when("I build the blog")
def when_build(scenario_state: dict[str, object]) -> None:
    """Render every stored article and the index."""
    site = typ.cast("SiteConfig", scenario_state["site"])
    with PostStore(site.database) as store:
        scenario_state["written"] = build_site(site, store.list_posts())


def _article_soup(scenario_state: dict[str, object]) -> BeautifulSoup:
    site = typ.cast("SiteConfig", scenario_state["site"])
    slug = typ.cast("str", scenario_state["slug"])
    page = site.output_dir / f"{slug}.html"
    return BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")


@then("the article page outline links to every body heading")
def then_outline_links_headings(scenario_state: dict[str, object]) -> None:
    """Each TOC link should target an existing heading id, in order."""
    soup = _article_soup(scenario_state)
    links = [link["href"].removeprefix("#") for link in soup.select("nav.post-toc a")]
    heading_ids = [
        heading.get("id") for heading in soup.select(".post-body h2, .post-body h3")
    ]
    assert links == heading_ids, (
        f"expected TOC links {links!r} to match heading ids {heading_ids!r}"
    )
    assert links == ["ise-iade-davasi", "arabuluculuk-sarti", "sureler", "sonuc"], (
        f"unexpected anchors {links!r}"
    )


@then("the outline nests the subsections under their section")
def then_outline_nests(scenario_state: dict[str, object]) -> None:
    """Subsections should sit in a list inside the first section's entry."""
    soup = _article_soup(scenario_state)
    root = soup.select_one("nav.post-toc ol.toc-root")
    assert root is not None, "expected the TOC root list"
    entries = root.find_all("li", recursive=False)
    assert len(entries) == 2, f"expected two top-level entries, got {len(entries)}"
    nested = [link.get_text() for link in entries[0].select("ol a")]
    assert nested == ["Arabuluculuk Şartı", "Süreler"], f"unexpected nesting {nested!r}"


@then("the article is still published under its original slug")
def then_slug_unchanged(scenario_state: dict[str, object]) -> None:
    """The edit must not rename the article or its page."""
    assert scenario_state["updated_slug"] == scenario_state["slug"], (
        "expected the slug to be carried forward"
    )
    soup = _article_soup(scenario_state)
    assert soup.select_one(".post-body h2#ek-not") is not None, (
        "expected the edited body on the original page"
    )
