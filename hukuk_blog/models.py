"""Post dataclasses shared by the store, the page builders, and the CLI."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata

from .renderer import ContentFormat


@dc.dataclass(slots=True)
class PostDraft:
    """Editable fields of a blog post, as submitted from the admin form.

    Attributes
    ----------
    title : str
        Headline; the post's slug is derived from it.
    description : str
        Summary shown on the blog index and in meta tags.
    content : str
        Body in ``content_format``.
    content_format : ContentFormat
        Whether ``content`` is editor HTML or Markdown.
    hero_image : str
        Public path of the hero image, empty when the post has none.
    alt_text : str
        Alternative text for the hero image.
    """

    title: str
    description: str
    content: str
    content_format: ContentFormat = ContentFormat.HTML
    hero_image: str = ""
    alt_text: str = ""


@dc.dataclass(slots=True)
class PostRecord:
    """A stored post keyed by its slug."""

    id: int
    slug: str
    title: str
    description: str
    content: str
    content_format: ContentFormat
    hero_image: str
    alt_text: str
    pub_date: dt.datetime
    updated_date: dt.datetime

    def draft(self) -> PostDraft:
        """Return the editable fields, e.g. to prefill an update."""
        return PostDraft(
            title=self.title,
            description=self.description,
            content=self.content,
            content_format=self.content_format,
            hero_image=self.hero_image,
            alt_text=self.alt_text,
        )


__all__ = ["PostDraft", "PostRecord"]
