"""Render stored post bodies to HTML.

Posts written in the admin editor are stored as HTML and pass through as-is.
Posts imported from Markdown files are converted with the same extension set
the editor preview uses, with Pygments highlighting for fenced code.
"""

from __future__ import annotations

import enum
import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class ContentFormat(enum.StrEnum):
    """Storage format of a post body."""

    HTML = "html"
    MARKDOWN = "markdown"


class PostBodyRenderer:
    """Render post bodies with consistent code styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, content: str, content_format: ContentFormat) -> str:
        """Return ``content`` as HTML according to its storage format."""
        if content_format is ContentFormat.MARKDOWN:
            return self.markdown(content)
        return content

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
            output_format="html5",
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["ContentFormat", "PostBodyRenderer"]
