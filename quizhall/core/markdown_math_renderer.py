"""Markdown rendering for question text shown to participants.

Question text is authored as CommonMark and rendered to an HTML fragment on
the server, so every client receives the same markup. Raw HTML in the source
is escaped rather than passed through. Math written as ``$...$`` is left
untouched so a client-side MathJax/KaTeX include can typeset it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)


renderer = MarkdownMathRenderer()
# MarkdownIt is safe for concurrent read-only renders, so request handlers
# share this instance.
