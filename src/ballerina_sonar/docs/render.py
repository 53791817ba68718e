"""Markdown → HTML for rule descriptions (CommonMark via markdown-it-py)."""

from __future__ import annotations

from collections.abc import Mapping

from markdown_it import MarkdownIt

_RENDERER = MarkdownIt("commonmark")


def render_html(markdown: str) -> str:
    """Render a Markdown fragment to HTML; empty in, empty out."""
    if not markdown:
        return ""
    return _RENDERER.render(markdown)


def render_rule_docs(docs: Mapping[str, str]) -> dict[str, str]:
    """Render each rule fragment exactly once."""
    return {rule_id: render_html(fragment) for rule_id, fragment in docs.items()}
