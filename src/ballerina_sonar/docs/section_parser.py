"""Extract per-rule Markdown documentation from the scan tool README.

The README documents rules under a ``## Rules`` section, one ``### <id> -
<title>`` heading per rule. Headings are the only delimiters, so the parser
is a small state machine driven by heading nodes over the top-level blocks
of a CommonMark syntax tree:

    outside ──"## Rules"──▶ inside ──any other "##"──▶ outside
                              │
                              ├─ "### id - title"  flush previous rule, open *id*
                              ├─ "####…" (level n) re-emit as level n-2 heading
                              └─ other blocks      append as Markdown

Anything the parser does not understand is skipped; documentation is
best-effort and never fails a generation pass.
"""

from __future__ import annotations

import logging

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

_logger = logging.getLogger(__name__)

RULES_SECTION_TITLE = "Rules"
RULE_ID_SEPARATOR = "-"

_LINE_BREAKS = {"softbreak", "hardbreak"}


# ── text extraction ─────────────────────────────────────────────────


def plain_text(node: SyntaxTreeNode) -> str:
    """Concatenate the literal text under *node*; line breaks become spaces.

    Inline code spans are not literal text and contribute nothing.
    """
    return _collect_text(node).strip()


def _collect_text(node: SyntaxTreeNode) -> str:
    if node.type == "text":
        return node.content
    if node.type == "code_inline":
        return ""
    if node.type in _LINE_BREAKS:
        return " "
    return "".join(_collect_text(child) for child in node.children)


def _inline_markdown(node: SyntaxTreeNode) -> str:
    """Like :func:`plain_text` but keeps inline code spans as Markdown."""
    if node.type == "code_inline":
        return f"`{node.content}`"
    if node.type == "text":
        return node.content
    if node.type in _LINE_BREAKS:
        return " "
    return "".join(_inline_markdown(child) for child in node.children)


def _heading_level(node: SyntaxTreeNode) -> int:
    # markdown-it tags headings "h1" … "h6"
    return int(node.tag[1:])


# ── block rendering ─────────────────────────────────────────────────


def _indent_continuation(text: str, width: int) -> str:
    lines = text.split("\n")
    pad = " " * width
    return "\n".join([lines[0]] + [pad + line if line else line for line in lines[1:]])


def _render_list(node: SyntaxTreeNode, ordered: bool) -> str:
    start = int(node.attrs.get("start", 1)) if ordered else 1
    items = []
    for number, item in enumerate(node.children, start=start):
        marker = f"{number}. " if ordered else "- "
        body = "\n\n".join(
            rendered for rendered in (render_block(child) for child in item.children) if rendered
        )
        items.append(marker + _indent_continuation(body, len(marker)))
    return "\n".join(items)


def render_block(node: SyntaxTreeNode) -> str:
    """Render one block node back to an equivalent Markdown string."""
    kind = node.type
    if kind == "paragraph":
        return _inline_markdown(node).strip()
    if kind == "fence":
        return f"```{node.info}\n{node.content}```"
    if kind == "code_block":
        return f"```\n{node.content}```"
    if kind == "blockquote":
        inner = "\n\n".join(
            rendered for rendered in (render_block(child) for child in node.children) if rendered
        )
        return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
    if kind == "bullet_list":
        return _render_list(node, ordered=False)
    if kind == "ordered_list":
        return _render_list(node, ordered=True)
    if kind == "heading":
        return "#" * _heading_level(node) + " " + plain_text(node)
    if kind == "hr":
        return "---"
    if kind == "html_block":
        return node.content.rstrip("\n")
    if kind == "code_inline":
        return f"`{node.content}`"
    return "\n\n".join(
        rendered for rendered in (render_block(child) for child in node.children) if rendered
    )


# ── state machine ───────────────────────────────────────────────────


class RuleSectionParser:
    """Single-pass extractor of rule fragments from a README syntax tree.

    Feed it a document with :meth:`visit_document` (or block by block with
    :meth:`visit`), then call :meth:`finish` to flush the last open rule
    and obtain ``{rule_id: markdown}``.
    """

    def __init__(self) -> None:
        self.in_rules_section = False
        self.current_id: str | None = None
        self._buffer: list[str] = []
        self._docs: dict[str, str] = {}

    # -- driving ---------------------------------------------------------

    def visit_document(self, root: SyntaxTreeNode) -> None:
        for block in root.children:
            self.visit(block)

    def visit(self, node: SyntaxTreeNode) -> None:
        if node.type == "heading":
            self._visit_heading(node)
            return
        if not self.in_rules_section or self.current_id is None:
            return
        rendered = render_block(node)
        if rendered:
            self._buffer.append(rendered + "\n\n")

    def finish(self) -> dict[str, str]:
        """Flush the open rule (the README has no closing heading)."""
        self._flush()
        return dict(self._docs)

    # -- transitions -----------------------------------------------------

    def _visit_heading(self, heading: SyntaxTreeNode) -> None:
        level = _heading_level(heading)
        text = plain_text(heading)

        if level == 2:
            if not self.in_rules_section:
                self.in_rules_section = text == RULES_SECTION_TITLE
                return
            self._flush()
            self.current_id = None
            self.in_rules_section = False
            return

        if not self.in_rules_section:
            return

        if level == 3:
            self._flush()
            self.current_id = self._rule_id(text)
            return

        if level > 3 and self.current_id is not None:
            self._buffer.append("#" * (level - 2) + " " + text + "\n\n")

    @staticmethod
    def _rule_id(heading_text: str) -> str | None:
        rule_id, sep, _title = heading_text.partition(RULE_ID_SEPARATOR)
        rule_id = rule_id.strip()
        if not sep or not rule_id:
            _logger.debug("Skipping rule heading without an id: %r", heading_text)
            return None
        return rule_id

    def _flush(self) -> None:
        if self._buffer and self.current_id is not None:
            self._docs[self.current_id] = "".join(self._buffer)
        self._buffer.clear()


_MARKDOWN = MarkdownIt("commonmark")


def parse_markdown(text: str) -> SyntaxTreeNode:
    """Parse *text* into a CommonMark syntax tree."""
    return SyntaxTreeNode(_MARKDOWN.parse(text))


def extract_rule_docs(readme: str) -> dict[str, str]:
    """Return ``{rule_id: markdown}`` for every rule documented in *readme*."""
    parser = RuleSectionParser()
    parser.visit_document(parse_markdown(readme or ""))
    docs = parser.finish()
    _logger.debug("Extracted documentation for %d rules", len(docs))
    return docs
