"""Tests for README rule-section extraction."""

from __future__ import annotations

import textwrap

from ballerina_sonar.docs.section_parser import (
    RuleSectionParser,
    extract_rule_docs,
    parse_markdown,
    plain_text,
)

from conftest import SAMPLE_README


def _doc(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


class TestSectionBoundaries:
    def test_rule_closed_by_next_level_two_heading(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            Do X

            ## Other Section

            ### R9 - Outside

            Not a rule.
        """))
        assert list(docs) == ["R1"]
        assert "Do X" in docs["R1"]
        assert "Not a rule" not in docs["R1"]

    def test_last_rule_flushed_at_end_of_document(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R2 - Title

            Trailing rule text.
        """))
        assert docs == {"R2": "Trailing rule text.\n\n"}

    def test_rules_title_must_match_exactly(self):
        docs = extract_rule_docs(_doc("""
            ## rules

            ### R1 - Title

            Text.

            ## Rules list

            ### R2 - Title

            Text.
        """))
        assert docs == {}

    def test_level_three_outside_section_ignored(self):
        docs = extract_rule_docs(_doc("""
            ### R1 - Title

            Text.
        """))
        assert docs == {}

    def test_content_before_first_rule_is_dropped(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            Intro prose for all rules.

            ### R1 - Title

            Body.
        """))
        assert docs == {"R1": "Body.\n\n"}

    def test_rule_with_heading_only_is_absent(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            ### R2 - Title

            Body.
        """))
        assert docs == {"R2": "Body.\n\n"}

    def test_empty_document(self):
        assert extract_rule_docs("") == {}


class TestRuleHeadings:
    def test_heading_without_separator_is_skipped(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - First

            One.

            ### NoSeparatorHeading

            Orphan prose.

            ### R2 - Second

            Two.
        """))
        assert docs == {"R1": "One.\n\n", "R2": "Two.\n\n"}
        assert all("Orphan" not in v for v in docs.values())

    def test_id_is_text_before_first_dash_trimmed(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### ballerina:1   -  Avoid self-assignment - really

            Body.
        """))
        assert list(docs) == ["ballerina:1"]

    def test_empty_id_is_skipped(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### - Title only

            Body.
        """))
        assert docs == {}

    def test_inline_code_ignored_in_rule_id(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 `x` - Title with `code`

            Body.

            ### `y` - Code-only id

            Dropped.
        """))
        assert docs == {"R1": "Body.\n\n"}

    def test_duplicate_rule_heading_last_wins(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Old

            Old text.

            ### R1 - New

            New text.
        """))
        assert docs == {"R1": "New text.\n\n"}

    def test_sub_headings_shift_two_levels(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            #### Noncompliant

            ##### Detail
        """))
        assert docs["R1"] == "## Noncompliant\n\n### Detail\n\n"

    def test_sub_heading_without_open_rule_ignored(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            #### Stray

            ### R1 - Title

            Body.
        """))
        assert docs == {"R1": "Body.\n\n"}


class TestBlockRendering:
    def test_fenced_code_keeps_language(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            ```ballerina
            int x = 1;
            ```
        """))
        assert docs["R1"] == "```ballerina\nint x = 1;\n```\n\n"

    def test_inline_code_kept_in_paragraph(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            Use `check` not
            `checkpanic`.
        """))
        assert docs["R1"] == "Use `check` not `checkpanic`.\n\n"

    def test_block_quote(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            > Prefer check.
        """))
        assert docs["R1"] == "> Prefer check.\n\n"

    def test_bullet_list_items_one_per_line(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            - first
            - second
        """))
        assert docs["R1"] == "- first\n- second\n\n"

    def test_ordered_list(self):
        docs = extract_rule_docs(_doc("""
            ## Rules

            ### R1 - Title

            1. first
            2. second
        """))
        assert docs["R1"] == "1. first\n2. second\n\n"


class TestPlainText:
    def test_line_breaks_become_spaces(self):
        root = parse_markdown("alpha\nbeta  \ngamma\n")
        assert plain_text(root) == "alpha beta gamma"

    def test_inline_code_not_collected(self):
        root = parse_markdown("Use `check` here\n")
        assert plain_text(root) == "Use  here"

    def test_trims(self):
        root = parse_markdown("#   Heading text   \n")
        assert plain_text(root.children[0]) == "Heading text"


class TestParserState:
    def test_state_transitions(self):
        parser = RuleSectionParser()
        blocks = parse_markdown("## Rules\n\n### R1 - T\n\n## Next\n").children
        parser.visit(blocks[0])
        assert parser.in_rules_section is True
        parser.visit(blocks[1])
        assert parser.current_id == "R1"
        parser.visit(blocks[2])
        assert parser.in_rules_section is False
        assert parser.current_id is None

    def test_sample_readme(self):
        docs = extract_rule_docs(SAMPLE_README)
        assert set(docs) == {"ballerina:1", "ballerina:2"}
        assert "## Noncompliant" in docs["ballerina:1"]
        assert "```ballerina\nint x = checkpanic foo();\n```" in docs["ballerina:1"]
        assert "> Prefer `check` instead." in docs["ballerina:1"]
        assert docs["ballerina:2"] == "Remove parameters that are never read.\n\n"
