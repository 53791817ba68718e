"""README processing: rule section extraction and Markdown → HTML rendering."""

from ballerina_sonar.docs.render import render_html, render_rule_docs
from ballerina_sonar.docs.section_parser import RuleSectionParser, extract_rule_docs

__all__ = ["RuleSectionParser", "extract_rule_docs", "render_html", "render_rule_docs"]
