"""Enums shared by the rule catalog, definitions and scanner layers."""

from __future__ import annotations

from enum import Enum


class RuleType(str, Enum):
    """Rule category as published by the platform (case-sensitive)."""

    BUG = "BUG"
    VULNERABILITY = "VULNERABILITY"
    CODE_SMELL = "CODE_SMELL"
    SECURITY_HOTSPOT = "SECURITY_HOTSPOT"

    @classmethod
    def from_kind(cls, kind: str | None) -> "RuleType":
        """Map a scanner ``ruleKind``; anything unrecognised is a code smell."""
        normalized = (kind or "").upper()
        if normalized == cls.BUG.value:
            return cls.BUG
        if normalized == cls.VULNERABILITY.value:
            return cls.VULNERABILITY
        return cls.CODE_SMELL


class Severity(str, Enum):
    """Platform severity ladder."""

    INFO = "INFO"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"
    BLOCKER = "BLOCKER"


class IssueSource(str, Enum):
    """Where a scanner issue originated."""

    BUILT_IN = "BUILT_IN"
    EXTERNAL = "EXTERNAL"
