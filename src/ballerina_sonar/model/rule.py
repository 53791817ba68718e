"""Rule records, published rule metadata and the catalog that holds them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


def _upper(value: Any) -> str:
    # Locale-independent: str.upper() never consults the process locale.
    return str(value or "").upper()


@dataclass(frozen=True, slots=True)
class Remediation:
    """Remediation cost descriptor carried through from ``rule-info.json``."""

    func: str = ""
    constant_cost: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Remediation | None":
        if not data:
            return None
        return cls(
            func=str(data.get("func") or ""),
            constant_cost=str(data.get("constantCost") or ""),
        )


@dataclass(frozen=True, slots=True)
class RuleRecord:
    """One rule descriptor as shipped inside the scan-tool archive.

    ``type`` and ``default_severity`` are upper-cased at parse time because
    the platform taxonomy is case-sensitive.
    """

    key: str
    title: str
    type: str
    default_severity: str
    tags: tuple[str, ...] = ()
    status: str = ""
    remediation: Remediation | None = None
    rule_specification: str = ""
    scope: str = ""
    quickfix: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleRecord":
        return cls(
            key=str(data["sqKey"]),
            title=str(data.get("title") or ""),
            type=_upper(data.get("type")),
            default_severity=_upper(data.get("defaultSeverity")),
            tags=tuple(str(t) for t in data.get("tags") or ()),
            status=str(data.get("status") or ""),
            remediation=Remediation.from_dict(data.get("remediation")),
            rule_specification=str(data.get("ruleSpecification") or ""),
            scope=str(data.get("scope") or ""),
            quickfix=str(data.get("quickfix") or ""),
        )


@dataclass(frozen=True, slots=True)
class RuleMetadata:
    """Everything the platform needs to register one rule."""

    id: str
    name: str
    description: str
    type: str
    severity: str
    tags: tuple[str, ...] = field(default_factory=tuple)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "severity": self.severity,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleMetadata":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description") or "",
            type=data["type"],
            severity=data["severity"],
            tags=tuple(data.get("tags") or ()),
        )


class RuleCatalog(Mapping[str, RuleMetadata]):
    """Read-only rule metadata keyed by rule id, in discovery order.

    Duplicate ids collapse silently: the last rule wins but keeps the
    position of the first occurrence.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[RuleMetadata] = ()) -> None:
        self._rules: dict[str, RuleMetadata] = {}
        for rule in rules:
            self._rules[rule.id] = rule

    def __getitem__(self, rule_id: str) -> RuleMetadata:
        return self._rules[rule_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleCatalog({len(self._rules)} rules)"

    def rules(self) -> list[RuleMetadata]:
        return list(self._rules.values())

    def to_list(self) -> list[dict[str, Any]]:
        return [rule.to_dict() for rule in self._rules.values()]

    @classmethod
    def from_list(cls, data: Iterable[Mapping[str, Any]]) -> "RuleCatalog":
        return cls(RuleMetadata.from_dict(item) for item in data)
