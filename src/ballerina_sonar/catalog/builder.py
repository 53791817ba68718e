"""Rule catalog builder — joins archive records with rendered README docs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ballerina_sonar.model.rule import RuleCatalog, RuleMetadata, RuleRecord

_logger = logging.getLogger(__name__)


def to_metadata(record: RuleRecord, description: str) -> RuleMetadata:
    return RuleMetadata(
        id=record.key,
        name=record.title,
        description=description,
        type=record.type,
        severity=record.default_severity,
        tags=record.tags,
    )


def build_catalog(
    records: Iterable[RuleRecord],
    rendered_docs: Mapping[str, str],
) -> RuleCatalog:
    """One ``RuleMetadata`` per record; a rule without docs gets ``""``.

    Duplicate keys are not an error: the later record replaces the earlier.
    """
    rules: list[RuleMetadata] = []
    seen: set[str] = set()
    for record in records:
        if record.key in seen:
            _logger.debug("Duplicate rule key %s in rule info; keeping the last one", record.key)
        seen.add(record.key)
        rules.append(to_metadata(record, rendered_docs.get(record.key) or ""))
    return RuleCatalog(rules)
