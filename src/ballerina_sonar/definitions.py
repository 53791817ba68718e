"""Rule repository and built-in quality profile for the host platform.

Both are derived from the generated catalog. If the catalog cannot be
produced (network down and no cache), definition fails as a whole:
there is no partial repository and no partial profile.
"""

from __future__ import annotations

from dataclasses import dataclass

from ballerina_sonar.catalog.generator import RuleGenerator, get_generator
from ballerina_sonar.errors import ProfileDefinitionError, RuleGenerationError
from ballerina_sonar.model.rule import RuleCatalog

LANGUAGE_KEY = "ballerina"
LANGUAGE_NAME = "Ballerina"
REPOSITORY_KEY = "ballerina"
REPOSITORY_NAME = "BallerinaAnalyzer"
PROFILE_NAME = "Ballerina way"


@dataclass(frozen=True, slots=True)
class RuleDefinition:
    key: str
    name: str
    html_description: str
    type: str
    severity: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RuleRepository:
    key: str
    language: str
    name: str
    rules: tuple[RuleDefinition, ...]

    def rule(self, key: str) -> RuleDefinition | None:
        return next((r for r in self.rules if r.key == key), None)


@dataclass(frozen=True, slots=True)
class ActiveRule:
    repository_key: str
    rule_key: str


@dataclass(frozen=True, slots=True)
class QualityProfile:
    name: str
    language: str
    active_rules: tuple[ActiveRule, ...]

    def is_active(self, rule_key: str, repository_key: str = REPOSITORY_KEY) -> bool:
        return ActiveRule(repository_key, rule_key) in self.active_rules


def _load_catalog(generator: RuleGenerator | None, what: str) -> RuleCatalog:
    try:
        return (generator or get_generator()).ensure_catalog()
    except RuleGenerationError as exc:
        raise ProfileDefinitionError(f"Error registering Ballerina {what}") from exc


def define_rules_repository(generator: RuleGenerator | None = None) -> RuleRepository:
    """Describe every generated rule under the ``ballerina`` repository."""
    catalog = _load_catalog(generator, "rules repository")
    return RuleRepository(
        key=REPOSITORY_KEY,
        language=LANGUAGE_KEY,
        name=REPOSITORY_NAME,
        rules=tuple(
            RuleDefinition(
                key=rule.id,
                name=rule.name,
                html_description=rule.description,
                type=rule.type,
                severity=rule.severity,
                tags=rule.tags,
            )
            for rule in catalog.values()
        ),
    )


def define_quality_profile(generator: RuleGenerator | None = None) -> QualityProfile:
    """Built-in "Ballerina way" profile activating every generated rule."""
    catalog = _load_catalog(generator, "profile")
    return QualityProfile(
        name=PROFILE_NAME,
        language=LANGUAGE_KEY,
        active_rules=tuple(ActiveRule(REPOSITORY_KEY, rule_id) for rule_id in catalog),
    )
