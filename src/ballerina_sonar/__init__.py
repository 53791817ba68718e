"""ballerina_sonar — Ballerina scan-tool rules for the code-quality platform."""

__all__ = [
    "__version__",
    "ensure_catalog",
    "RuleCatalog",
    "RuleGenerator",
    "RuleMetadata",
    "define_quality_profile",
    "define_rules_repository",
]
__version__ = "0.2.0"

from ballerina_sonar.catalog.generator import RuleGenerator, ensure_catalog  # noqa: E402
from ballerina_sonar.definitions import (  # noqa: E402
    define_quality_profile,
    define_rules_repository,
)
from ballerina_sonar.model.rule import RuleCatalog, RuleMetadata  # noqa: E402
