"""Rule catalog: building, caching and once-per-process generation."""

from ballerina_sonar.catalog.builder import build_catalog
from ballerina_sonar.catalog.cache import RuleCache
from ballerina_sonar.catalog.generator import RuleGenerator, ensure_catalog, get_generator

__all__ = ["RuleCache", "RuleGenerator", "build_catalog", "ensure_catalog", "get_generator"]
