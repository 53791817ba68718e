"""Exception taxonomy for rule generation, caching and profile definition."""

from __future__ import annotations


class SonarBallerinaError(Exception):
    """Root of every error raised by ``ballerina_sonar``."""


class RuleGenerationError(SonarBallerinaError):
    """A generation pass failed; the cache fallback applies."""


class RegistryError(RuleGenerationError):
    """The tool registry was unreachable or answered with something unusable."""


class ArchiveError(RuleGenerationError):
    """The tool archive could not be downloaded, read, or lacked rule info."""


class CacheError(SonarBallerinaError, OSError):
    """Reading or writing the on-disk rule cache failed."""


class ProfileDefinitionError(SonarBallerinaError, RuntimeError):
    """Registering the rule repository or quality profile failed.

    Always chained (``__cause__``) to the catalog error that triggered it.
    """
