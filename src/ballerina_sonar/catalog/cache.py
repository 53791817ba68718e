"""On-disk snapshot of the rule catalog, used when generation fails."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import jsonschema

from ballerina_sonar.contracts.load import RULE_CACHE_SCHEMA, validate_instance
from ballerina_sonar.errors import CacheError
from ballerina_sonar.model.rule import RuleCatalog
from ballerina_sonar.utils.json_norm import write_json_atomic

_logger = logging.getLogger(__name__)


class RuleCache:
    """Pretty-printed JSON array of rule metadata at a fixed path.

    Writing is best-effort; reading distinguishes "no usable cache"
    (``None``) from a valid but empty catalog.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def save(self, catalog: RuleCatalog) -> bool:
        """Persist *catalog*; log and return False on any filesystem error."""
        try:
            self.write(catalog)
        except CacheError as exc:
            _logger.warning(
                "%s. The rules will not be cached for future use.", exc
            )
            return False
        _logger.info("Cached %d rules at %s", len(catalog), self.path)
        return True

    def write(self, catalog: RuleCatalog) -> None:
        """Persist *catalog*, raising ``CacheError`` on failure."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheError(
                f"Failed to create the rule cache directory at {self.path.parent}: {exc}"
            ) from exc
        try:
            write_json_atomic(self.path, catalog.to_list())
        except OSError as exc:
            raise CacheError(f"Failed to save rules into cache at {self.path}: {exc}") from exc

    def load(self) -> RuleCatalog | None:
        """Return the cached catalog, or None if it is missing or unusable."""
        try:
            return self.read()
        except CacheError as exc:
            _logger.error("%s. Unable to load rules from cache.", exc)
            return None

    def read(self) -> RuleCatalog:
        """Read and validate the cache file, raising ``CacheError`` if unusable."""
        if not self.path.is_file():
            raise CacheError(f"Rule cache file does not exist at {self.path}")
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CacheError(f"Failed to read rule cache file at {self.path}: {exc}") from exc
        try:
            validate_instance(data, RULE_CACHE_SCHEMA)
        except jsonschema.ValidationError as exc:
            raise CacheError(
                f"Rule cache file at {self.path} is malformed: {exc.message}"
            ) from exc
        return RuleCatalog.from_list(data)
