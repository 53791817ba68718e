"""Rule generator — builds the catalog once per process, with cache fallback.

Pipeline::

    registry entry ──▶ archive ──▶ rule-info.json ──┐
          │                                         ├──▶ build_catalog ──▶ RuleCatalog
          └──▶ README ──▶ rule sections ──▶ HTML ───┘

``ensure_catalog`` is the only entry point. It is single-flight: callers
are serialised on a lock, the first successful pass (or cache load) is
kept, and every later call returns that same object without network I/O.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import httpx

from ballerina_sonar.catalog.builder import build_catalog
from ballerina_sonar.catalog.cache import RuleCache
from ballerina_sonar.core.config import Settings, settings as _default_settings
from ballerina_sonar.docs.render import render_rule_docs
from ballerina_sonar.docs.section_parser import extract_rule_docs
from ballerina_sonar.errors import RuleGenerationError
from ballerina_sonar.model.rule import RuleCatalog
from ballerina_sonar.registry import build_client
from ballerina_sonar.registry.archive import extract_rule_info
from ballerina_sonar.registry.client import fetch_tool_metadata

_logger = logging.getLogger(__name__)


class RuleGenerator:
    """Owns the process-wide rule catalog and its on-disk cache."""

    def __init__(
        self,
        config: Settings | None = None,
        *,
        cache: RuleCache | None = None,
        client_factory: Callable[[], httpx.Client] | None = None,
    ) -> None:
        self.config = config or _default_settings
        self.cache = cache or RuleCache(self.config.cache_path)
        self._client_factory = client_factory or (lambda: build_client(self.config))
        self._lock = threading.Lock()
        self._catalog: RuleCatalog | None = None

    @property
    def loaded(self) -> bool:
        return self._catalog is not None

    def ensure_catalog(self) -> RuleCatalog:
        """Return the catalog, generating it (or loading the cache) on first use.

        Raises the original ``RuleGenerationError`` when generation fails and
        no usable cache exists.
        """
        with self._lock:
            if self._catalog is not None:
                return self._catalog

            try:
                catalog = self.generate()
            except RuleGenerationError as exc:
                _logger.warning("Rule generation failed (%s); trying the rule cache", exc)
                cached = self.cache.load()
                if cached is None:
                    raise
                _logger.info("Loaded %d rules from cache at %s", len(cached), self.cache.path)
                self._catalog = cached
                return cached

            self._catalog = catalog
            self.cache.save(catalog)
            return catalog

    def generate(self) -> RuleCatalog:
        """Run one full generation pass; does not touch the held catalog."""
        _logger.info("Generating Ballerina rules from %s", self.config.REGISTRY_URL)
        with self._client_factory() as client:
            tool = fetch_tool_metadata(client, self.config.REGISTRY_URL)
            records = extract_rule_info(client, tool.bala_url, self.config.RULE_INFO_PATH)
        rendered = render_rule_docs(extract_rule_docs(tool.readme))
        catalog = build_catalog(records, rendered)
        _logger.info(
            "Generated %d rules (%d documented)",
            len(catalog),
            sum(1 for rule in catalog.values() if rule.description),
        )
        return catalog


# ── process-wide instance ───────────────────────────────────────────

_default_generator: RuleGenerator | None = None
_default_lock = threading.Lock()


def get_generator() -> RuleGenerator:
    """Return the lazily created process-wide generator."""
    global _default_generator
    with _default_lock:
        if _default_generator is None:
            _default_generator = RuleGenerator()
        return _default_generator


def ensure_catalog() -> RuleCatalog:
    """Catalog of the process-wide generator; see ``RuleGenerator.ensure_catalog``."""
    return get_generator().ensure_catalog()
