"""Shared fixtures: a fake Ballerina Central served through httpx.MockTransport."""

from __future__ import annotations

import io
import json
import zipfile
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from ballerina_sonar.catalog.cache import RuleCache
from ballerina_sonar.catalog.generator import RuleGenerator
from ballerina_sonar.core.config import Settings

REGISTRY_URL = "https://central.test/2.0/registry/tools/scan/"
BALA_URL = "https://cdn.test/scan-tool.bala"

SAMPLE_README = """\
# Ballerina scan tool

Static analysis for Ballerina.

## Usage

### NotARule - should be ignored

Run `bal scan`.

## Rules

### ballerina:1 - Avoid checkpanic

Using `checkpanic` aborts the program on error.

#### Noncompliant

```ballerina
int x = checkpanic foo();
```

> Prefer `check` instead.

### ballerina:2 - Unused function parameter

Remove parameters that are never read.

## Contributing

### ballerina:3 - Not documented here

This prose is outside the rules section.
"""

SAMPLE_RULE_INFO = [
    {
        "title": "Avoid checkpanic",
        "type": "code_smell",
        "status": "ready",
        "remediation": {"func": "Constant/Issue", "constantCost": "5min"},
        "tags": ["error-handling"],
        "defaultSeverity": "major",
        "ruleSpecification": "RSPEC-1",
        "sqKey": "ballerina:1",
        "scope": "Main",
        "quickfix": "unknown",
    },
    {
        "title": "Unused function parameter",
        "type": "Code_Smell",
        "tags": ["unused", "convention"],
        "defaultSeverity": "Minor",
        "sqKey": "ballerina:2",
    },
    {
        "title": "Self assignment",
        "type": "bug",
        "tags": [],
        "defaultSeverity": "critical",
        "sqKey": "ballerina:3",
    },
]


def make_archive(entries: dict[str, bytes | str]) -> bytes:
    """Build a zip archive in memory, entries written in dict order."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def tool_archive(rule_info=None, *, extra_after: bool = True) -> bytes:
    entries: dict[str, bytes | str] = {
        "bala.json": json.dumps({"bala_version": "2.0.0"}),
        "modules/scan/main.bal": "public function main() {}\n" * 50,
        "resources/": "",
        "resources/rule-info.json": json.dumps(
            SAMPLE_RULE_INFO if rule_info is None else rule_info
        ),
    }
    if extra_after:
        entries["docs/Package.md"] = "# scan\n"
    return make_archive(entries)


class FakeCentral:
    """Records requests and answers like Ballerina Central."""

    def __init__(
        self,
        *,
        readme: str = SAMPLE_README,
        archive: bytes | None = None,
        registry_status: int = 200,
        archive_status: int = 200,
        bala_url: str = BALA_URL,
    ) -> None:
        self.readme = readme
        self.bala_url = bala_url
        self.archive = tool_archive() if archive is None else archive
        self.registry_status = registry_status
        self.archive_status = archive_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == REGISTRY_URL:
            if self.registry_status != 200:
                return httpx.Response(self.registry_status, json={"message": "unavailable"})
            return httpx.Response(200, json={"readme": self.readme, "balaURL": self.bala_url})
        if url == BALA_URL:
            return httpx.Response(self.archive_status, content=self.archive)
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


def failing_client_factory(exc: Exception) -> Callable[[], httpx.Client]:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return lambda: httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def central() -> FakeCentral:
    return FakeCentral()


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".sonar-ballerina" / "rule-cache.json"


@pytest.fixture
def settings(cache_path: Path) -> Settings:
    cfg = Settings()
    cfg.REGISTRY_URL = REGISTRY_URL
    cfg.CACHE_PATH = str(cache_path)
    return cfg


@pytest.fixture
def make_generator(settings: Settings):
    def _make(client_factory: Callable[[], httpx.Client]) -> RuleGenerator:
        return RuleGenerator(
            settings,
            cache=RuleCache(settings.cache_path),
            client_factory=client_factory,
        )

    return _make
