"""Scanner bridge — runs ``bal scan`` and reads its JSON issue report.

Report records look like::

    {"filePath": "/abs/main.bal", "source": "BUILT_IN", "ruleID": "ballerina:1",
     "ruleKind": "CODE_SMELL", "message": "...", "startLine": 3,
     "startLineOffset": 4, "endLine": 3, "endLineOffset": 20}

Built-in issues belong to the generated rule repository. External issues
come from third-party analyzers: they get an ad-hoc rule (declared once per
rule id) under a separate engine.
"""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ballerina_sonar.core.config import Settings, settings as _default_settings
from ballerina_sonar.definitions import REPOSITORY_KEY
from ballerina_sonar.model import IssueSource, RuleType, Severity

_logger = logging.getLogger(__name__)

EXTERNAL_ENGINE_ID = "ballerina_external_analyzer"
EXTERNAL_EFFORT_MINUTES = 10
# bal scan reports 0-based lines; the platform counts from 1
LINE_OFFSET = 1


@dataclass(frozen=True, slots=True)
class TextRange:
    start_line: int
    start_offset: int
    end_line: int
    end_offset: int


@dataclass(frozen=True, slots=True)
class ExternalRule:
    """Ad-hoc rule declared for an external analyzer's rule id."""

    engine_id: str
    rule_id: str
    name: str
    type: RuleType
    severity: Severity
    description: str


@dataclass(frozen=True, slots=True)
class ScanIssue:
    rule_id: str
    file_path: str
    message: str
    range: TextRange
    source: IssueSource
    repository: str
    type: RuleType | None = None
    severity: Severity | None = None
    effort_minutes: int | None = None

    @property
    def external(self) -> bool:
        return self.source is IssueSource.EXTERNAL


@dataclass
class IssueReport:
    issues: list[ScanIssue] = field(default_factory=list)
    external_rules: list[ExternalRule] = field(default_factory=list)
    skipped: int = 0


def _text_range(record: Mapping[str, Any]) -> TextRange:
    return TextRange(
        start_line=int(record["startLine"]) + LINE_OFFSET,
        start_offset=int(record["startLineOffset"]),
        end_line=int(record["endLine"]) + LINE_OFFSET,
        end_offset=int(record["endLineOffset"]),
    )


def parse_issues(records: Iterable[Mapping[str, Any]]) -> IssueReport:
    """Turn scanner report records into platform issues.

    Records with an unknown ``source`` or missing fields are logged and
    skipped; they never abort the report.
    """
    report = IssueReport()
    declared: set[str] = set()
    for record in records:
        try:
            source = IssueSource(record["source"])
            rule_id = str(record["ruleID"])
            message = str(record["message"])
            file_path = str(record["filePath"])
            text_range = _text_range(record)
        except (KeyError, TypeError, ValueError) as exc:
            _logger.info("Invalid issue format: %s", exc)
            report.skipped += 1
            continue

        if source is IssueSource.BUILT_IN:
            report.issues.append(
                ScanIssue(
                    rule_id=rule_id,
                    file_path=file_path,
                    message=message,
                    range=text_range,
                    source=source,
                    repository=REPOSITORY_KEY,
                )
            )
            continue

        rule_type = RuleType.from_kind(record.get("ruleKind"))
        if rule_id not in declared:
            declared.add(rule_id)
            report.external_rules.append(
                ExternalRule(
                    engine_id=EXTERNAL_ENGINE_ID,
                    rule_id=rule_id,
                    name=rule_id,
                    type=rule_type,
                    severity=Severity.MAJOR,
                    description=message,
                )
            )
        report.issues.append(
            ScanIssue(
                rule_id=rule_id,
                file_path=file_path,
                message=message,
                range=text_range,
                source=source,
                repository=EXTERNAL_ENGINE_ID,
                type=rule_type,
                severity=Severity.MAJOR,
                effort_minutes=EXTERNAL_EFFORT_MINUTES,
            )
        )
    return report


def read_issue_report(path: Path) -> IssueReport:
    """Read a scanner report; an unreadable or malformed file yields no issues."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _logger.info("Unable to retrieve analysis results from %s: %s", path, exc)
        return IssueReport()
    if not isinstance(data, list):
        _logger.info("Unable to report analysis results: %s is not a JSON array", path)
        return IssueReport()
    records = [item for item in data if isinstance(item, Mapping)]
    report = parse_issues(records)
    report.skipped += len(data) - len(records)
    return report


def run_bal_scan(base_dir: Path, config: Settings | None = None) -> Path | None:
    """Run the scanner in *base_dir*; return the report path on success.

    Output is inherited so users see the tool's progress. A non-zero exit
    returns None.
    """
    cfg = config or _default_settings
    if sys.platform == "win32":
        command = ["cmd", "/c", cfg.SCAN_COMMAND]
    else:
        command = shlex.split(cfg.SCAN_COMMAND)
    _logger.info("Analyzing Ballerina project in %s", base_dir)
    completed = subprocess.run(command, cwd=str(base_dir), check=False)
    if completed.returncode != 0:
        _logger.info("Unable to analyze ballerina file batch (exit code %d)", completed.returncode)
        return None
    return Path(base_dir) / cfg.ISSUES_FILE_NAME
