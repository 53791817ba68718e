"""CLI entry-point for ballerina_sonar.

Usage:
    python -m ballerina_sonar rules [--json]
    python -m ballerina_sonar profile [--json]
    python -m ballerina_sonar issues <report.json> [--json]
    python -m ballerina_sonar scan <project-dir> [--json]

Global options (before the subcommand):
    --cache-path FILE     rule cache location (default ~/.sonar-ballerina/rule-cache.json)
    --registry-url URL    scan tool registry endpoint
    -v / --verbose        log progress to stderr
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ballerina_sonar import __version__
from ballerina_sonar.catalog.generator import RuleGenerator
from ballerina_sonar.core.config import Settings
from ballerina_sonar.definitions import define_quality_profile, define_rules_repository
from ballerina_sonar.errors import SonarBallerinaError
from ballerina_sonar.scanner import IssueReport, read_issue_report, run_bal_scan
from ballerina_sonar.utils.exit_codes import ExitCode
from ballerina_sonar.utils.json_norm import stable_json_dumps


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ballerina_sonar",
        description="Ballerina scan-tool rules for the code-quality platform.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--cache-path", default=None, help="Rule cache file.")
    p.add_argument("--registry-url", default=None, help="Scan tool registry endpoint.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")

    sub = p.add_subparsers(dest="command")

    rules_p = sub.add_parser("rules", help="Generate (or load) and list the rule catalog.")
    rules_p.add_argument("--json", action="store_true", help="Emit the catalog as JSON.")

    profile_p = sub.add_parser("profile", help="Show the built-in quality profile.")
    profile_p.add_argument("--json", action="store_true", help="Emit the profile as JSON.")

    issues_p = sub.add_parser("issues", help="Read a bal scan issue report.")
    issues_p.add_argument("report", help="Path to the JSON issue report.")
    issues_p.add_argument("--json", action="store_true", help="Emit issues as JSON.")

    scan_p = sub.add_parser("scan", help="Run bal scan in a project and read its report.")
    scan_p.add_argument("project", help="Ballerina project directory.")
    scan_p.add_argument("--json", action="store_true", help="Emit issues as JSON.")

    return p


def _settings_from_args(args: argparse.Namespace) -> Settings:
    cfg = Settings()
    if args.cache_path:
        cfg.CACHE_PATH = args.cache_path
    if args.registry_url:
        cfg.REGISTRY_URL = args.registry_url
    return cfg


# ── subcommand handlers ─────────────────────────────────────────────


def _handle_rules(args: argparse.Namespace, generator: RuleGenerator) -> int:
    catalog = generator.ensure_catalog()
    if args.json:
        sys.stdout.write(stable_json_dumps(catalog.to_list()))
        return ExitCode.SUCCESS
    for rule in catalog.values():
        documented = "" if rule.description else "  (undocumented)"
        print(f"{rule.id:<16} {rule.type:<14} {rule.severity:<9} {rule.name}{documented}")
    print(f"\n{len(catalog)} rules")
    return ExitCode.SUCCESS


def _handle_profile(args: argparse.Namespace, generator: RuleGenerator) -> int:
    profile = define_quality_profile(generator)
    if args.json:
        sys.stdout.write(stable_json_dumps(profile))
        return ExitCode.SUCCESS
    print(f"{profile.name} ({profile.language}): {len(profile.active_rules)} active rules")
    for active in profile.active_rules:
        print(f"  {active.repository_key}:{active.rule_key}")
    return ExitCode.SUCCESS


def _print_report(report: IssueReport, as_json: bool) -> int:
    if as_json:
        sys.stdout.write(stable_json_dumps(report))
    else:
        for issue in report.issues:
            r = issue.range
            print(
                f"{issue.file_path}:{r.start_line}:{r.start_offset}: "
                f"[{issue.repository}:{issue.rule_id}] {issue.message}"
            )
        print(f"\n{len(report.issues)} issues ({report.skipped} skipped)")
    return ExitCode.ISSUES_FOUND if report.issues else ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = ok, 1 = issues found, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    if args.command is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR

    cfg = _settings_from_args(args)

    try:
        if args.command == "rules":
            return _handle_rules(args, RuleGenerator(cfg))
        if args.command == "profile":
            return _handle_profile(args, RuleGenerator(cfg))
        if args.command == "issues":
            report_path = Path(args.report)
            if not report_path.is_file():
                print(f"error: report not found: {report_path}", file=sys.stderr)
                return ExitCode.ERROR
            return _print_report(read_issue_report(report_path), args.json)
        if args.command == "scan":
            report_path = run_bal_scan(Path(args.project), cfg)
            if report_path is None:
                print("error: bal scan failed", file=sys.stderr)
                return ExitCode.ERROR
            return _print_report(read_issue_report(report_path), args.json)
    except (SonarBallerinaError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
