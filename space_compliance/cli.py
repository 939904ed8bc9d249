#!/usr/bin/env python3
"""
SpaceCompliance CLI

Command-line interface for compliance assessment.

Usage:
    python -m space_compliance.cli assess <profile.json> <statuses.json> [--catalog <catalog.json>]
    python -m space_compliance.cli checklist <profile.json> <statuses.json>
    python -m space_compliance.cli licenses <profile.json> [<statuses.json>]
    python -m space_compliance.cli demo
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .catalog import load_catalog, read_json
from .config import EngineConfig
from .engine import ComplianceEngine
from .errors import ComplianceEngineError, ValidationError
from .reports import ReportGenerator


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="space_compliance",
        description="SpaceCompliance - Score space operators against regulatory requirements",
        epilog=(
            "DISCLAIMER: This tool provides analysis for informational purposes only. "
            "It does not constitute legal advice."
        )
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    # Shared options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--catalog", "-c",
        type=str,
        help="Path to a requirement catalog (default: bundled UK sample)"
    )
    common.add_argument(
        "--config",
        type=str,
        help="Path to an engine config JSON file"
    )
    common.add_argument(
        "--output", "-o",
        type=str,
        help="Output file path (default: stdout)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Assess command
    assess_parser = subparsers.add_parser(
        "assess",
        parents=[common],
        help="Run a full compliance assessment"
    )
    assess_parser.add_argument("profile", type=str, help="Path to the operator profile JSON")
    assess_parser.add_argument("statuses", type=str, help="Path to the assessment statuses JSON")
    assess_parser.add_argument(
        "--format", "-f",
        choices=["json", "markdown", "text"],
        default="text",
        help="Output format"
    )

    # Checklist command
    checklist_parser = subparsers.add_parser(
        "checklist",
        parents=[common],
        help="Generate the documentation checklist"
    )
    checklist_parser.add_argument("profile", type=str, help="Path to the operator profile JSON")
    checklist_parser.add_argument("statuses", type=str, help="Path to the assessment statuses JSON")

    # Licenses command
    licenses_parser = subparsers.add_parser(
        "licenses",
        parents=[common],
        help="Show required licences and per-licence scores"
    )
    licenses_parser.add_argument("profile", type=str, help="Path to the operator profile JSON")
    licenses_parser.add_argument(
        "statuses",
        type=str,
        nargs="?",
        help="Path to the assessment statuses JSON"
    )

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run a demo assessment with a synthetic launch operator"
    )
    demo_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output file path"
    )

    return parser


def build_engine(catalog_path: Optional[str], config_path: Optional[str]) -> ComplianceEngine:
    """Create an engine from optional catalog and config files."""
    return ComplianceEngine(load_catalog(catalog_path), EngineConfig.from_file(config_path))


def load_statuses(path: Optional[str]) -> dict:
    """
    Load statuses from JSON.

    Accepts either {"requirement_id": "status", ...} or a list of
    {"requirement_id": ..., "status": ...} objects.
    """
    if path is None:
        return {}
    data = read_json(path)
    if isinstance(data, list):
        try:
            return {entry["requirement_id"]: entry["status"] for entry in data}
        except (KeyError, TypeError):
            raise ValidationError("Status entries need requirement_id and status") from None
    if not isinstance(data, dict):
        raise ValidationError("Statuses must be an object or a list")
    return data


def assess(args) -> int:
    """Run a full assessment."""
    engine = build_engine(args.catalog, args.config)
    result = engine.perform_assessment(read_json(args.profile), load_statuses(args.statuses))

    reporter = ReportGenerator()
    if args.format == "json":
        output = result.to_json()
    elif args.format == "markdown":
        summary = engine.compliance_summary(result.profile, result.statuses)
        output = reporter.generate_markdown_report(result, summary)
    else:
        output = reporter.generate_text_report(result)

    write_output(output, args.output)
    return 0


def checklist(args) -> int:
    """Print the documentation checklist."""
    engine = build_engine(args.catalog, args.config)
    items = engine.generate_documentation_checklist(
        read_json(args.profile),
        load_statuses(args.statuses)
    )
    write_output(json.dumps([i.to_dict() for i in items], indent=2), args.output)
    return 0


def licenses(args) -> int:
    """Print required licences with their scores."""
    engine = build_engine(args.catalog, args.config)
    summaries = engine.license_summaries(read_json(args.profile), load_statuses(args.statuses))
    write_output(json.dumps([s.to_dict() for s in summaries], indent=2), args.output)
    return 0


def run_demo(args) -> int:
    """Run a demo with a synthetic UK launch operator."""
    print("Running SpaceCompliance Demo")
    print("=" * 50)

    profile = {
        "operator_type": "launch_operator",
        "activity_types": ["launch"],
        "launch_from_uk": True,
        "launch_to_orbit": True,
    }
    statuses = {
        "uk-sia-s3-licence": "partial",
        "uk-sir-reg9-safety-case": "compliant",
        "uk-sia-s38-insurance": "non_compliant",
        "uk-sir-reg31-debris-mitigation": "partial",
        "uk-sia-s61-registration": "compliant",
        "uk-caa-public-engagement": "not_applicable",
    }

    engine = ComplianceEngine(load_catalog())
    result = engine.perform_assessment(profile, statuses)

    print(ReportGenerator().generate_text_report(result))

    print("\n⚠️  DISCLAIMER")
    print("-" * 50)
    print("This demo uses a sample catalog for illustration purposes.")
    print("This tool does not provide legal advice.")

    if args.output:
        Path(args.output).write_text(result.to_json(), encoding='utf-8')
        print(f"\nDemo results saved to: {args.output}")

    return 0


def write_output(output: str, path: Optional[str]) -> None:
    if path:
        Path(path).write_text(output, encoding='utf-8')
        print(f"Results written to: {path}")
    else:
        print(output)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "assess":
            return assess(args)
        elif args.command == "checklist":
            return checklist(args)
        elif args.command == "licenses":
            return licenses(args)
        elif args.command == "demo":
            return run_demo(args)
        else:
            parser.print_help()
            return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ComplianceEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
