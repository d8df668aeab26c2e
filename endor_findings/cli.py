#!/usr/bin/env python3
"""
Fetch critical reachable findings from Endor Labs and save them to a JSON report

Usage:
    endor-findings --project_uuid <project_uuid>
    endor-findings --all-projects
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from endor_findings.api.base_client import BaseClient
from endor_findings.api.endor_client import EndorClient
from endor_findings.api.query import QueryMode, describe_scope
from endor_findings.config import load_config
from endor_findings.errors import ConfigError, FindingsAPIError
from endor_findings.parsers.findings_parser import FindingsReportParser, print_distribution
from endor_findings.reports import print_findings, report_filename, save_findings_to_json

USAGE = """Usage:
  For specific project: endor-findings --project_uuid <project_uuid>
  For all projects: endor-findings --all-projects
Example:
  endor-findings --project_uuid abc123-def456-ghi789
  endor-findings --all-projects"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="endor-findings",
        description="Fetch findings from the Endor Labs API",
        epilog="Credentials are read from ENDOR_API_KEY, ENDOR_API_SECRET and ENDOR_API_NAMESPACE (or a .env file).",
    )
    scope = parser.add_mutually_exclusive_group()
    scope.add_argument("--project_uuid", "--project-uuid", dest="project_uuid", default="",
                       help="The UUID of the project to fetch findings for")
    scope.add_argument("--all-projects", action="store_true",
                       help="Fetch findings for all projects in the namespace")
    parser.add_argument("--output-dir", default=".",
                        help="Directory the JSON report is written to (default: current directory)")
    return parser


def main(argv: Optional[List[str]] = None, client: Optional[BaseClient] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.all_projects and not args.project_uuid:
        print(USAGE)
        return 1

    mode = QueryMode.ALL_PROJECTS if args.all_projects else QueryMode.SINGLE_PROJECT
    project_uuid = None if args.all_projects else args.project_uuid
    search_description = describe_scope(mode, project_uuid)

    if client is None:
        try:
            client = EndorClient(load_config())
        except ConfigError as e:
            print(f"Error: {e}")
            return 1

    try:
        token = client.get_token()
    except FindingsAPIError as e:
        print(f"Error: Failed to get authentication token: {e}")
        return 1
    print("Successfully authenticated with Endor Labs API")

    if mode is QueryMode.ALL_PROJECTS:
        print("Fetching findings for ALL projects...")
    else:
        print(f"Fetching findings for project: {project_uuid}")

    try:
        findings = client.get_findings_for_mode(token, mode, project_uuid)
    except FindingsAPIError as e:
        print(f"Error: Failed to fetch findings: {e}")
        return 1

    print()
    print_findings(findings, search_description)

    stats = FindingsReportParser.from_findings(findings, search_description).get_statistics()
    print_distribution("Severity Distribution", stats['severity_distribution'])
    print_distribution("Ecosystem Distribution", stats['ecosystem_distribution'])
    print()

    output_file = Path(args.output_dir) / report_filename(mode, project_uuid)
    try:
        save_findings_to_json(findings, output_file, search_description)
    except OSError as e:
        print(f"Warning: Failed to save findings to JSON file: {e}")
    else:
        print("Findings saved to JSON file successfully!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
