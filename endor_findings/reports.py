"""
Report output: timestamped JSON file and console summary
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from endor_findings.api.models import Finding
from endor_findings.api.query import QueryMode, output_scope

FILENAME_TIME_FORMAT = "%Y-%m-%d_%H-%M-%S"


def report_filename(mode: QueryMode, project_uuid: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """findings_<scope>_<timestamp>.json"""
    now = now or datetime.now()
    return f"findings_{output_scope(mode, project_uuid)}_{now.strftime(FILENAME_TIME_FORMAT)}.json"


def build_report(findings: List[Finding], search_description: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now().astimezone()
    return {
        'timestamp': now.isoformat(timespec='seconds'),
        'search_description': search_description,
        'total_findings': len(findings),
        'findings': [finding.to_dict() for finding in findings],
    }


def save_findings_to_json(
    findings: List[Finding],
    filename: Union[str, Path],
    search_description: str,
    now: Optional[datetime] = None
) -> Path:
    """Write the findings report and return its path"""
    output_file = Path(filename)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    report = build_report(findings, search_description, now=now)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2)

    print(f"Findings saved to: {output_file}")
    return output_file


def print_findings(findings: List[Finding], search_description: str):
    """Print one block per finding"""
    print(f"Found {len(findings)} findings for {search_description}:\n")

    for i, finding in enumerate(findings, 1):
        spec = finding.spec
        level = spec.level.replace("FINDING_LEVEL_", "") or "UNKNOWN"
        print(f"{i:>4}. [{level}] {finding.meta.name or finding.uuid}")
        print(f"      UUID:       {finding.uuid}")
        if spec.target_dependency_package_name:
            print(f"      Package:    {spec.target_dependency_package_name} ({spec.ecosystem or 'unknown'})")
        if spec.project_uuid:
            print(f"      Project:    {spec.project_uuid}")
        if spec.relationship:
            print(f"      Dependency: {spec.relationship}")
        if spec.summary:
            print(f"      Summary:    {spec.summary}")
        for path, url in spec.location_urls.items():
            print(f"      Location:   {path} -> {url}")
        print()
