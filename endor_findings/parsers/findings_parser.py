import json
from typing import Dict, List, Any, Optional

import pandas as pd

from endor_findings.api.models import Finding
from endor_findings.errors import ProtocolError


class FindingsReportParser:
    """Parser for saved findings reports"""

    # Short labels for the API's severity enum
    LEVEL_LABELS = {
        'FINDING_LEVEL_CRITICAL': 'critical',
        'FINDING_LEVEL_HIGH': 'high',
        'FINDING_LEVEL_MEDIUM': 'medium',
        'FINDING_LEVEL_LOW': 'low',
    }

    def __init__(self, report_file: Optional[str]):
        """Initialize parser with report file path"""
        self.report_file = report_file
        self.raw_data = None
        self.findings: List[Finding] = []
        self._parsed = False
        self._frame: Optional[pd.DataFrame] = None

    @classmethod
    def from_findings(cls, findings: List[Finding], search_description: str = "") -> "FindingsReportParser":
        """Wrap findings that are already in memory"""
        parser = cls(report_file=None)
        parser.raw_data = {'search_description': search_description, 'total_findings': len(findings)}
        parser.findings = list(findings)
        parser._parsed = True
        return parser

    def load(self):
        """Load report from JSON file"""
        with open(self.report_file, 'r', encoding='utf-8') as f:
            self.raw_data = json.load(f)
        if not isinstance(self.raw_data, dict):
            raise ProtocolError(f"{self.report_file} is not a findings report")
        print(f"Loaded {len(self.raw_data.get('findings', []))} findings from {self.report_file}")

    def parse(self) -> List[Finding]:
        """Decode findings in file order"""
        if self.raw_data is None:
            self.load()

        self.findings = [Finding.from_dict(item) for item in self.raw_data.get('findings', [])]
        self._parsed = True
        self._frame = None
        return self.findings

    @property
    def search_description(self) -> str:
        if self.raw_data is None:
            self.load()
        return self.raw_data.get('search_description', '')

    def normalize_level(self, level: str) -> str:
        return self.LEVEL_LABELS.get(level, level.lower() or 'unknown')

    def to_dataframe(self) -> pd.DataFrame:
        """One row per finding with the columns used for summaries, built once"""
        if not self._parsed:
            self.parse()
        if self._frame is not None:
            return self._frame

        rows = [
            {
                'uuid': f.uuid,
                'name': f.meta.name,
                'level': self.normalize_level(f.spec.level),
                'ecosystem': f.spec.ecosystem or 'unknown',
                'project_uuid': f.spec.project_uuid or 'unknown',
                'package': f.spec.target_dependency_package_name,
            }
            for f in self.findings
        ]
        self._frame = pd.DataFrame(rows, columns=['uuid', 'name', 'level', 'ecosystem', 'project_uuid', 'package'])
        return self._frame

    def _distribution(self, column: str) -> Dict[str, int]:
        df = self.to_dataframe()
        if df.empty:
            return {}
        counts = df[column].value_counts()
        return {str(k): int(v) for k, v in counts.items()}

    def get_severity_distribution(self) -> Dict[str, int]:
        return self._distribution('level')

    def get_ecosystem_distribution(self) -> Dict[str, int]:
        return self._distribution('ecosystem')

    def get_project_distribution(self) -> Dict[str, int]:
        return self._distribution('project_uuid')

    def get_statistics(self) -> Dict[str, Any]:
        """Get summary statistics about the report"""
        if not self._parsed:
            self.parse()

        return {
            'total_findings': len(self.findings),
            'reported_total': self.raw_data.get('total_findings', len(self.findings)),
            'severity_distribution': self.get_severity_distribution(),
            'ecosystem_distribution': self.get_ecosystem_distribution(),
            'project_distribution': self.get_project_distribution(),
            'unique_packages': len({f.spec.target_dependency_package_name for f in self.findings
                                    if f.spec.target_dependency_package_name}),
        }


def print_distribution(title: str, counts: Dict[str, int]):
    print(f"\n---{title}---")
    if not counts:
        print("  (none)")
    for key, count in counts.items():
        print(f"  {key}: {count}")
