"""
Filter expressions and field masks for findings queries
"""
from enum import Enum
from typing import Optional


class QueryMode(Enum):
    SINGLE_PROJECT = "single_project"
    ALL_PROJECTS = "all_projects"


# Severity levels requested per mode
SEVERITY_LEVELS = {
    QueryMode.SINGLE_PROJECT: ["FINDING_LEVEL_CRITICAL"],
    QueryMode.ALL_PROJECTS: ["FINDING_LEVEL_CRITICAL", "FINDING_LEVEL_HIGH"],
}

MIN_EPSS_PROBABILITY = 0.01

FILTER_TEMPLATE = """context.type == "CONTEXT_TYPE_MAIN" and (
    spec.level in [{levels}] and
    spec.finding_tags not contains ["FINDING_TAGS_EXCEPTION"] and
    spec.finding_categories contains ["FINDING_CATEGORY_VULNERABILITY"] and
    (spec.finding_tags contains ["FINDING_TAGS_POTENTIALLY_REACHABLE_FUNCTION","FINDING_TAGS_REACHABLE_FUNCTION"] and
    spec.finding_tags contains ["FINDING_TAGS_REACHABLE_DEPENDENCY"] and
    spec.finding_tags contains ["FINDING_TAGS_FIX_AVAILABLE"] and
    spec.finding_tags contains ["FINDING_TAGS_NORMAL"]) and
    spec.finding_metadata.vulnerability.spec.epss_score.probability_score >= {min_epss}
)"""

FIELD_MASK = [
    'meta.description',
    'meta.name',
    'meta.parent_uuid',
    'spec.approximation',
    'spec.dependency_file_paths',
    'spec.ecosystem',
    'spec.explanation',
    'spec.finding_categories',
    'spec.finding_tags',
    'spec.level',
    'spec.location_urls',
    'spec.project_uuid',
    'spec.relationship',
    'spec.summary',
    'spec.target_dependency_package_name',
]


def _single_line(text: str) -> str:
    return " ".join(text.split())


def build_filter(mode: QueryMode, project_uuid: Optional[str] = None) -> str:
    """
    Build the server-side filter for a query mode

    project_uuid is required for SINGLE_PROJECT and ignored for ALL_PROJECTS.
    """
    levels = ",".join(f'"{level}"' for level in SEVERITY_LEVELS[mode])
    base_filter = _single_line(FILTER_TEMPLATE.format(levels=levels, min_epss=MIN_EPSS_PROBABILITY))

    if mode is QueryMode.SINGLE_PROJECT:
        if not project_uuid:
            raise ValueError("project_uuid is required for a single-project query")
        return f"spec.project_uuid=={project_uuid} and {base_filter}"
    return base_filter


def field_mask() -> str:
    return ",".join(FIELD_MASK)


def describe_scope(mode: QueryMode, project_uuid: Optional[str] = None) -> str:
    """Human-readable scope, e.g. 'project abc123' or 'all projects'"""
    if mode is QueryMode.ALL_PROJECTS:
        return "all projects"
    return f"project {project_uuid}"


def output_scope(mode: QueryMode, project_uuid: Optional[str] = None) -> str:
    """Scope fragment used in report file names"""
    if mode is QueryMode.ALL_PROJECTS:
        return "all_projects"
    return project_uuid
