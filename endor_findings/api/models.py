from dataclasses import dataclass, field, asdict, fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from endor_findings.errors import ProtocolError


def _as_dict(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProtocolError(f"expected {what} to be an object, got {type(value).__name__}")
    return value


def _as_tuple(value: Any, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ProtocolError(f"expected {what} to be an array, got {type(value).__name__}")
    return tuple(value)


def _as_str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ProtocolError(f"expected {what} to be a string, got {type(value).__name__}")
    return value


def _as_bool(value: Any, what: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ProtocolError(f"expected {what} to be a boolean, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class FindingMeta:
    name: str = ""
    description: str = ""
    parent_uuid: str = ""


@dataclass(frozen=True)
class FindingSpec:
    """Classification, location and linkage fields of a finding"""
    level: str = ""
    ecosystem: str = ""
    finding_categories: Tuple[str, ...] = ()
    finding_tags: Tuple[str, ...] = ()
    relationship: str = ""
    explanation: str = ""
    summary: str = ""
    approximation: bool = False
    dependency_file_paths: Tuple[str, ...] = ()
    location_urls: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    project_uuid: str = ""
    target_dependency_package_name: str = ""

    def __post_init__(self):
        # read-only view over a private copy
        object.__setattr__(self, 'location_urls', MappingProxyType(dict(self.location_urls)))

    def __hash__(self):
        values = (getattr(self, f.name) for f in fields(self))
        return hash(tuple(
            tuple(sorted(value.items())) if isinstance(value, Mapping) else value
            for value in values
        ))

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for key in ('finding_categories', 'finding_tags', 'dependency_file_paths'):
            data[key] = list(data[key])
        data['location_urls'] = dict(self.location_urls)
        return data


@dataclass(frozen=True)
class Finding:
    """One security finding as returned by the findings endpoint"""
    uuid: str
    meta: FindingMeta = field(default_factory=FindingMeta)
    spec: FindingSpec = field(default_factory=FindingSpec)

    @classmethod
    def from_dict(cls, data: Any) -> "Finding":
        data = _as_dict(data, "finding")
        meta = _as_dict(data.get('meta'), "finding meta")
        spec = _as_dict(data.get('spec'), "finding spec")

        location_urls = _as_dict(spec.get('location_urls'), "spec.location_urls")
        for path, url in location_urls.items():
            _as_str(url, f"spec.location_urls[{path!r}]")

        return cls(
            uuid=_as_str(data.get('uuid'), "uuid"),
            meta=FindingMeta(
                name=_as_str(meta.get('name'), "meta.name"),
                description=_as_str(meta.get('description'), "meta.description"),
                parent_uuid=_as_str(meta.get('parent_uuid'), "meta.parent_uuid"),
            ),
            spec=FindingSpec(
                level=_as_str(spec.get('level'), "spec.level"),
                ecosystem=_as_str(spec.get('ecosystem'), "spec.ecosystem"),
                finding_categories=_as_tuple(spec.get('finding_categories'), "spec.finding_categories"),
                finding_tags=_as_tuple(spec.get('finding_tags'), "spec.finding_tags"),
                relationship=_as_str(spec.get('relationship'), "spec.relationship"),
                explanation=_as_str(spec.get('explanation'), "spec.explanation"),
                summary=_as_str(spec.get('summary'), "spec.summary"),
                approximation=_as_bool(spec.get('approximation'), "spec.approximation"),
                dependency_file_paths=_as_tuple(spec.get('dependency_file_paths'), "spec.dependency_file_paths"),
                location_urls=location_urls,
                project_uuid=_as_str(spec.get('project_uuid'), "spec.project_uuid"),
                target_dependency_package_name=_as_str(
                    spec.get('target_dependency_package_name'), "spec.target_dependency_package_name"
                ),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'uuid': self.uuid,
            'meta': asdict(self.meta),
            'spec': self.spec.to_dict(),
        }


@dataclass(frozen=True)
class FindingsPage:
    """
    One decoded page of the findings list response

    next_page_token is the legacy numeric cursor; pagination only uses next_page_id.
    """
    findings: List[Finding]
    next_page_id: str = ""
    next_page_token: int = 0

    @property
    def has_more(self) -> bool:
        return self.next_page_id != ""

    @classmethod
    def from_response(cls, data: Any) -> "FindingsPage":
        if not isinstance(data, dict):
            raise ProtocolError(f"expected response body to be an object, got {type(data).__name__}")
        listing = _as_dict(data.get('list'), "list")
        response = _as_dict(listing.get('response'), "list.response")

        objects = listing.get('objects') or []
        if not isinstance(objects, list):
            raise ProtocolError(f"expected list.objects to be an array, got {type(objects).__name__}")

        try:
            next_page_token = int(response.get('next_page_token') or 0)
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"invalid next_page_token: {response.get('next_page_token')!r}") from e

        return cls(
            findings=[Finding.from_dict(obj) for obj in objects],
            next_page_id=str(response.get('next_page_id') or ""),
            next_page_token=next_page_token,
        )
