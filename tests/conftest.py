"""Shared fixtures: sample findings, fake HTTP responses and a scripted client."""

from typing import Any, Dict, List, Optional, Tuple
from unittest import mock

import pytest

from endor_findings.api.base_client import BaseClient
from endor_findings.api.models import Finding
from endor_findings.config import Config


def finding_dict(uuid: str, level: str = "FINDING_LEVEL_CRITICAL", **spec: Any) -> Dict[str, Any]:
    data = {
        "uuid": uuid,
        "meta": {
            "name": f"finding {uuid}",
            "description": f"description of {uuid}",
            "parent_uuid": "parent-1",
        },
        "spec": {
            "level": level,
            "ecosystem": "ECOSYSTEM_NPM",
            "finding_categories": ["FINDING_CATEGORY_VULNERABILITY"],
            "finding_tags": ["FINDING_TAGS_REACHABLE_FUNCTION", "FINDING_TAGS_NORMAL"],
            "relationship": "FINDING_RELATIONSHIP_DIRECT",
            "explanation": "explanation",
            "summary": f"summary of {uuid}",
            "approximation": False,
            "dependency_file_paths": ["package.json"],
            "location_urls": {"package.json": "https://example.com/package.json"},
            "project_uuid": "P1",
            "target_dependency_package_name": "npm://lodash@4.17.15",
        },
    }
    data["spec"].update(spec)
    return data


def page_body(uuids: List[str], next_page_id: str = "", next_page_token: int = 0) -> Dict[str, Any]:
    return {
        "list": {
            "objects": [finding_dict(u) for u in uuids],
            "response": {"next_page_id": next_page_id, "next_page_token": next_page_token},
        }
    }


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


def make_session(*responses) -> mock.Mock:
    """Session stub whose request() returns (or raises) the given items in order"""
    session = mock.Mock()
    session.request.side_effect = list(responses)
    return session


class ScriptedClient(BaseClient):
    """
    Replays pages in order and records every fetch_page call

    A page is (findings, cursor), (findings, cursor, has_more) or an exception to raise.
    """

    def __init__(self, pages: List[Any], token: str = "test-token"):
        self.pages = list(pages)
        self.token = token
        self.calls: List[Dict[str, Any]] = []

    def get_token(self) -> str:
        return self.token

    def fetch_page(self, token, query_filter, mask, page_size, cursor="") -> Tuple[List[Finding], str, bool]:
        self.calls.append({
            "token": token,
            "filter": query_filter,
            "mask": mask,
            "page_size": page_size,
            "cursor": cursor,
        })
        page = self.pages[len(self.calls) - 1]
        if isinstance(page, Exception):
            raise page
        if len(page) == 3:
            return page
        findings, next_cursor = page
        return findings, next_cursor, next_cursor != ""


def make_findings(*uuids: str) -> List[Finding]:
    return [Finding.from_dict(finding_dict(u)) for u in uuids]


@pytest.fixture
def config() -> Config:
    return Config(
        api_key="key-123",
        api_secret="secret-456",
        namespace="acme",
        base_url="https://api.example.test/v1",
        timeout=5.0,
    )


@pytest.fixture
def sample_findings() -> List[Finding]:
    return make_findings("f-1", "f-2", "f-3")
