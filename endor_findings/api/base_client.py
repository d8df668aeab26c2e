"""
Base client class for findings APIs
Holds the pagination loop so concrete clients only implement a single page fetch
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from endor_findings.api.models import Finding
from endor_findings.api.query import QueryMode, build_filter, field_mask

PAGE_SIZE = 100
MAX_PAGES = 100


class BaseClient(ABC):
    """Abstract base class for paginated findings clients"""

    @abstractmethod
    def get_token(self) -> str:
        """Authenticate and return a bearer token"""
        pass

    @abstractmethod
    def fetch_page(
        self,
        token: str,
        query_filter: str,
        mask: str,
        page_size: int,
        cursor: str = ""
    ) -> Tuple[List[Finding], str, bool]:
        """
        Fetch one page of findings

        Returns:
            (findings, next_cursor, has_more)
        """
        pass

    def fetch_all(
        self,
        token: str,
        query_filter: str,
        mask: Optional[str] = None,
        page_size: int = PAGE_SIZE,
        max_pages: int = MAX_PAGES
    ) -> List[Finding]:
        """
        Follow the server cursor until it comes back empty or max_pages fetches were made

        Any fetch error propagates and the findings gathered so far are dropped.
        Reaching max_pages is a normal stop and returns what was collected.
        """
        if mask is None:
            mask = field_mask()

        all_findings: List[Finding] = []
        page_count = 0
        cursor = ""

        while True:
            # has_more is redundant with the cursor and the two can disagree
            findings, cursor, _ = self.fetch_page(token, query_filter, mask, page_size, cursor)
            page_count += 1

            print(f"Page {page_count}: Found {len(findings)} findings")
            all_findings.extend(findings)

            if not cursor:
                print(f"No more pages to fetch. Total pages: {page_count}")
                break

            print(f"Next Page ID: {cursor}")

            if page_count >= max_pages:
                print(f"Safety limit reached: {page_count} pages. Stopping pagination.")
                break

        return all_findings

    def get_findings(self, token: str, project_uuid: str) -> List[Finding]:
        """Critical findings for a single project"""
        return self.fetch_all(token, build_filter(QueryMode.SINGLE_PROJECT, project_uuid))

    def get_findings_for_all_projects(self, token: str) -> List[Finding]:
        """Critical and high findings across every project in the namespace"""
        return self.fetch_all(token, build_filter(QueryMode.ALL_PROJECTS))

    def get_findings_for_mode(self, token: str, mode: QueryMode, project_uuid: Optional[str] = None) -> List[Finding]:
        if mode is QueryMode.ALL_PROJECTS:
            return self.get_findings_for_all_projects(token)
        return self.get_findings(token, project_uuid)
