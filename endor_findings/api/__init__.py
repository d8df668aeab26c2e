from .base_client import BaseClient, PAGE_SIZE, MAX_PAGES
from .endor_client import EndorClient
from .models import Finding, FindingMeta, FindingSpec, FindingsPage
from .query import QueryMode, build_filter, field_mask

__all__ = ["BaseClient", "EndorClient", "PAGE_SIZE", "MAX_PAGES",
           "Finding", "FindingMeta", "FindingSpec", "FindingsPage",
           "QueryMode", "build_filter", "field_mask"]
