import requests
from typing import List, Optional, Tuple

from endor_findings.api.base_client import BaseClient
from endor_findings.api.models import Finding, FindingsPage
from endor_findings.config import Config
from endor_findings.errors import (
    AuthenticationError,
    ProtocolError,
    RequestBuildError,
    TransportError,
)

# Server-side timeout hints, in seconds
AUTH_REQUEST_TIMEOUT = "60"
FINDINGS_REQUEST_TIMEOUT = "600"

_BUILD_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
)


class EndorClient(BaseClient):
    """
    Endor Labs findings API client

    Requirements:
    - API key and secret (ENDOR_API_KEY / ENDOR_API_SECRET)
    - Namespace the findings live under (ENDOR_API_NAMESPACE)
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def findings_url(self) -> str:
        return f"{self.config.base_url}/namespaces/{self.config.namespace}/findings"

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.config.timeout, **kwargs)
        except _BUILD_ERRORS as e:
            raise RequestBuildError(f"failed to create request: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"failed to send request: {e}") from e

    def get_token(self) -> str:
        """Exchange the API key and secret for a bearer token"""
        payload = {
            "key": self.config.api_key,
            "secret": self.config.api_secret,
        }
        headers = {
            "Content-Type": "application/json",
            "Request-Timeout": AUTH_REQUEST_TIMEOUT,
        }

        res = self._send("POST", f"{self.config.base_url}/auth/api-key", json=payload, headers=headers)

        if res.status_code != 200:
            raise AuthenticationError(
                f"authentication failed with status: {res.status_code}",
                status_code=res.status_code
            )

        try:
            data = res.json()
        except ValueError as e:
            raise AuthenticationError(f"failed to decode response: {e}", status_code=res.status_code) from e

        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise AuthenticationError("no token received in response", status_code=res.status_code)

        return token

    def fetch_page(
        self,
        token: str,
        query_filter: str,
        mask: str,
        page_size: int,
        cursor: str = ""
    ) -> Tuple[List[Finding], str, bool]:
        params = {
            "list_parameters.filter": query_filter,
            "list_parameters.mask": mask,
            "list_parameters.page_size": str(page_size),
            # Also search child namespaces
            "list_parameters.traverse": "true",
        }
        if cursor:
            params["list_parameters.page_id"] = cursor

        headers = {
            "Authorization": f"Bearer {token}",
            "Request-Timeout": FINDINGS_REQUEST_TIMEOUT,
        }

        res = self._send("GET", self.findings_url, params=params, headers=headers)

        if res.status_code != 200:
            raise ProtocolError(
                f"failed to fetch findings with status: {res.status_code}",
                status_code=res.status_code
            )

        try:
            data = res.json()
        except ValueError as e:
            raise ProtocolError(f"failed to decode response: {e}", status_code=res.status_code) from e

        page = FindingsPage.from_response(data)
        return page.findings, page.next_page_id, page.has_more
