"""
Exceptions raised by the findings client
"""
from typing import Optional


class FindingsAPIError(Exception):
    """Base class for every failure the client reports"""


class ConfigError(FindingsAPIError):
    """Missing or invalid configuration, raised before any network call"""


class AuthenticationError(FindingsAPIError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RequestBuildError(FindingsAPIError):
    """The HTTP request could not be constructed"""


class TransportError(FindingsAPIError):
    """Connection, DNS or timeout failure while talking to the API"""


class ProtocolError(FindingsAPIError):
    """Unexpected status code or a response body that cannot be decoded"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
