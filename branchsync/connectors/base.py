"""
Base connector class for hosted git service APIs.

Connectors raise ConnectorError when a request cannot be completed or the
service answers with a status the caller cannot recover from.
"""

from typing import Dict, Optional, Tuple

import requests


class ConnectorError(Exception):
    """Exception raised by connectors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class APIConnector:
    """Base class for API-based connectors.

    Provides common HTTP handling for connectors that talk to remote APIs
    with basic authentication.
    """

    def __init__(
        self,
        base_url: str,
        auth: Optional[Tuple[str, str]] = None,
        timeout: float = 30,
    ):
        self._base_url = base_url.rstrip("/")
        self._auth = auth
        self._timeout = timeout
        self._headers: Dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, endpoint: str) -> str:
        """Resolve an endpoint path, or pass an absolute URL through."""
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Send an HTTP request and return the raw response.

        Non-2xx statuses are returned, not raised; callers decide what an
        error body means.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path or absolute URL
            **kwargs: Additional requests parameters

        Raises:
            ConnectorError: If the request could not be completed
        """
        url = self._url(endpoint)
        headers = {**self._headers, **kwargs.pop("headers", {})}

        try:
            return requests.request(
                method=method,
                url=url,
                headers=headers,
                auth=self._auth,
                timeout=kwargs.pop("timeout", self._timeout),
                **kwargs
            )
        except requests.Timeout:
            raise ConnectorError(f"Request timed out: {url}")
        except requests.RequestException as e:
            raise ConnectorError(f"Request failed: {e}")
