"""
Bitbucket connector for creating and merging pull requests.

Talks to the Bitbucket Cloud 2.0 REST API using HTTP Basic Authentication
(username plus password or app password).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .base import APIConnector, ConnectorError
from ..config import DEFAULT_API_URL, MergeConfig


NO_CHANGES_MESSAGE = "There are no changes to be pulled"
MERGE_STRATEGY = "merge_commit"


@dataclass
class PullRequestResult:
    """Outcome of a pull request creation attempt."""
    success: bool
    no_changes: bool = False
    pr_id: Optional[int] = None
    merge_url: Optional[str] = None
    html_url: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None


def _json_body(response: requests.Response) -> Optional[Dict[str, Any]]:
    """Return the decoded JSON object, or None when the body is not one."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _error_message(body: Optional[Dict[str, Any]]) -> Optional[str]:
    """Pull the error message out of a Bitbucket error payload.

    Bitbucket reports errors as ``{"type": "error", "error": {"message": ...}}``.
    """
    if not body or "error" not in body:
        return None
    error = body["error"]
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else "Unknown error"
    return str(error)


def _link(links: Any, name: str) -> Optional[str]:
    """Return ``links[name]["href"]`` when every level has the expected shape."""
    if not isinstance(links, dict):
        return None
    link = links.get(name)
    if not isinstance(link, dict):
        return None
    href = link.get("href")
    return href if isinstance(href, str) and href else None


class BitbucketConnector(APIConnector):
    """Connector for Bitbucket pull requests."""

    def __init__(
        self,
        repo_owner: str,
        repo_slug: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30,
    ):
        auth = (username, password) if username and password else None
        super().__init__(base_url=api_url, auth=auth, timeout=timeout)
        self.repo_owner = repo_owner
        self.repo_slug = repo_slug

    @classmethod
    def from_config(cls, config: MergeConfig) -> "BitbucketConnector":
        """Build a connector for the repository named in ``config``."""
        return cls(
            repo_owner=config.repo_owner,
            repo_slug=config.repo_slug,
            username=config.user,
            password=config.password,
            api_url=config.api_url,
            timeout=config.timeout,
        )

    @property
    def pullrequests_endpoint(self) -> str:
        return f"repositories/{self.repo_owner}/{self.repo_slug}/pullrequests"

    @property
    def pullrequests_url(self) -> str:
        """Absolute URL that creates pull requests for this repository."""
        return self._url(self.pullrequests_endpoint)

    def create_pull_request(
        self,
        source: str,
        destination: str,
        title: str,
        description: str = "",
        close_source_branch: bool = False,
    ) -> PullRequestResult:
        """Open a pull request from ``source`` into ``destination``.

        Args:
            source: Branch with the changes
            destination: Branch to merge into
            title: Pull request title
            description: Pull request description
            close_source_branch: Whether Bitbucket should delete the source branch

        Returns:
            PullRequestResult. A "no changes to be pulled" answer is a success
            with ``no_changes`` set and no merge link.

        Raises:
            ConnectorError: If the request could not be completed
        """
        payload = {
            "title": title,
            "description": description,
            "source": {"branch": {"name": source}},
            "destination": {"branch": {"name": destination}},
            "state": "OPEN",
            "close_source_branch": close_source_branch,
        }
        response = self._request("POST", self.pullrequests_endpoint, json=payload)
        body = _json_body(response)
        status = response.status_code

        message = _error_message(body)
        if message is not None:
            if message == NO_CHANGES_MESSAGE:
                return PullRequestResult(success=True, no_changes=True, status_code=status)
            return PullRequestResult(success=False, error=message, status_code=status)

        if not response.ok:
            return PullRequestResult(
                success=False,
                error=f"Bitbucket API error: {status} {response.text}".strip(),
                status_code=status,
            )

        if body is None:
            return PullRequestResult(
                success=False,
                error="Bitbucket API returned a response that is not a JSON object",
                status_code=status,
            )

        links = body.get("links")
        merge_url = _link(links, "merge")
        if not merge_url:
            return PullRequestResult(
                success=False,
                error="Pull request response has no merge link",
                status_code=status,
            )

        return PullRequestResult(
            success=True,
            pr_id=body.get("id"),
            merge_url=merge_url,
            html_url=_link(links, "html"),
            status_code=status,
        )

    def merge_pull_request(
        self,
        merge_url: str,
        close_source_branch: bool = False,
    ) -> Dict[str, Any]:
        """Merge a pull request through its merge link.

        Args:
            merge_url: The ``links.merge.href`` value of the pull request
            close_source_branch: Whether Bitbucket should delete the source branch

        Returns:
            The decoded response body (empty if it was not JSON)

        Raises:
            ConnectorError: On transport failure or any non-2xx status
        """
        payload = {
            "type": "pullrequest",
            "merge_strategy": MERGE_STRATEGY,
            "close_source_branch": close_source_branch,
        }
        response = self._request("POST", merge_url, json=payload)
        body = _json_body(response)

        if not response.ok:
            detail = _error_message(body) or response.text
            raise ConnectorError(
                f"Merge failed: {response.status_code} {detail}".strip(),
                status_code=response.status_code,
            )

        return body or {}
