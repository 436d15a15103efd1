"""
Connectors for hosted git services.

- Bitbucket Cloud: create and merge pull requests
"""

from .base import (
    APIConnector,
    ConnectorError,
)

from .bitbucket import (
    BitbucketConnector,
    PullRequestResult,
    NO_CHANGES_MESSAGE,
    MERGE_STRATEGY,
)

__all__ = [
    # Base classes
    "APIConnector",
    "ConnectorError",
    # Bitbucket
    "BitbucketConnector",
    "PullRequestResult",
    "NO_CHANGES_MESSAGE",
    "MERGE_STRATEGY",
]
