"""Run configuration schema and process exit codes."""

from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_API_URL = "https://api.bitbucket.org/2.0"
DEFAULT_TITLE = "Automatic branch synchronization"
DEFAULT_DESCRIPTION = "Pull request created automatically to keep branches in sync."
DEFAULT_TIMEOUT = 30.0


class ExitCode(IntEnum):
    """Process exit codes."""

    OK = 0
    API_FAILURE = 1
    USAGE = 2
    MISSING_DEPENDENCY = 3
    MISSING_SOURCE = 4
    MISSING_DESTINATION = 5


class MergeConfig(BaseModel):
    """Immutable settings for one create-and-merge run.

    Built once from CLI flags, with environment variables filling in
    whatever flags were not given.
    """

    model_config = ConfigDict(frozen=True)

    source: Optional[str] = Field(None, description="Branch the changes come from")
    destination: Optional[str] = Field(None, description="Branch the changes are merged into")
    user: Optional[str] = Field(None, description="Basic auth username")
    password: Optional[str] = Field(None, repr=False, description="Basic auth password or app password")
    repo_owner: Optional[str] = Field(None, description="Repository owner (workspace)")
    repo_slug: Optional[str] = Field(None, description="Repository slug")
    api_url: str = Field(DEFAULT_API_URL, description="REST API base URL")
    title: str = Field(DEFAULT_TITLE, description="Pull request title")
    description: str = Field(DEFAULT_DESCRIPTION, description="Pull request description")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds")
    close_source_branch: bool = Field(False, description="Delete the source branch after merging")

    def missing_dependencies(self) -> List[str]:
        """Return the names of credentials/repository settings that are unset."""
        required = {
            "user": self.user,
            "password": self.password,
            "repo-owner": self.repo_owner,
            "repo-slug": self.repo_slug,
        }
        return [name for name, value in required.items() if not value]
