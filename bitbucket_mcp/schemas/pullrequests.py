"""
Schemas - Pull Request Models

Tool arguments for listing and inspecting pull requests.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from bitbucket_mcp.schemas.common import (
    PaginationArgs,
    PullRequestIdentifierArgs,
    RepoIdentifierArgs,
)


class PullRequestState(str, Enum):
    """Bitbucket pull request states."""
    OPEN = "OPEN"
    MERGED = "MERGED"
    DECLINED = "DECLINED"
    SUPERSEDED = "SUPERSEDED"


class ListPullRequestsToolArgs(RepoIdentifierArgs, PaginationArgs):
    """Arguments for listing pull requests in a repository."""
    state: Optional[PullRequestState] = Field(
        default=None,
        description=(
            'Filter by state: "OPEN", "MERGED", "DECLINED" or "SUPERSEDED". '
            "All states are returned if omitted."
        ),
    )
    query: Optional[str] = Field(
        default=None,
        description="Filter pull requests by title or description (text search).",
    )


class GetPullRequestToolArgs(PullRequestIdentifierArgs):
    """Arguments for retrieving a single pull request."""
    include_comments: bool = Field(
        default=False,
        description=(
            "Also fetch the pull request comments. Costs an extra API call."
        ),
    )


class ListPullRequestCommentsToolArgs(PullRequestIdentifierArgs, PaginationArgs):
    """Arguments for paging through the comments on a pull request."""
