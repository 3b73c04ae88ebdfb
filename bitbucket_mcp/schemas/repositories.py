"""
Schemas - Repository Models

Tool arguments for listing and inspecting repositories.
"""

from pydantic import Field
from typing import Optional

from bitbucket_mcp.schemas.common import PaginationArgs, RepoIdentifierArgs


class ListRepositoriesToolArgs(PaginationArgs):
    """Arguments for listing repositories in a workspace."""
    workspace_slug: Optional[str] = Field(
        default=None,
        description=(
            "Workspace slug containing the repositories. If not provided, "
            "the default workspace is used."
        ),
    )
    query: Optional[str] = Field(
        default=None,
        description='Filter repositories by name (text search). Example: "api"',
    )
    sort: Optional[str] = Field(
        default=None,
        description=(
            'Field to sort by, e.g. "name" or "-updated_on" '
            "(prefix with - for descending)."
        ),
    )
    role: Optional[str] = Field(
        default=None,
        description=(
            'Filter by your role: "owner", "admin", "contributor" or "member".'
        ),
    )
    project_key: Optional[str] = Field(
        default=None,
        description="Filter repositories by project key.",
    )


class GetRepositoryToolArgs(RepoIdentifierArgs):
    """Arguments for retrieving a single repository."""


class GetCommitHistoryToolArgs(RepoIdentifierArgs, PaginationArgs):
    """Arguments for listing commits in a repository."""
    revision: Optional[str] = Field(
        default=None,
        description=(
            "Branch name, tag or commit hash to list history from. "
            "Uses the default branch if omitted."
        ),
    )
    path: Optional[str] = Field(
        default=None,
        description="Only list commits that touch this file path.",
    )


class ListBranchesToolArgs(RepoIdentifierArgs, PaginationArgs):
    """Arguments for listing branches in a repository."""
    query: Optional[str] = Field(
        default=None,
        description="Filter branches by name (text search).",
    )
    sort: Optional[str] = Field(
        default=None,
        description=(
            'Field to sort by, e.g. "name", "-name" or "-target.date" '
            "(prefix with - for descending)."
        ),
    )


class GetFileContentToolArgs(RepoIdentifierArgs):
    """Arguments for reading one file from a repository."""
    file_path: str = Field(
        min_length=1,
        description='Path of the file in the repository. Example: "src/main.py"',
    )
    revision: Optional[str] = Field(
        default=None,
        description=(
            "Branch name, tag or commit hash to read the file from. "
            "Uses the default branch if omitted."
        ),
    )
