"""
Schemas Module - Pydantic Models

Argument schemas, search models and the response envelope.
"""

from bitbucket_mcp.schemas.common import (
    ControllerResponse,
    PaginationArgs,
    RepoIdentifierArgs,
    PullRequestIdentifierArgs,
)
from bitbucket_mcp.schemas.search import (
    SearchScope,
    ContentType,
    SearchToolArgs,
    SearchRequest,
    ResolvedSearchParams,
    resolve_scope,
    coerce_content_type,
)
from bitbucket_mcp.schemas.workspaces import (
    ListWorkspacesToolArgs,
    GetWorkspaceToolArgs,
)
from bitbucket_mcp.schemas.repositories import (
    ListRepositoriesToolArgs,
    GetRepositoryToolArgs,
    GetCommitHistoryToolArgs,
    ListBranchesToolArgs,
    GetFileContentToolArgs,
)
from bitbucket_mcp.schemas.pullrequests import (
    PullRequestState,
    ListPullRequestsToolArgs,
    GetPullRequestToolArgs,
    ListPullRequestCommentsToolArgs,
)
from bitbucket_mcp.schemas.validation import (
    ValidationIssue,
    validate_args,
    format_validation_issues,
)

__all__ = [
    "ControllerResponse",
    "PaginationArgs",
    "RepoIdentifierArgs",
    "PullRequestIdentifierArgs",
    "SearchScope",
    "ContentType",
    "SearchToolArgs",
    "SearchRequest",
    "ResolvedSearchParams",
    "resolve_scope",
    "coerce_content_type",
    "ListWorkspacesToolArgs",
    "GetWorkspaceToolArgs",
    "ListRepositoriesToolArgs",
    "GetRepositoryToolArgs",
    "GetCommitHistoryToolArgs",
    "ListBranchesToolArgs",
    "GetFileContentToolArgs",
    "PullRequestState",
    "ListPullRequestsToolArgs",
    "GetPullRequestToolArgs",
    "ListPullRequestCommentsToolArgs",
    "ValidationIssue",
    "validate_args",
    "format_validation_issues",
]
