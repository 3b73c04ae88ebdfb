"""
Schemas - Search Models

Search scopes, content types, tool arguments and controller parameters.
"""

from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from bitbucket_mcp.schemas.common import PaginationArgs


class SearchScope(str, Enum):
    """Search category selector."""
    CODE = "code"
    CONTENT = "content"
    REPOSITORIES = "repositories"
    PULLREQUESTS = "pullrequests"


class ContentType(str, Enum):
    """Content types understood by content search."""
    WIKI = "wiki"
    ISSUE = "issue"
    PULLREQUEST = "pullrequest"
    COMMIT = "commit"


SCOPE_ALIASES: Dict[str, SearchScope] = {
    "code": SearchScope.CODE,
    "content": SearchScope.CONTENT,
    "repos": SearchScope.REPOSITORIES,
    "repositories": SearchScope.REPOSITORIES,
    "prs": SearchScope.PULLREQUESTS,
    "pullrequests": SearchScope.PULLREQUESTS,
}


def resolve_scope(scope: Optional[str]) -> Optional[SearchScope]:
    """Map a scope or one of its aliases (any case) to a SearchScope."""
    if scope is None:
        return None
    return SCOPE_ALIASES.get(str(scope).lower())


def coerce_content_type(
    content_type: Optional[str],
) -> Optional[Union[ContentType, str]]:
    """
    Lower-case a content type and map it onto ContentType when known.

    Unknown values are returned as plain strings rather than rejected;
    the content search API reports them.
    """
    if not content_type:
        return None
    value = str(content_type).lower()
    try:
        return ContentType(value)
    except ValueError:
        return value


class SearchToolArgs(PaginationArgs):
    """Arguments accepted by the bb_search tool."""
    query: str = Field(
        min_length=1,
        description=(
            "Search query text. Matched against content based on the "
            "selected scope."
        ),
    )
    scope: SearchScope = Field(
        default=SearchScope.CODE,
        description=(
            'Search scope: "code", "content", "repositories", '
            '"pullrequests". Default: "code".'
        ),
    )
    workspace_slug: Optional[str] = Field(
        default=None,
        description=(
            "Workspace slug to search in. If not provided, the default "
            'workspace is used. Example: "myteam"'
        ),
    )
    repo_slug: Optional[str] = Field(
        default=None,
        validate_default=True,
        description=(
            "Repository slug to limit the search. Required for the "
            '"pullrequests" scope. Example: "project-api"'
        ),
    )
    content_type: Optional[str] = Field(
        default=None,
        description='Content type for content search (e.g. "wiki", "issue").',
    )
    language: Optional[str] = Field(
        default=None,
        description="Filter code search by programming language.",
    )
    extension: Optional[str] = Field(
        default=None,
        description="Filter code search by file extension.",
    )

    @field_validator("repo_slug")
    @classmethod
    def require_repo_for_pull_requests(
        cls, value: Optional[str], info: ValidationInfo
    ) -> Optional[str]:
        if info.data.get("scope") == SearchScope.PULLREQUESTS and not value:
            raise PydanticCustomError(
                "repo_slug_required",
                'repo_slug is required when scope is "pullrequests"',
            )
        return value


class SearchRequest(BaseModel):
    """
    Search options as supplied by a caller.

    Unlike SearchToolArgs nothing is enforced here: the CLI passes the
    user's flags straight through and the controller reports problems.
    """
    workspace_slug: Optional[str] = None
    repo_slug: Optional[str] = None
    query: Optional[str] = None
    scope: Optional[str] = None
    content_type: Optional[str] = None
    language: Optional[str] = None
    extension: Optional[str] = None
    limit: Optional[int] = None
    cursor: Optional[Union[str, int]] = None


class ResolvedSearchParams(BaseModel):
    """Search options after defaulting and content type coercion."""
    workspace_slug: Optional[str] = None
    repo_slug: Optional[str] = None
    query: Optional[str] = None
    scope: str
    content_type: Optional[Union[ContentType, str]] = Field(
        default=None, union_mode="left_to_right"
    )
    language: Optional[str] = None
    extension: Optional[str] = None
    limit: int
    cursor: Optional[Union[str, int]] = None
