"""
Schemas - Common Models

Response envelope and argument shapes shared by every tool.
"""

from pydantic import BaseModel, Field
from typing import Optional, Union


class ControllerResponse(BaseModel):
    """Uniform text envelope returned by controllers and handlers."""
    content: str


class PaginationArgs(BaseModel):
    """Page size and opaque cursor, passed through to Bitbucket."""
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        le=100,
        description=(
            "Maximum number of items to return (1-100). Defaults to the "
            "standard page size (25) if omitted."
        ),
    )
    cursor: Optional[Union[str, int]] = Field(
        default=None,
        description=(
            "Pagination cursor (page number) from a previous response, "
            "used to fetch the next set of results."
        ),
    )


class RepoIdentifierArgs(BaseModel):
    """Workspace and repository identifying a single repository."""
    workspace_slug: Optional[str] = Field(
        default=None,
        description=(
            "Workspace slug. If not provided, the default workspace is "
            'used. Example: "myteam"'
        ),
    )
    repo_slug: str = Field(
        min_length=1,
        description='Repository slug. Example: "project-api"',
    )


class PullRequestIdentifierArgs(RepoIdentifierArgs):
    """Repository identifier plus a pull request ID."""
    pr_id: str = Field(
        min_length=1,
        pattern=r"^\d+$",
        description='Numeric ID of the pull request as a string. Example: "42"',
    )
