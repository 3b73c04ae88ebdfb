"""
Schemas - Workspace Models

Tool arguments for listing and inspecting workspaces.
"""

from pydantic import BaseModel, Field

from bitbucket_mcp.schemas.common import PaginationArgs


class ListWorkspacesToolArgs(PaginationArgs):
    """Arguments for listing the workspaces the user belongs to."""


class GetWorkspaceToolArgs(BaseModel):
    """Arguments for retrieving a single workspace."""
    workspace_slug: str = Field(
        min_length=1,
        description='Workspace slug to retrieve. Example: "myteam"',
    )
