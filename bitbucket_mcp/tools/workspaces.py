"""
MCP Tools - bb_ls_workspaces, bb_get_workspace

Workspace listing and details.
"""

from typing import Optional, Union

from fastmcp import FastMCP

from bitbucket_mcp import dependencies
from bitbucket_mcp.schemas.workspaces import GetWorkspaceToolArgs, ListWorkspacesToolArgs
from bitbucket_mcp.tools.common import compact, run_tool


async def bb_ls_workspaces(
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    List the Bitbucket workspaces you are a member of.

    Args:
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response
    """
    controller = dependencies.get_workspaces_controller()
    return await run_tool(
        ListWorkspacesToolArgs,
        compact(limit=limit, cursor=cursor),
        controller.list_workspaces,
    )


async def bb_get_workspace(workspace_slug: str) -> str:
    """
    Get details for a Bitbucket workspace.

    Args:
        workspace_slug: Workspace slug, e.g. "myteam"
    """
    controller = dependencies.get_workspaces_controller()
    return await run_tool(
        GetWorkspaceToolArgs,
        compact(workspace_slug=workspace_slug),
        controller.get_workspace,
    )


def register(mcp: FastMCP) -> None:
    """Register the workspace tools."""
    mcp.tool()(bb_ls_workspaces)
    mcp.tool()(bb_get_workspace)
