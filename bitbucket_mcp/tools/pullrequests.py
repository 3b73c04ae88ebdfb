"""
MCP Tools - bb_ls_prs, bb_get_pr, bb_ls_pr_comments

Pull request listing, details and comments.
"""

from typing import Optional, Union

from fastmcp import FastMCP

from bitbucket_mcp import dependencies
from bitbucket_mcp.schemas.pullrequests import (
    GetPullRequestToolArgs,
    ListPullRequestCommentsToolArgs,
    ListPullRequestsToolArgs,
)
from bitbucket_mcp.tools.common import compact, run_tool


async def bb_ls_prs(
    repo_slug: str,
    workspace_slug: Optional[str] = None,
    state: Optional[str] = None,
    query: Optional[str] = None,
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    List pull requests in a Bitbucket repository.

    Args:
        repo_slug: Repository slug
        workspace_slug: Workspace slug; defaults to your default workspace
        state: OPEN, MERGED, DECLINED or SUPERSEDED (all states if omitted)
        query: Filter by title or description
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response
    """
    controller = dependencies.get_pullrequests_controller()
    return await run_tool(
        ListPullRequestsToolArgs,
        compact(
            repo_slug=repo_slug,
            workspace_slug=workspace_slug,
            state=state,
            query=query,
            limit=limit,
            cursor=cursor,
        ),
        controller.list_pull_requests,
    )


async def bb_get_pr(
    repo_slug: str,
    pr_id: str,
    workspace_slug: Optional[str] = None,
    include_comments: bool = False,
) -> str:
    """
    Get details for a Bitbucket pull request.

    Args:
        repo_slug: Repository slug
        pr_id: Numeric pull request ID, e.g. "42"
        workspace_slug: Workspace slug; defaults to your default workspace
        include_comments: Also fetch the pull request comments
    """
    controller = dependencies.get_pullrequests_controller()
    return await run_tool(
        GetPullRequestToolArgs,
        compact(
            repo_slug=repo_slug,
            pr_id=pr_id,
            workspace_slug=workspace_slug,
            include_comments=include_comments,
        ),
        controller.get_pull_request,
    )


async def bb_ls_pr_comments(
    repo_slug: str,
    pr_id: str,
    workspace_slug: Optional[str] = None,
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    List comments on a Bitbucket pull request, one page at a time.

    Args:
        repo_slug: Repository slug
        pr_id: Numeric pull request ID, e.g. "42"
        workspace_slug: Workspace slug; defaults to your default workspace
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response
    """
    controller = dependencies.get_pullrequests_controller()
    return await run_tool(
        ListPullRequestCommentsToolArgs,
        compact(
            repo_slug=repo_slug,
            pr_id=pr_id,
            workspace_slug=workspace_slug,
            limit=limit,
            cursor=cursor,
        ),
        controller.list_comments,
    )


def register(mcp: FastMCP) -> None:
    """Register the pull request tools."""
    mcp.tool()(bb_ls_prs)
    mcp.tool()(bb_get_pr)
    mcp.tool()(bb_ls_pr_comments)
