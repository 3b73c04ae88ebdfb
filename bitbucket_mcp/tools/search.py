"""
MCP Tool - bb_search

Search Bitbucket code, content, repositories or pull requests.
"""

from typing import Optional, Union

from fastmcp import FastMCP

from bitbucket_mcp import dependencies
from bitbucket_mcp.schemas.search import SearchRequest, SearchScope, SearchToolArgs
from bitbucket_mcp.tools.common import compact, run_tool


async def bb_search(
    query: str,
    scope: SearchScope = SearchScope.CODE,
    workspace_slug: Optional[str] = None,
    repo_slug: Optional[str] = None,
    content_type: Optional[str] = None,
    language: Optional[str] = None,
    extension: Optional[str] = None,
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    Search Bitbucket for code, content, repositories or pull requests.

    Args:
        query: Search query text (required)
        scope: "code", "content", "repositories" or "pullrequests" (default "code")
        workspace_slug: Workspace to search in; defaults to your default workspace
        repo_slug: Limit to one repository; required for "pullrequests"
        content_type: Content type for content search (e.g. "wiki", "issue")
        language: Filter code search by programming language
        extension: Filter code search by file extension
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response

    Returns:
        Markdown-formatted search results
    """
    controller = dependencies.get_search_controller()

    async def call(args: SearchToolArgs):
        return await controller.search(
            SearchRequest(**args.model_dump(mode="json", exclude_none=True))
        )

    return await run_tool(
        SearchToolArgs,
        compact(
            query=query,
            scope=scope,
            workspace_slug=workspace_slug,
            repo_slug=repo_slug,
            content_type=content_type,
            language=language,
            extension=extension,
            limit=limit,
            cursor=cursor,
        ),
        call,
    )


def register(mcp: FastMCP) -> None:
    """Register the search tool."""
    mcp.tool()(bb_search)
