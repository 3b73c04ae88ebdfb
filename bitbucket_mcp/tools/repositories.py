"""
MCP Tools - bb_ls_repos, bb_get_repo, bb_get_commit_history, bb_list_branches, bb_get_file

Repository listing, details, history, branches and file content.
"""

from typing import Optional, Union

from fastmcp import FastMCP

from bitbucket_mcp import dependencies
from bitbucket_mcp.schemas.repositories import (
    GetCommitHistoryToolArgs,
    GetFileContentToolArgs,
    GetRepositoryToolArgs,
    ListBranchesToolArgs,
    ListRepositoriesToolArgs,
)
from bitbucket_mcp.tools.common import compact, run_tool


async def bb_ls_repos(
    workspace_slug: Optional[str] = None,
    query: Optional[str] = None,
    sort: Optional[str] = None,
    role: Optional[str] = None,
    project_key: Optional[str] = None,
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    List repositories in a Bitbucket workspace.

    Args:
        workspace_slug: Workspace slug; defaults to your default workspace
        query: Filter by repository name
        sort: Sort field, e.g. "-updated_on"
        role: Filter by your role (owner, admin, contributor, member)
        project_key: Filter by project key
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response
    """
    controller = dependencies.get_repositories_controller()
    return await run_tool(
        ListRepositoriesToolArgs,
        compact(
            workspace_slug=workspace_slug,
            query=query,
            sort=sort,
            role=role,
            project_key=project_key,
            limit=limit,
            cursor=cursor,
        ),
        controller.list_repositories,
    )


async def bb_get_repo(repo_slug: str, workspace_slug: Optional[str] = None) -> str:
    """
    Get details for a Bitbucket repository.

    Args:
        repo_slug: Repository slug, e.g. "project-api"
        workspace_slug: Workspace slug; defaults to your default workspace
    """
    controller = dependencies.get_repositories_controller()
    return await run_tool(
        GetRepositoryToolArgs,
        compact(workspace_slug=workspace_slug, repo_slug=repo_slug),
        controller.get_repository,
    )


async def bb_get_commit_history(
    repo_slug: str,
    workspace_slug: Optional[str] = None,
    revision: Optional[str] = None,
    path: Optional[str] = None,
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    List commits in a Bitbucket repository, newest first.

    Args:
        repo_slug: Repository slug
        workspace_slug: Workspace slug; defaults to your default workspace
        revision: Branch, tag or commit hash to start from (default branch if omitted)
        path: Only commits touching this file path
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response
    """
    controller = dependencies.get_repositories_controller()
    return await run_tool(
        GetCommitHistoryToolArgs,
        compact(
            repo_slug=repo_slug,
            workspace_slug=workspace_slug,
            revision=revision,
            path=path,
            limit=limit,
            cursor=cursor,
        ),
        controller.get_commit_history,
    )


async def bb_list_branches(
    repo_slug: str,
    workspace_slug: Optional[str] = None,
    query: Optional[str] = None,
    sort: Optional[str] = None,
    limit: Optional[int] = None,
    cursor: Optional[Union[str, int]] = None,
) -> str:
    """
    List branches in a Bitbucket repository.

    Args:
        repo_slug: Repository slug
        workspace_slug: Workspace slug; defaults to your default workspace
        query: Filter by branch name
        sort: Sort field, e.g. "name" or "-target.date"
        limit: Maximum results (1-100, default 25)
        cursor: Pagination cursor from a previous response
    """
    controller = dependencies.get_repositories_controller()
    return await run_tool(
        ListBranchesToolArgs,
        compact(
            repo_slug=repo_slug,
            workspace_slug=workspace_slug,
            query=query,
            sort=sort,
            limit=limit,
            cursor=cursor,
        ),
        controller.list_branches,
    )


async def bb_get_file(
    repo_slug: str,
    file_path: str,
    workspace_slug: Optional[str] = None,
    revision: Optional[str] = None,
) -> str:
    """
    Get the content of a file in a Bitbucket repository.

    Args:
        repo_slug: Repository slug
        file_path: Path of the file, e.g. "src/main.py"
        workspace_slug: Workspace slug; defaults to your default workspace
        revision: Branch, tag or commit hash (default branch if omitted)
    """
    controller = dependencies.get_repositories_controller()
    return await run_tool(
        GetFileContentToolArgs,
        compact(
            repo_slug=repo_slug,
            file_path=file_path,
            workspace_slug=workspace_slug,
            revision=revision,
        ),
        controller.get_file_content,
    )


def register(mcp: FastMCP) -> None:
    """Register the repository tools."""
    mcp.tool()(bb_ls_repos)
    mcp.tool()(bb_get_repo)
    mcp.tool()(bb_get_commit_history)
    mcp.tool()(bb_list_branches)
    mcp.tool()(bb_get_file)
