"""
Bitbucket MCP - Command Line Interface

Runs the same controllers as the MCP tools and prints their output.
"""

import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from bitbucket_mcp import dependencies
from bitbucket_mcp.schemas import (
    GetCommitHistoryToolArgs,
    GetFileContentToolArgs,
    GetPullRequestToolArgs,
    GetRepositoryToolArgs,
    GetWorkspaceToolArgs,
    ListBranchesToolArgs,
    ListPullRequestCommentsToolArgs,
    ListPullRequestsToolArgs,
    ListRepositoriesToolArgs,
    ListWorkspacesToolArgs,
    PullRequestState,
    SearchRequest,
    validate_args,
)
from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.utils.error_handling import handle_cli_error
from bitbucket_mcp.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

ArgsT = TypeVar("ArgsT", bound=BaseModel)

SEARCH_DEFAULT_LIMIT = 20


def positive_limit(value: str) -> int:
    """argparse type for --limit (1-100)."""
    limit = int(value)
    if not 1 <= limit <= 100:
        raise argparse.ArgumentTypeError("must be between 1 and 100")
    return limit


def _validated(
    parser: argparse.ArgumentParser,
    schema: Type[ArgsT],
    payload: Dict[str, Any],
) -> ArgsT:
    """Validate CLI options against a tool schema or exit with usage."""
    args, issues = validate_args(
        schema, {k: v for k, v in payload.items() if v is not None}
    )
    if issues:
        parser.error("; ".join(
            f"{'.'.join(str(p) for p in issue.path)}: {issue.message}"
            for issue in issues
        ))
    return args


async def run_search(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    logger.debug(f"CLI search command called with: {vars(args)}")
    controller = dependencies.get_search_controller()
    return await controller.search(
        SearchRequest(
            workspace_slug=args.workspace,
            repo_slug=args.repo,
            query=args.query,
            scope=args.type,
            content_type=args.content_type,
            language=args.language,
            extension=args.extension,
            limit=args.limit,
            cursor=args.cursor,
        )
    )


async def run_ls_workspaces(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser, ListWorkspacesToolArgs, {"limit": args.limit, "cursor": args.cursor}
    )
    return await dependencies.get_workspaces_controller().list_workspaces(options)


async def run_get_workspace(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(parser, GetWorkspaceToolArgs, {"workspace_slug": args.workspace})
    return await dependencies.get_workspaces_controller().get_workspace(options)


async def run_ls_repos(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        ListRepositoriesToolArgs,
        {
            "workspace_slug": args.workspace,
            "query": args.query,
            "sort": args.sort,
            "role": args.role,
            "project_key": args.project,
            "limit": args.limit,
            "cursor": args.cursor,
        },
    )
    return await dependencies.get_repositories_controller().list_repositories(options)


async def run_get_repo(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        GetRepositoryToolArgs,
        {"workspace_slug": args.workspace, "repo_slug": args.repo},
    )
    return await dependencies.get_repositories_controller().get_repository(options)


async def run_get_commit_history(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        GetCommitHistoryToolArgs,
        {
            "workspace_slug": args.workspace,
            "repo_slug": args.repo,
            "revision": args.revision,
            "path": args.path,
            "limit": args.limit,
            "cursor": args.cursor,
        },
    )
    return await dependencies.get_repositories_controller().get_commit_history(options)


async def run_ls_branches(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        ListBranchesToolArgs,
        {
            "workspace_slug": args.workspace,
            "repo_slug": args.repo,
            "query": args.query,
            "sort": args.sort,
            "limit": args.limit,
            "cursor": args.cursor,
        },
    )
    return await dependencies.get_repositories_controller().list_branches(options)


async def run_get_file(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        GetFileContentToolArgs,
        {
            "workspace_slug": args.workspace,
            "repo_slug": args.repo,
            "file_path": args.file_path,
            "revision": args.revision,
        },
    )
    return await dependencies.get_repositories_controller().get_file_content(options)


async def run_ls_prs(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        ListPullRequestsToolArgs,
        {
            "workspace_slug": args.workspace,
            "repo_slug": args.repo,
            "state": args.state,
            "query": args.query,
            "limit": args.limit,
            "cursor": args.cursor,
        },
    )
    return await dependencies.get_pullrequests_controller().list_pull_requests(options)


async def run_get_pr(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        GetPullRequestToolArgs,
        {
            "workspace_slug": args.workspace,
            "repo_slug": args.repo,
            "pr_id": args.pr_id,
            "include_comments": args.include_comments,
        },
    )
    return await dependencies.get_pullrequests_controller().get_pull_request(options)


async def run_ls_pr_comments(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ControllerResponse:
    options = _validated(
        parser,
        ListPullRequestCommentsToolArgs,
        {
            "workspace_slug": args.workspace,
            "repo_slug": args.repo,
            "pr_id": args.pr_id,
            "limit": args.limit,
            "cursor": args.cursor,
        },
    )
    return await dependencies.get_pullrequests_controller().list_comments(options)


def _add_pagination(parser: argparse.ArgumentParser, default_limit: Optional[int] = None) -> None:
    parser.add_argument(
        "--limit",
        type=positive_limit,
        default=default_limit,
        help="Maximum number of results to return (1-100)",
    )
    parser.add_argument("--cursor", help="Pagination cursor from a previous page")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="bitbucket-mcp",
        description="Bitbucket Cloud from the command line",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search Bitbucket for content matching a query")
    search.add_argument("-q", "--query", required=True, help="Search query")
    search.add_argument("-w", "--workspace", help="Workspace slug")
    search.add_argument("-r", "--repo", help="Repository slug (required for PR search)")
    search.add_argument(
        "-t", "--type",
        default="code",
        help="Search type (code, content, repositories, pullrequests)",
    )
    search.add_argument(
        "-c", "--content-type",
        help="Content type for content search (e.g., wiki, issue)",
    )
    search.add_argument("-l", "--language", help="Filter code search by programming language")
    search.add_argument("-e", "--extension", help="Filter code search by file extension")
    _add_pagination(search, default_limit=SEARCH_DEFAULT_LIMIT)
    search.set_defaults(handler=run_search)

    ls_workspaces = commands.add_parser("ls-workspaces", help="List your workspaces")
    _add_pagination(ls_workspaces)
    ls_workspaces.set_defaults(handler=run_ls_workspaces)

    get_workspace = commands.add_parser("get-workspace", help="Show workspace details")
    get_workspace.add_argument("-w", "--workspace", required=True, help="Workspace slug")
    get_workspace.set_defaults(handler=run_get_workspace)

    ls_repos = commands.add_parser("ls-repos", help="List repositories in a workspace")
    ls_repos.add_argument("-w", "--workspace", help="Workspace slug")
    ls_repos.add_argument("-q", "--query", help="Filter by repository name")
    ls_repos.add_argument("-s", "--sort", help='Sort field, e.g. "-updated_on"')
    ls_repos.add_argument("--role", help="Filter by your role (owner, admin, contributor, member)")
    ls_repos.add_argument("-p", "--project", help="Filter by project key")
    _add_pagination(ls_repos)
    ls_repos.set_defaults(handler=run_ls_repos)

    get_repo = commands.add_parser("get-repo", help="Show repository details")
    get_repo.add_argument("-w", "--workspace", help="Workspace slug")
    get_repo.add_argument("-r", "--repo", required=True, help="Repository slug")
    get_repo.set_defaults(handler=run_get_repo)

    history = commands.add_parser("get-commit-history", help="List commits in a repository")
    history.add_argument("-w", "--workspace", help="Workspace slug")
    history.add_argument("-r", "--repo", required=True, help="Repository slug")
    history.add_argument("--revision", help="Branch, tag or commit hash to start from")
    history.add_argument("--path", help="Only commits touching this file")
    _add_pagination(history)
    history.set_defaults(handler=run_get_commit_history)

    ls_branches = commands.add_parser("ls-branches", help="List branches in a repository")
    ls_branches.add_argument("-w", "--workspace", help="Workspace slug")
    ls_branches.add_argument("-r", "--repo", required=True, help="Repository slug")
    ls_branches.add_argument("-q", "--query", help="Filter by branch name")
    ls_branches.add_argument("-s", "--sort", help='Sort field, e.g. "-target.date"')
    _add_pagination(ls_branches)
    ls_branches.set_defaults(handler=run_ls_branches)

    get_file = commands.add_parser("get-file", help="Show the content of a file")
    get_file.add_argument("-w", "--workspace", help="Workspace slug")
    get_file.add_argument("-r", "--repo", required=True, help="Repository slug")
    get_file.add_argument("-f", "--file-path", required=True, help="Path of the file in the repository")
    get_file.add_argument("--revision", help="Branch, tag or commit hash (default branch if omitted)")
    get_file.set_defaults(handler=run_get_file)

    ls_prs = commands.add_parser("ls-prs", help="List pull requests in a repository")
    ls_prs.add_argument("-w", "--workspace", help="Workspace slug")
    ls_prs.add_argument("-r", "--repo", required=True, help="Repository slug")
    ls_prs.add_argument(
        "-s", "--state",
        choices=[state.value for state in PullRequestState],
        help="Filter by state (all states if omitted)",
    )
    ls_prs.add_argument("-q", "--query", help="Filter by title or description")
    _add_pagination(ls_prs)
    ls_prs.set_defaults(handler=run_ls_prs)

    get_pr = commands.add_parser("get-pr", help="Show pull request details")
    get_pr.add_argument("-w", "--workspace", help="Workspace slug")
    get_pr.add_argument("-r", "--repo", required=True, help="Repository slug")
    get_pr.add_argument("-p", "--pr-id", required=True, help="Pull request ID")
    get_pr.add_argument(
        "--include-comments",
        action="store_true",
        help="Also show the pull request comments",
    )
    get_pr.set_defaults(handler=run_get_pr)

    ls_pr_comments = commands.add_parser("ls-pr-comments", help="List comments on a pull request")
    ls_pr_comments.add_argument("-w", "--workspace", help="Workspace slug")
    ls_pr_comments.add_argument("-r", "--repo", required=True, help="Repository slug")
    ls_pr_comments.add_argument("-p", "--pr-id", required=True, help="Pull request ID")
    _add_pagination(ls_pr_comments)
    ls_pr_comments.set_defaults(handler=run_ls_pr_comments)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(dependencies.get_app_settings())

    try:
        response = asyncio.run(args.handler(args, parser))
    except Exception as error:
        handle_cli_error(error)

    print(response.content)


if __name__ == "__main__":
    main()
