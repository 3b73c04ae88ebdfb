"""
Controllers - Repositories

List repositories in a workspace, show repository details, and browse
a repository's commits, branches and files.
"""

import logging
from typing import Any, Dict, Optional

from bitbucket_mcp.controllers.common import (
    WORKSPACE_REQUIRED,
    WorkspaceResolver,
    resolve_workspace_slug,
)
from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.schemas.repositories import (
    GetCommitHistoryToolArgs,
    GetFileContentToolArgs,
    GetRepositoryToolArgs,
    ListBranchesToolArgs,
    ListRepositoriesToolArgs,
)
from bitbucket_mcp.services.bitbucket_client import BitbucketClient, api_path, escape_bbql
from bitbucket_mcp.services.formatters import (
    format_branches,
    format_commits,
    format_file_content,
    format_repositories,
    format_repository_details,
)
from bitbucket_mcp.utils.defaults import DEFAULT_PAGE_SIZE
from bitbucket_mcp.utils.error_handling import handle_controller_error

logger = logging.getLogger(__name__)


def build_repository_filter(options: ListRepositoriesToolArgs) -> Optional[str]:
    """BBQL `q` expression for the name and project filters."""
    clauses = []
    if options.query:
        clauses.append(f'name ~ "{escape_bbql(options.query)}"')
    if options.project_key:
        clauses.append(f'project.key = "{escape_bbql(options.project_key)}"')
    return " AND ".join(clauses) or None


class RepositoriesController:
    """Repository listing and lookup."""

    def __init__(
        self,
        client: BitbucketClient,
        workspace_resolver: WorkspaceResolver,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.client = client
        self.workspace_resolver = workspace_resolver
        self.default_page_size = default_page_size

    async def list_repositories(self, options: ListRepositoriesToolArgs) -> ControllerResponse:
        """
        List repositories in a workspace.

        Args:
            options: Workspace, filters, sort order and pagination

        Returns:
            Formatted repository list, or an in-band error if no workspace
            could be determined
        """
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                logger.warning("No workspace provided for repository listing")
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            params: Dict[str, Any] = {
                "q": build_repository_filter(options),
                "sort": options.sort,
                "role": options.role,
                "pagelen": options.limit or self.default_page_size,
                "page": options.cursor,
            }
            page = await self.client.get(api_path("repositories", workspace_slug), params=params)
            return ControllerResponse(
                content=format_repositories(page, title=f"Repositories in {workspace_slug}")
            )
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Repositories",
                    "operation": "list",
                    "source": f"{__name__}@list_repositories",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def get_repository(self, options: GetRepositoryToolArgs) -> ControllerResponse:
        """Show details for one repository."""
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            repo = await self.client.get(api_path("repositories", workspace_slug, options.repo_slug))
            return ControllerResponse(content=format_repository_details(repo))
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Repository",
                    "operation": "get",
                    "source": f"{__name__}@get_repository",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def get_commit_history(self, options: GetCommitHistoryToolArgs) -> ControllerResponse:
        """
        List commits, newest first.

        Starts from `revision` when given (otherwise the default branch) and
        keeps only commits touching `path` when that is set.
        """
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            segments = ["repositories", workspace_slug, options.repo_slug, "commits"]
            if options.revision:
                segments.append(options.revision)

            page = await self.client.get(
                api_path(*segments),
                params={
                    "path": options.path,
                    "pagelen": options.limit or self.default_page_size,
                    "page": options.cursor,
                },
            )
            return ControllerResponse(
                content=format_commits(
                    page, title=f"Commit History for {workspace_slug}/{options.repo_slug}"
                )
            )
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Commits",
                    "operation": "list",
                    "source": f"{__name__}@get_commit_history",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def list_branches(self, options: ListBranchesToolArgs) -> ControllerResponse:
        """List branches, optionally filtered by name."""
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            q = f'name ~ "{escape_bbql(options.query)}"' if options.query else None
            page = await self.client.get(
                api_path("repositories", workspace_slug, options.repo_slug, "refs", "branches"),
                params={
                    "q": q,
                    "sort": options.sort,
                    "pagelen": options.limit or self.default_page_size,
                    "page": options.cursor,
                },
            )
            return ControllerResponse(
                content=format_branches(
                    page, title=f"Branches in {workspace_slug}/{options.repo_slug}"
                )
            )
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Branches",
                    "operation": "list",
                    "source": f"{__name__}@list_branches",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def get_file_content(self, options: GetFileContentToolArgs) -> ControllerResponse:
        """
        Show the content of one file.

        Without a revision the repository's main branch is looked up first,
        which costs one extra request.
        """
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            revision = options.revision
            if not revision:
                repo = await self.client.get(
                    api_path("repositories", workspace_slug, options.repo_slug)
                )
                revision = (repo.get("mainbranch") or {}).get("name") or "HEAD"
                logger.debug(f"Using main branch {revision} for file lookup")

            file_path = options.file_path.strip("/")
            text = await self.client.get_text(
                api_path(
                    "repositories", workspace_slug, options.repo_slug,
                    "src", revision, *file_path.split("/"),
                )
            )
            return ControllerResponse(content=format_file_content(file_path, revision, text))
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "File",
                    "operation": "get",
                    "source": f"{__name__}@get_file_content",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error
