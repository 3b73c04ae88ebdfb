"""
Controllers - Pull Requests

List pull requests in a repository, show pull request details and page
through pull request comments.
"""

import logging
from typing import Any, Dict, Optional

from bitbucket_mcp.controllers.common import (
    WORKSPACE_REQUIRED,
    WorkspaceResolver,
    resolve_workspace_slug,
)
from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.schemas.pullrequests import (
    GetPullRequestToolArgs,
    ListPullRequestCommentsToolArgs,
    ListPullRequestsToolArgs,
    PullRequestState,
)
from bitbucket_mcp.services.bitbucket_client import BitbucketClient, api_path, escape_bbql
from bitbucket_mcp.services.formatters import (
    format_pull_request_comments,
    format_pull_request_details,
    format_pull_requests,
)
from bitbucket_mcp.utils.defaults import DEFAULT_PAGE_SIZE
from bitbucket_mcp.utils.error_handling import handle_controller_error

logger = logging.getLogger(__name__)

ALL_STATES = [state.value for state in PullRequestState]


class PullRequestsController:
    """Pull request listing, lookup and comments."""

    def __init__(
        self,
        client: BitbucketClient,
        workspace_resolver: WorkspaceResolver,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.client = client
        self.workspace_resolver = workspace_resolver
        self.default_page_size = default_page_size

    async def list_pull_requests(self, options: ListPullRequestsToolArgs) -> ControllerResponse:
        """
        List pull requests in a repository.

        All states are requested unless `state` narrows it down.
        """
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                logger.warning("No workspace provided for pull request listing")
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            q: Optional[str] = None
            if options.query:
                literal = escape_bbql(options.query)
                q = f'(title ~ "{literal}" OR description ~ "{literal}")'

            params: Dict[str, Any] = {
                "q": q,
                "state": options.state.value if options.state else ALL_STATES,
                "pagelen": options.limit or self.default_page_size,
                "page": options.cursor,
            }
            page = await self.client.get(
                api_path("repositories", workspace_slug, options.repo_slug, "pullrequests"),
                params=params,
            )
            return ControllerResponse(
                content=format_pull_requests(
                    page, title=f"Pull Requests in {workspace_slug}/{options.repo_slug}"
                )
            )
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Pull Requests",
                    "operation": "list",
                    "source": f"{__name__}@list_pull_requests",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def get_pull_request(self, options: GetPullRequestToolArgs) -> ControllerResponse:
        """
        Show one pull request.

        With `include_comments` the first page of comments is appended;
        list_comments pages through the rest.
        """
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            pr = await self.client.get(
                api_path(
                    "repositories", workspace_slug, options.repo_slug,
                    "pullrequests", options.pr_id,
                )
            )

            comments_page: Optional[Dict[str, Any]] = None
            if options.include_comments:
                comments_page = await self.client.get(
                    api_path(
                        "repositories", workspace_slug, options.repo_slug,
                        "pullrequests", options.pr_id, "comments",
                    ),
                    params={"pagelen": self.default_page_size},
                )

            return ControllerResponse(content=format_pull_request_details(pr, comments_page))
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Pull Request",
                    "operation": "get",
                    "source": f"{__name__}@get_pull_request",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def list_comments(self, options: ListPullRequestCommentsToolArgs) -> ControllerResponse:
        """List one page of comments on a pull request."""
        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            if not workspace_slug:
                logger.warning("No workspace provided for pull request comments")
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            page = await self.client.get(
                api_path(
                    "repositories", workspace_slug, options.repo_slug,
                    "pullrequests", options.pr_id, "comments",
                ),
                params={
                    "pagelen": options.limit or self.default_page_size,
                    "page": options.cursor,
                },
            )
            return ControllerResponse(
                content=format_pull_request_comments(
                    page, title=f"Comments on Pull Request #{options.pr_id}"
                )
            )
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Pull Request Comments",
                    "operation": "list",
                    "source": f"{__name__}@list_comments",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error
