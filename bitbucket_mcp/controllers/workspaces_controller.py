"""
Controllers - Workspaces

List the user's workspaces and show workspace details.
"""

import logging

from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.schemas.workspaces import GetWorkspaceToolArgs, ListWorkspacesToolArgs
from bitbucket_mcp.services.bitbucket_client import BitbucketClient, api_path
from bitbucket_mcp.services.formatters import format_workspace_details, format_workspaces
from bitbucket_mcp.utils.defaults import DEFAULT_PAGE_SIZE
from bitbucket_mcp.utils.error_handling import handle_controller_error

logger = logging.getLogger(__name__)


class WorkspacesController:
    """Workspace listing and lookup."""

    def __init__(self, client: BitbucketClient, default_page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.default_page_size = default_page_size

    async def list_workspaces(self, options: ListWorkspacesToolArgs) -> ControllerResponse:
        """List workspaces the authenticated user is a member of."""
        try:
            page = await self.client.get(
                "/user/permissions/workspaces",
                params={
                    "pagelen": options.limit or self.default_page_size,
                    "page": options.cursor,
                },
            )
            return ControllerResponse(content=format_workspaces(page))
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Workspaces",
                    "operation": "list",
                    "source": f"{__name__}@list_workspaces",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def get_workspace(self, options: GetWorkspaceToolArgs) -> ControllerResponse:
        """Show details for one workspace."""
        try:
            workspace = await self.client.get(api_path("workspaces", options.workspace_slug))
            return ControllerResponse(content=format_workspace_details(workspace))
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Workspace",
                    "operation": "get",
                    "source": f"{__name__}@get_workspace",
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error
