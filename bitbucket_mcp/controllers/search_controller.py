"""
Controllers - Search

Normalizes search options and routes them to the handler for the
requested scope.

Two kinds of failure come out of here. Input the user can fix (no
workspace, no repository for pull request search, unknown scope) is
returned as a normal response whose content starts with "Error: ".
Anything unexpected is raised as a ControllerError with context.
"""

import logging
from typing import Optional

from bitbucket_mcp.controllers.common import WorkspaceResolver, resolve_workspace_slug
from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.schemas.search import (
    ResolvedSearchParams,
    SearchRequest,
    SearchScope,
    coerce_content_type,
    resolve_scope,
)
from bitbucket_mcp.services.search_handlers import SearchHandlers
from bitbucket_mcp.utils.defaults import DEFAULT_PAGE_SIZE, apply_defaults
from bitbucket_mcp.utils.error_handling import handle_controller_error

logger = logging.getLogger(__name__)

SOURCE = f"{__name__}@search"

WORKSPACE_REQUIRED = (
    "Error: Please provide a workspace to search in "
    "(or ensure a default workspace is configured)."
)
REPOSITORY_REQUIRED = "Error: Repository is required for pull request search."
UNKNOWN_SCOPE = (
    'Error: Unknown search scope "{scope}". '
    "Supported types are: code, content, repositories, pullrequests."
)


class SearchController:
    """Dispatches search requests to scope handlers."""

    def __init__(
        self,
        handlers: SearchHandlers,
        workspace_resolver: WorkspaceResolver,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.handlers = handlers
        self.workspace_resolver = workspace_resolver
        self.default_page_size = default_page_size

    def resolve_params(self, options: SearchRequest) -> ResolvedSearchParams:
        """
        Apply defaults and coerce the content type.

        Only omitted fields are defaulted; the scope is left as given so an
        unknown value can be reported back verbatim.
        """
        params = apply_defaults(
            options,
            {"scope": SearchScope.CODE.value, "limit": self.default_page_size},
        )
        data = params.model_dump()
        data["content_type"] = coerce_content_type(params.content_type)
        return ResolvedSearchParams(**data)

    async def search(self, options: Optional[SearchRequest] = None) -> ControllerResponse:
        """
        Search Bitbucket code, content, repositories or pull requests.

        Args:
            options: Caller-supplied search options

        Returns:
            Handler output, or an in-band "Error: ..." response

        Raises:
            ControllerError: Workspace lookup or the handler failed
        """
        options = options or SearchRequest()

        try:
            workspace_slug = await resolve_workspace_slug(
                options.workspace_slug, self.workspace_resolver
            )
            request = options
            if workspace_slug != options.workspace_slug:
                request = options.model_copy(update={"workspace_slug": workspace_slug})

            params = self.resolve_params(request)
            logger.debug(f"Search options (with defaults): {params.model_dump(exclude_none=True)}")

            if not params.workspace_slug:
                logger.warning("No workspace provided for search")
                return ControllerResponse(content=WORKSPACE_REQUIRED)

            return await self._dispatch(params)
        except Exception as error:
            raise handle_controller_error(
                error,
                {
                    "entity_type": "Search",
                    "operation": "search",
                    "source": SOURCE,
                    "additional_info": options.model_dump(mode="json", exclude_none=True),
                },
            ) from error

    async def _dispatch(self, params: ResolvedSearchParams) -> ControllerResponse:
        scope = resolve_scope(params.scope)

        if scope is SearchScope.CODE:
            return await self.handlers.search_code(
                params.workspace_slug,
                params.repo_slug,
                params.query,
                params.limit,
                params.cursor,
                language=params.language,
                extension=params.extension,
            )

        if scope is SearchScope.CONTENT:
            return await self.handlers.search_content(
                params.workspace_slug,
                params.repo_slug,
                params.query,
                params.limit,
                params.cursor,
                content_type=params.content_type,
            )

        if scope is SearchScope.REPOSITORIES:
            return await self.handlers.search_repositories(
                params.workspace_slug,
                params.repo_slug,
                params.query,
                params.limit,
                params.cursor,
            )

        if scope is SearchScope.PULLREQUESTS:
            if not params.repo_slug:
                return ControllerResponse(content=REPOSITORY_REQUIRED)
            return await self.handlers.search_pull_requests(
                params.workspace_slug,
                params.repo_slug,
                params.query,
                params.limit,
                params.cursor,
            )

        logger.warning(f"Unknown search scope: {params.scope}")
        return ControllerResponse(content=UNKNOWN_SCOPE.format(scope=params.scope))
