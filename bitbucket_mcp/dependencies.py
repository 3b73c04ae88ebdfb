"""
Process-wide collaborators shared by the CLI and the MCP tools.

The default workspace resolver is created once so its lookup is cached
for the lifetime of the process.
"""

from functools import lru_cache

from bitbucket_mcp.config import Settings, get_settings
from bitbucket_mcp.controllers import (
    PullRequestsController,
    RepositoriesController,
    SearchController,
    WorkspacesController,
)
from bitbucket_mcp.services import BitbucketClient, DefaultWorkspaceResolver, SearchHandlers


@lru_cache
def get_app_settings() -> Settings:
    return get_settings()


@lru_cache
def get_client() -> BitbucketClient:
    return BitbucketClient(get_app_settings())


@lru_cache
def get_workspace_resolver() -> DefaultWorkspaceResolver:
    return DefaultWorkspaceResolver(get_app_settings(), get_client())


def get_search_controller() -> SearchController:
    return SearchController(
        handlers=SearchHandlers(get_app_settings(), get_client()),
        workspace_resolver=get_workspace_resolver(),
    )


def get_workspaces_controller() -> WorkspacesController:
    return WorkspacesController(get_client())


def get_repositories_controller() -> RepositoriesController:
    return RepositoriesController(get_client(), get_workspace_resolver())


def get_pullrequests_controller() -> PullRequestsController:
    return PullRequestsController(get_client(), get_workspace_resolver())
