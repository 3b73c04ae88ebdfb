"""
Controllers Module

Validation-free orchestration between the CLI/tool surfaces and the
Bitbucket services.
"""

from bitbucket_mcp.controllers.search_controller import SearchController
from bitbucket_mcp.controllers.workspaces_controller import WorkspacesController
from bitbucket_mcp.controllers.repositories_controller import RepositoriesController
from bitbucket_mcp.controllers.pullrequests_controller import PullRequestsController

__all__ = [
    "SearchController",
    "WorkspacesController",
    "RepositoriesController",
    "PullRequestsController",
]
