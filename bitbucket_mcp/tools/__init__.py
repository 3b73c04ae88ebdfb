"""
Tools Module - MCP Tool Implementations

Search, workspace, repository and pull request tools.
"""

from bitbucket_mcp.tools import search
from bitbucket_mcp.tools import workspaces
from bitbucket_mcp.tools import repositories
from bitbucket_mcp.tools import pullrequests

__all__ = [
    "search",
    "workspaces",
    "repositories",
    "pullrequests",
]
