"""
Services Module - Bitbucket Access Layer

HTTP client, default workspace lookup, search handlers and formatters.
"""

from bitbucket_mcp.services.bitbucket_client import BitbucketClient
from bitbucket_mcp.services.workspace_resolver import DefaultWorkspaceResolver
from bitbucket_mcp.services.search_handlers import SearchHandlers

__all__ = [
    "BitbucketClient",
    "DefaultWorkspaceResolver",
    "SearchHandlers",
]
