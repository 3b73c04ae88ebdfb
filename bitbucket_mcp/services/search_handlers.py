"""
Services - Search Handlers

One handler per search scope. Each issues a single Bitbucket API request
and formats the returned page.
"""

import logging
from typing import List, Optional, Union

from bitbucket_mcp.config import get_settings
from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.schemas.search import ContentType
from bitbucket_mcp.services.bitbucket_client import BitbucketClient, api_path, escape_bbql
from bitbucket_mcp.services.formatters import (
    format_code_search_results,
    format_content_search_results,
    format_pull_requests,
    format_repositories,
)

logger = logging.getLogger(__name__)

Cursor = Optional[Union[str, int]]


def build_search_query(
    query: Optional[str],
    repo_slug: Optional[str] = None,
    language: Optional[str] = None,
    extension: Optional[str] = None,
) -> str:
    """
    Compose a Bitbucket search query with repo/lang/ext modifiers.

    Example:
        build_search_query("TODO", "api", "python") == "TODO repo:api lang:python"
    """
    terms = [query or ""]
    if repo_slug:
        terms.append(f"repo:{repo_slug}")
    if language:
        terms.append(f"lang:{language}")
    if extension:
        terms.append(f"ext:{extension.lstrip('.')}")
    return " ".join(t for t in terms if t)


def _text_filter(fields: List[str], query: Optional[str]) -> Optional[str]:
    """BBQL clause matching `query` against any of `fields`."""
    if not query:
        return None
    literal = escape_bbql(query)
    return "(" + " OR ".join(f'{field} ~ "{literal}"' for field in fields) + ")"


class SearchHandlers:
    """Scope-specific search handlers backed by the Bitbucket API."""

    def __init__(self, settings=None, client: Optional[BitbucketClient] = None):
        self.settings = settings or get_settings()
        self.client = client or BitbucketClient(self.settings)

    async def search_code(
        self,
        workspace_slug: str,
        repo_slug: Optional[str],
        query: Optional[str],
        limit: int,
        cursor: Cursor = None,
        language: Optional[str] = None,
        extension: Optional[str] = None,
    ) -> ControllerResponse:
        """
        Search file contents across a workspace.

        Args:
            workspace_slug: Workspace to search in
            repo_slug: Restrict to one repository
            query: Search text
            limit: Page size
            cursor: Page number from a previous response
            language: Programming language filter
            extension: File extension filter

        Returns:
            Formatted code matches
        """
        search_query = build_search_query(query, repo_slug, language, extension)
        logger.debug(f"Code search in {workspace_slug}: {search_query}")

        page = await self.client.get(
            api_path("workspaces", workspace_slug, "search", "code"),
            params={
                "search_query": search_query,
                "pagelen": limit,
                "page": cursor,
            },
        )
        return ControllerResponse(content=format_code_search_results(page, query or ""))

    async def search_content(
        self,
        workspace_slug: str,
        repo_slug: Optional[str],
        query: Optional[str],
        limit: int,
        cursor: Cursor = None,
        content_type: Optional[Union[ContentType, str]] = None,
    ) -> ControllerResponse:
        """
        Search workspace content (wikis, issues, ...) by content type.

        The content type is forwarded without validation.
        """
        if isinstance(content_type, ContentType):
            content_type = content_type.value

        page = await self.client.get(
            api_path("workspaces", workspace_slug, "search", "content"),
            params={
                "search_query": build_search_query(query, repo_slug),
                "content_type": content_type,
                "pagelen": limit,
                "page": cursor,
            },
        )
        return ControllerResponse(content=format_content_search_results(page, query or ""))

    async def search_repositories(
        self,
        workspace_slug: str,
        repo_slug: Optional[str],
        query: Optional[str],
        limit: int,
        cursor: Cursor = None,
    ) -> ControllerResponse:
        """Search repositories by name or description."""
        clauses = [_text_filter(["name", "description"], query)]
        if repo_slug:
            clauses.append(f'slug = "{escape_bbql(repo_slug)}"')
        bbql = " AND ".join(c for c in clauses if c) or None

        page = await self.client.get(
            api_path("repositories", workspace_slug),
            params={"q": bbql, "pagelen": limit, "page": cursor},
        )
        return ControllerResponse(
            content=format_repositories(
                page, title=f'Repository Search Results: "{query or ""}"'
            )
        )

    async def search_pull_requests(
        self,
        workspace_slug: str,
        repo_slug: str,
        query: Optional[str],
        limit: int,
        cursor: Cursor = None,
    ) -> ControllerResponse:
        """Search pull requests in one repository, across all states."""
        clauses = [_text_filter(["title", "description"], query)]
        bbql = " AND ".join(c for c in clauses if c) or None

        page = await self.client.get(
            api_path("repositories", workspace_slug, repo_slug, "pullrequests"),
            params={
                "q": bbql,
                "state": ["OPEN", "MERGED", "DECLINED", "SUPERSEDED"],
                "pagelen": limit,
                "page": cursor,
            },
        )
        return ControllerResponse(
            content=format_pull_requests(
                page, title=f'Pull Request Search Results: "{query or ""}"'
            )
        )
