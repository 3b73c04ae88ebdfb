"""
Unit Tests for the Search Controller
"""

import pytest
from unittest.mock import AsyncMock

from bitbucket_mcp.controllers import SearchController
from bitbucket_mcp.exceptions import BitbucketApiError, ControllerError
from bitbucket_mcp.schemas import ContentType, ControllerResponse, SearchRequest
from bitbucket_mcp.utils.defaults import DEFAULT_PAGE_SIZE

WORKSPACE_ERROR = (
    "Error: Please provide a workspace to search in "
    "(or ensure a default workspace is configured)."
)
REPOSITORY_ERROR = "Error: Repository is required for pull request search."


class TestDispatch:
    """Routing to scope handlers."""

    @pytest.mark.asyncio
    async def test_code_search_uses_default_page_size(self, handlers, no_default_workspace):
        """Code scope goes to the code handler with defaults applied."""
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(
            SearchRequest(query="TODO", scope="code", workspace_slug="myteam")
        )

        assert result.content == "code results"
        handlers.search_code.assert_awaited_once_with(
            "myteam", None, "TODO", DEFAULT_PAGE_SIZE, None,
            language=None, extension=None,
        )
        no_default_workspace.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_scope_defaults_to_code(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        await controller.search(SearchRequest(query="TODO", workspace_slug="myteam"))

        handlers.search_code.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_explicit_values_are_kept(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        await controller.search(
            SearchRequest(
                query="TODO",
                workspace_slug="myteam",
                repo_slug="api",
                limit=5,
                cursor="3",
                language="python",
                extension="py",
            )
        )

        handlers.search_code.assert_awaited_once_with(
            "myteam", "api", "TODO", 5, "3", language="python", extension="py"
        )

    @pytest.mark.asyncio
    async def test_scope_is_case_insensitive(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        await controller.search(
            SearchRequest(query="x", scope="CONTENT", workspace_slug="myteam")
        )

        handlers.search_content.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("scope", ["repos", "repositories", "Repos"])
    async def test_repository_aliases(self, handlers, no_default_workspace, scope):
        """All repository aliases reach the same handler with the same args."""
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(
            SearchRequest(query="api", scope=scope, workspace_slug="myteam")
        )

        assert result.content == "repository results"
        handlers.search_repositories.assert_awaited_once_with(
            "myteam", None, "api", DEFAULT_PAGE_SIZE, None
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("scope", ["prs", "pullrequests"])
    async def test_pull_request_aliases(self, handlers, no_default_workspace, scope):
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(
            SearchRequest(query="bug", scope=scope, workspace_slug="myteam", repo_slug="api")
        )

        assert result.content == "pull request results"
        handlers.search_pull_requests.assert_awaited_once_with(
            "myteam", "api", "bug", DEFAULT_PAGE_SIZE, None
        )

    @pytest.mark.asyncio
    async def test_handler_response_is_passed_through(self, handlers, no_default_workspace):
        response = ControllerResponse(content="exact")
        handlers.search_code.return_value = response
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(SearchRequest(query="x", workspace_slug="myteam"))

        assert result is response


class TestContentType:
    """Content type coercion before content search."""

    @pytest.mark.asyncio
    async def test_known_content_type_becomes_enum(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        await controller.search(
            SearchRequest(query="x", scope="content", workspace_slug="myteam", content_type="WIKI")
        )

        kwargs = handlers.search_content.await_args.kwargs
        assert kwargs["content_type"] is ContentType.WIKI

    @pytest.mark.asyncio
    async def test_unknown_content_type_passes_through(self, handlers, no_default_workspace):
        """Unrecognized types are lower-cased, not rejected."""
        controller = SearchController(handlers, no_default_workspace)

        await controller.search(
            SearchRequest(query="x", scope="content", workspace_slug="myteam", content_type="Blog")
        )

        assert handlers.search_content.await_args.kwargs["content_type"] == "blog"


class TestInBandErrors:
    """User-correctable problems are returned, never raised."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("scope", ["prs", "pullrequests", "PRS"])
    async def test_pull_request_search_requires_repository(self, handlers, no_default_workspace, scope):
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(
            SearchRequest(query="bug", scope=scope, workspace_slug="myteam")
        )

        assert result.content == REPOSITORY_ERROR
        handlers.search_pull_requests.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_scope(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(
            SearchRequest(query="x", scope="Issues", workspace_slug="myteam")
        )

        assert result.content == (
            'Error: Unknown search scope "Issues". '
            "Supported types are: code, content, repositories, pullrequests."
        )
        assert not handlers.method_calls

    @pytest.mark.asyncio
    async def test_missing_workspace_without_default(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(SearchRequest(query="TODO"))

        assert result.content == WORKSPACE_ERROR
        no_default_workspace.assert_awaited_once()
        handlers.search_code.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_workspace_checked_before_scope(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search(SearchRequest(query="x", scope="nonsense"))

        assert result.content == WORKSPACE_ERROR

    @pytest.mark.asyncio
    async def test_no_options_at_all(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        result = await controller.search()

        assert result.content == WORKSPACE_ERROR


class TestDefaultWorkspace:
    """Falling back to the default workspace."""

    @pytest.mark.asyncio
    async def test_default_workspace_is_used(self, handlers):
        resolver = AsyncMock(return_value="defaultteam")
        controller = SearchController(handlers, resolver)

        await controller.search(SearchRequest(query="TODO"))

        assert handlers.search_code.await_args.args[0] == "defaultteam"

    @pytest.mark.asyncio
    async def test_caller_options_are_not_mutated(self, handlers):
        resolver = AsyncMock(return_value="defaultteam")
        controller = SearchController(handlers, resolver)
        options = SearchRequest(query="TODO")

        await controller.search(options)

        assert options.workspace_slug is None
        assert options.scope is None
        assert options.limit is None


class TestRaisedErrors:
    """Unexpected failures are wrapped and raised."""

    @pytest.mark.asyncio
    async def test_handler_failure_raises_controller_error(self, handlers, no_default_workspace):
        handlers.search_code.side_effect = BitbucketApiError("upstream exploded", status_code=500)
        controller = SearchController(handlers, no_default_workspace)

        with pytest.raises(ControllerError) as exc_info:
            await controller.search(SearchRequest(query="TODO", workspace_slug="myteam"))

        error = exc_info.value
        assert error.status_code == 500
        assert "upstream exploded" in error.message
        assert error.context["entity_type"] == "Search"
        assert error.context["operation"] == "search"
        assert error.context["source"].endswith("search_controller@search")
        assert error.context["additional_info"] == {"query": "TODO", "workspace_slug": "myteam"}
        assert isinstance(error.__cause__, BitbucketApiError)

    @pytest.mark.asyncio
    async def test_resolver_failure_raises_controller_error(self, handlers):
        resolver = AsyncMock(side_effect=RuntimeError("config unreadable"))
        controller = SearchController(handlers, resolver)

        with pytest.raises(ControllerError) as exc_info:
            await controller.search(SearchRequest(query="TODO"))

        assert "config unreadable" in exc_info.value.message
        assert exc_info.value.context["additional_info"] == {"query": "TODO"}


class TestResolveParams:
    """Defaulting behaviour in isolation."""

    def test_defaults_fill_only_missing_fields(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)

        params = controller.resolve_params(SearchRequest(query="x", limit=7))

        assert params.scope == "code"
        assert params.limit == 7

    def test_fully_specified_request_is_unchanged(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace)
        request = SearchRequest(
            workspace_slug="myteam", query="x", scope="content", limit=3, cursor=2
        )

        params = controller.resolve_params(request)

        assert params.workspace_slug == "myteam"
        assert params.scope == "content"
        assert params.limit == 3
        assert params.cursor == 2

    def test_custom_page_size(self, handlers, no_default_workspace):
        controller = SearchController(handlers, no_default_workspace, default_page_size=10)

        assert controller.resolve_params(SearchRequest(query="x")).limit == 10
