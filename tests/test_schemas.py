"""
Unit Tests for Argument Schemas and Validation
"""

import pytest

from bitbucket_mcp.schemas import (
    ContentType,
    GetCommitHistoryToolArgs,
    GetFileContentToolArgs,
    GetPullRequestToolArgs,
    ListBranchesToolArgs,
    ListPullRequestCommentsToolArgs,
    ListPullRequestsToolArgs,
    PullRequestState,
    ResolvedSearchParams,
    SearchRequest,
    SearchScope,
    SearchToolArgs,
    ValidationIssue,
    coerce_content_type,
    format_validation_issues,
    resolve_scope,
    validate_args,
)
from bitbucket_mcp.utils.defaults import apply_defaults


class TestSearchToolArgs:
    """Validation of bb_search arguments."""

    def test_minimal_arguments(self):
        args, issues = validate_args(SearchToolArgs, {"query": "TODO"})

        assert issues == []
        assert args.scope is SearchScope.CODE
        assert args.limit is None
        assert args.workspace_slug is None

    def test_pull_requests_require_repo_slug(self):
        args, issues = validate_args(
            SearchToolArgs, {"query": "bug", "scope": "pullrequests"}
        )

        assert args is None
        assert len(issues) == 1
        assert issues[0].path == ["repo_slug"]
        assert issues[0].message == 'repo_slug is required when scope is "pullrequests"'

    def test_pull_requests_with_repo_slug(self):
        args, issues = validate_args(
            SearchToolArgs,
            {"query": "bug", "scope": "pullrequests", "repo_slug": "api"},
        )

        assert issues == []
        assert args.repo_slug == "api"

    def test_repo_slug_optional_for_other_scopes(self):
        _, issues = validate_args(SearchToolArgs, {"query": "x", "scope": "repositories"})

        assert issues == []

    def test_empty_query_rejected(self):
        _, issues = validate_args(SearchToolArgs, {"query": ""})

        assert [issue.path for issue in issues] == [["query"]]

    def test_missing_query_rejected(self):
        _, issues = validate_args(SearchToolArgs, {})

        assert ["query"] in [issue.path for issue in issues]

    def test_unknown_scope_rejected(self):
        _, issues = validate_args(SearchToolArgs, {"query": "x", "scope": "issues"})

        assert issues[0].path == ["scope"]

    @pytest.mark.parametrize("limit", [0, -1, 101])
    def test_limit_out_of_range(self, limit):
        _, issues = validate_args(SearchToolArgs, {"query": "x", "limit": limit})

        assert issues[0].path == ["limit"]

    @pytest.mark.parametrize("limit", [1, 25, 100])
    def test_limit_in_range(self, limit):
        args, issues = validate_args(SearchToolArgs, {"query": "x", "limit": limit})

        assert issues == []
        assert args.limit == limit

    @pytest.mark.parametrize("cursor", ["abc", 3])
    def test_cursor_passes_through(self, cursor):
        args, _ = validate_args(SearchToolArgs, {"query": "x", "cursor": cursor})

        assert args.cursor == cursor


class TestScopeAndContentType:
    """Scope aliases and content type coercion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("code", SearchScope.CODE),
            ("content", SearchScope.CONTENT),
            ("repos", SearchScope.REPOSITORIES),
            ("repositories", SearchScope.REPOSITORIES),
            ("prs", SearchScope.PULLREQUESTS),
            ("PullRequests", SearchScope.PULLREQUESTS),
            ("issues", None),
            (None, None),
        ],
    )
    def test_resolve_scope(self, value, expected):
        assert resolve_scope(value) is expected

    def test_coerce_known_content_type(self):
        assert coerce_content_type("Issue") is ContentType.ISSUE

    def test_coerce_unknown_content_type(self):
        assert coerce_content_type("Snippet") == "snippet"

    def test_coerce_missing_content_type(self):
        assert coerce_content_type(None) is None
        assert coerce_content_type("") is None

    def test_resolved_params_keep_enum_members(self):
        params = ResolvedSearchParams(scope="content", limit=25, content_type="wiki")

        assert params.content_type is ContentType.WIKI

    def test_resolved_params_keep_unknown_strings(self):
        params = ResolvedSearchParams(scope="content", limit=25, content_type="snippet")

        assert params.content_type == "snippet"


class TestApplyDefaults:
    """Defaulting is non-destructive and idempotent."""

    DEFAULTS = {"scope": "code", "limit": 25}

    def test_fills_missing_fields(self):
        result = apply_defaults(SearchRequest(query="x"), self.DEFAULTS)

        assert result.scope == "code"
        assert result.limit == 25

    def test_explicit_values_win(self):
        request = SearchRequest(query="x", scope="content", limit=5)

        result = apply_defaults(request, self.DEFAULTS)

        assert result == request

    def test_idempotent(self):
        once = apply_defaults(SearchRequest(query="x"), self.DEFAULTS)
        twice = apply_defaults(once, self.DEFAULTS)

        assert once == twice

    def test_input_not_mutated(self):
        request = SearchRequest(query="x")

        apply_defaults(request, self.DEFAULTS)

        assert request.scope is None
        assert request.limit is None


class TestOtherToolArgs:
    """Workspace, repository and pull request schemas."""

    def test_pull_request_id_required(self):
        _, issues = validate_args(GetPullRequestToolArgs, {"repo_slug": "api", "pr_id": ""})

        assert issues[0].path == ["pr_id"]

    @pytest.mark.parametrize("pr_id", ["abc", "../../user", "42/comments", "4 2"])
    def test_pull_request_id_must_be_numeric(self, pr_id):
        _, issues = validate_args(GetPullRequestToolArgs, {"repo_slug": "api", "pr_id": pr_id})

        assert [issue.path for issue in issues] == [["pr_id"]]

    def test_comment_listing_takes_pagination(self):
        args, issues = validate_args(
            ListPullRequestCommentsToolArgs,
            {"repo_slug": "api", "pr_id": "42", "limit": 50, "cursor": "2"},
        )

        assert issues == []
        assert args.limit == 50
        assert args.cursor == "2"

    def test_file_path_required(self):
        _, issues = validate_args(GetFileContentToolArgs, {"repo_slug": "api"})

        assert [issue.path for issue in issues] == [["file_path"]]

    def test_commit_history_filters_optional(self):
        args, issues = validate_args(GetCommitHistoryToolArgs, {"repo_slug": "api"})

        assert issues == []
        assert args.revision is None
        assert args.path is None

    def test_branch_listing_limit_bounds(self):
        _, issues = validate_args(ListBranchesToolArgs, {"repo_slug": "api", "limit": 0})

        assert issues[0].path == ["limit"]

    def test_include_comments_defaults_false(self):
        args, _ = validate_args(GetPullRequestToolArgs, {"repo_slug": "api", "pr_id": "42"})

        assert args.include_comments is False

    def test_pull_request_state_enum(self):
        args, issues = validate_args(
            ListPullRequestsToolArgs, {"repo_slug": "api", "state": "MERGED"}
        )

        assert issues == []
        assert args.state is PullRequestState.MERGED

    def test_invalid_pull_request_state(self):
        _, issues = validate_args(
            ListPullRequestsToolArgs, {"repo_slug": "api", "state": "OPENED"}
        )

        assert issues[0].path == ["state"]


class TestFormatValidationIssues:

    def test_formats_each_issue(self):
        text = format_validation_issues([
            ValidationIssue(path=["repo_slug"], message="is required"),
            ValidationIssue(path=[], message="bad input"),
        ])

        assert text.splitlines() == [
            "Error: Invalid arguments:",
            "- repo_slug: is required",
            "- bad input",
        ]
