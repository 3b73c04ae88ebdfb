"""
Services - Markdown Formatters

Render raw Bitbucket API payloads as Markdown for CLI and tool output.
"""

from typing import Any, Dict, List, Optional

from bitbucket_mcp.services.bitbucket_client import next_cursor


def _href(item: Dict[str, Any], rel: str = "html") -> Optional[str]:
    return ((item.get("links") or {}).get(rel) or {}).get("href")


def _date(value: Optional[str]) -> str:
    return value[:10] if value else "unknown"


def format_pagination(page: Dict[str, Any], shown: int) -> str:
    """
    Footer describing what was shown and how to get the next page.

    Args:
        page: Raw paginated response (values, size, next, ...)
        shown: Number of items rendered from this page
    """
    total = page.get("size")
    lines = ["---"]
    if total is not None:
        lines.append(f"*Showing {shown} of {total} total items.*")
    else:
        lines.append(f"*Showing {shown} items.*")

    cursor = next_cursor(page)
    if cursor:
        lines.append(f"*More results are available. Use cursor `{cursor}` to see the next page.*")
    return "\n".join(lines)


def _with_footer(body: List[str], page: Dict[str, Any], shown: int) -> str:
    body.append("")
    body.append(format_pagination(page, shown))
    return "\n".join(body)


def format_code_search_results(page: Dict[str, Any], query: str) -> str:
    """Format a code search page."""
    values = page.get("values") or []
    if not values:
        return f'No code matches found for "{query}".'

    lines = [f'# Code Search Results: "{query}"', ""]
    for result in values:
        file_info = result.get("file") or {}
        path = file_info.get("path", "unknown")
        repo = ((file_info.get("commit") or {}).get("repository") or {}).get("full_name")
        heading = f"## {repo}: `{path}`" if repo else f"## `{path}`"
        lines.append(heading)
        lines.append(f"- **Matches**: {result.get('content_match_count', 0)}")

        for match in result.get("content_matches") or []:
            lines.append("```")
            for line in match.get("lines") or []:
                text = "".join(seg.get("text", "") for seg in line.get("segments") or [])
                lines.append(f"{line.get('line', '')}: {text}")
            lines.append("```")
        lines.append("")

    return _with_footer(lines, page, len(values))


def format_content_search_results(page: Dict[str, Any], query: str) -> str:
    """Format a content search page."""
    values = page.get("values") or []
    if not values:
        return f'No content matches found for "{query}".'

    lines = [f'# Content Search Results: "{query}"', ""]
    for result in values:
        title = result.get("title") or result.get("name") or result.get("path") or "Untitled"
        lines.append(f"## {title}")
        if result.get("type"):
            lines.append(f"- **Type**: {result['type']}")
        url = _href(result)
        if url:
            lines.append(f"- **URL**: {url}")
        lines.append("")

    return _with_footer(lines, page, len(values))


def _repository_lines(repo: Dict[str, Any]) -> List[str]:
    lines = [f"## {repo.get('full_name') or repo.get('name', 'unknown')}"]
    if repo.get("description"):
        lines.append(f"- **Description**: {repo['description']}")
    lines.append(f"- **Private**: {'Yes' if repo.get('is_private') else 'No'}")
    if repo.get("language"):
        lines.append(f"- **Language**: {repo['language']}")
    lines.append(f"- **Updated**: {_date(repo.get('updated_on'))}")
    url = _href(repo)
    if url:
        lines.append(f"- **URL**: {url}")
    return lines


def format_repositories(page: Dict[str, Any], title: str = "Repositories") -> str:
    """Format a page of repositories."""
    values = page.get("values") or []
    if not values:
        return "No repositories found."

    lines = [f"# {title}", ""]
    for repo in values:
        lines.extend(_repository_lines(repo))
        lines.append("")

    return _with_footer(lines, page, len(values))


def format_repository_details(repo: Dict[str, Any]) -> str:
    """Format a single repository."""
    lines = [f"# Repository: {repo.get('full_name') or repo.get('name', 'unknown')}", ""]
    lines.extend(_repository_lines(repo)[1:])
    if repo.get("mainbranch"):
        lines.append(f"- **Main Branch**: {repo['mainbranch'].get('name')}")
    if repo.get("project"):
        lines.append(f"- **Project**: {repo['project'].get('name')}")
    lines.append(f"- **Created**: {_date(repo.get('created_on'))}")
    return "\n".join(lines)


def _pull_request_lines(pr: Dict[str, Any]) -> List[str]:
    source = ((pr.get("source") or {}).get("branch") or {}).get("name", "?")
    destination = ((pr.get("destination") or {}).get("branch") or {}).get("name", "?")
    author = (pr.get("author") or {}).get("display_name", "Unknown")
    lines = [
        f"## #{pr.get('id')}: {pr.get('title', 'No title')}",
        f"- **State**: {pr.get('state', 'unknown')}",
        f"- **Author**: {author}",
        f"- **Branches**: {source} → {destination}",
        f"- **Updated**: {_date(pr.get('updated_on'))}",
    ]
    url = _href(pr)
    if url:
        lines.append(f"- **URL**: {url}")
    return lines


def format_pull_requests(page: Dict[str, Any], title: str = "Pull Requests") -> str:
    """Format a page of pull requests."""
    values = page.get("values") or []
    if not values:
        return "No pull requests found."

    lines = [f"# {title}", ""]
    for pr in values:
        lines.extend(_pull_request_lines(pr))
        lines.append("")

    return _with_footer(lines, page, len(values))


def _comment_lines(comments: List[Dict[str, Any]]) -> List[str]:
    lines: List[str] = []
    for comment in comments:
        if comment.get("deleted"):
            continue
        author = (comment.get("user") or {}).get("display_name", "Unknown")
        location = ""
        inline = comment.get("inline")
        if inline:
            location = f" on `{inline.get('path')}` line {inline.get('to') or inline.get('from')}"
        lines.append(f"### {author}{location} ({_date(comment.get('created_on'))})")
        lines.append(((comment.get("content") or {}).get("raw") or "").strip())
        lines.append("")
    return lines


def format_pull_request_details(
    pr: Dict[str, Any],
    comments_page: Optional[Dict[str, Any]] = None,
) -> str:
    """Format a single pull request, optionally with its first page of comments."""
    lines = [f"# Pull Request #{pr.get('id')}: {pr.get('title', 'No title')}", ""]
    lines.extend(_pull_request_lines(pr)[1:])
    lines.append(f"- **Created**: {_date(pr.get('created_on'))}")
    lines.append(f"- **Comments**: {pr.get('comment_count', 0)}")

    description = (pr.get("description") or "").strip()
    lines.extend(["", "## Description", "", description or "*No description provided.*"])

    if comments_page is not None:
        comments = comments_page.get("values") or []
        lines.extend(["", "## Comments", ""])
        if not comments:
            lines.append("*No comments.*")
        lines.extend(_comment_lines(comments))
        cursor = next_cursor(comments_page)
        if cursor:
            lines.append(
                f"*More comments are available. List them with cursor `{cursor}`.*"
            )

    return "\n".join(lines).rstrip() + "\n"


def format_pull_request_comments(page: Dict[str, Any], title: str) -> str:
    """Format a page of pull request comments."""
    values = page.get("values") or []
    if not values:
        return "No comments found."

    lines = [f"# {title}", ""]
    lines.extend(_comment_lines(values))
    return _with_footer(lines, page, len(values))


def format_workspaces(page: Dict[str, Any]) -> str:
    """Format a page of workspace memberships."""
    values = page.get("values") or []
    if not values:
        return "No workspaces found."

    lines = ["# Bitbucket Workspaces", ""]
    for membership in values:
        workspace = membership.get("workspace") or membership
        lines.append(f"## {workspace.get('name') or workspace.get('slug')}")
        lines.append(f"- **Slug**: {workspace.get('slug')}")
        if membership.get("permission"):
            lines.append(f"- **Permission**: {membership['permission']}")
        url = _href(workspace)
        if url:
            lines.append(f"- **URL**: {url}")
        lines.append("")

    return _with_footer(lines, page, len(values))


def format_workspace_details(workspace: Dict[str, Any]) -> str:
    """Format a single workspace."""
    lines = [
        f"# Workspace: {workspace.get('name') or workspace.get('slug')}",
        "",
        f"- **Slug**: {workspace.get('slug')}",
        f"- **UUID**: {workspace.get('uuid')}",
        f"- **Private**: {'Yes' if workspace.get('is_private') else 'No'}",
        f"- **Created**: {_date(workspace.get('created_on'))}",
    ]
    url = _href(workspace)
    if url:
        lines.append(f"- **URL**: {url}")
    return "\n".join(lines)


def _commit_author(commit: Dict[str, Any]) -> str:
    author = commit.get("author") or {}
    user = author.get("user") or {}
    return user.get("display_name") or author.get("raw") or "Unknown"


def format_commits(page: Dict[str, Any], title: str = "Commit History") -> str:
    """Format a page of commits."""
    values = page.get("values") or []
    if not values:
        return "No commits found."

    lines = [f"# {title}", ""]
    for commit in values:
        message = (commit.get("message") or "").strip()
        summary = message.splitlines()[0] if message else "No message"
        lines.append(f"## {(commit.get('hash') or '')[:12]}: {summary}")
        lines.append(f"- **Author**: {_commit_author(commit)}")
        lines.append(f"- **Date**: {_date(commit.get('date'))}")
        url = _href(commit)
        if url:
            lines.append(f"- **URL**: {url}")
        lines.append("")

    return _with_footer(lines, page, len(values))


def format_branches(page: Dict[str, Any], title: str = "Branches") -> str:
    """Format a page of branches."""
    values = page.get("values") or []
    if not values:
        return "No branches found."

    lines = [f"# {title}", ""]
    for branch in values:
        target = branch.get("target") or {}
        lines.append(f"## {branch.get('name', 'unknown')}")
        if target.get("hash"):
            lines.append(f"- **Latest Commit**: {target['hash'][:12]}")
        lines.append(f"- **Updated**: {_date(target.get('date'))}")
        url = _href(branch)
        if url:
            lines.append(f"- **URL**: {url}")
        lines.append("")

    return _with_footer(lines, page, len(values))


def format_file_content(file_path: str, revision: str, text: str) -> str:
    """Format raw file content as a fenced code block."""
    name = file_path.rsplit("/", 1)[-1]
    extension = name.rsplit(".", 1)[-1] if "." in name else ""
    return "\n".join([
        f"# File: `{file_path}`",
        "",
        f"- **Revision**: {revision}",
        "",
        f"```{extension}",
        text.rstrip("\n"),
        "```",
    ])
