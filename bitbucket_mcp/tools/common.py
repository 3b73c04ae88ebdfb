"""
Tools - Shared Helpers

Argument validation and error translation used by every MCP tool.
"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Type, TypeVar

from fastmcp.exceptions import ToolError
from pydantic import BaseModel

from bitbucket_mcp.exceptions import ControllerError
from bitbucket_mcp.schemas.common import ControllerResponse
from bitbucket_mcp.schemas.validation import format_validation_issues, validate_args
from bitbucket_mcp.utils.error_handling import format_error

ArgsT = TypeVar("ArgsT", bound=BaseModel)


def compact(**values: Any) -> Dict[str, Any]:
    """Drop arguments the caller did not supply."""
    return {key: value for key, value in values.items() if value is not None}


async def run_tool(
    schema: Type[ArgsT],
    payload: Mapping[str, Any],
    call: Callable[[ArgsT], Awaitable[ControllerResponse]],
) -> str:
    """
    Validate tool arguments, call the controller and return its content.

    Invalid arguments are returned as an "Error: Invalid arguments" text
    result. Controller failures are raised as ToolError so the transport
    marks the result as an error.
    """
    args, issues = validate_args(schema, payload)
    if issues:
        return format_validation_issues(issues)

    try:
        response = await call(args)
    except ControllerError as error:
        raise ToolError(format_error(error)) from error
    return response.content
