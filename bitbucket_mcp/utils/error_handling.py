"""
Utilities - Error Handling

Converts arbitrary failures into ControllerError at the controller boundary
and renders them for the CLI and MCP tool surfaces.
"""

import logging
import sys
from typing import Any, Dict, NoReturn

from bitbucket_mcp.exceptions import (
    AuthenticationError,
    BitbucketMcpError,
    ControllerError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def handle_controller_error(
    error: BaseException,
    context: Dict[str, Any],
) -> ControllerError:
    """
    Wrap an exception raised inside a controller with contextual metadata.

    The caller re-raises the returned error (`raise ... from error`).
    A ControllerError that is already wrapped keeps its message and only
    gains the context keys it does not have yet.

    Args:
        error: Exception caught at the controller boundary
        context: entity_type, operation, source and additional_info

    Returns:
        ControllerError carrying the merged context
    """
    if isinstance(error, ControllerError):
        for key, value in context.items():
            error.context.setdefault(key, value)
        return error

    entity_type = context.get("entity_type", "Resource")
    operation = context.get("operation", "request")
    cause = error.message if isinstance(error, BitbucketMcpError) else str(error)
    cause = cause or type(error).__name__
    status_code = getattr(error, "status_code", None)

    if isinstance(error, NotFoundError):
        message = f"{entity_type} not found: {cause}"
    elif isinstance(error, AuthenticationError):
        message = f"Bitbucket authentication failed during {operation}: {cause}"
    else:
        message = f"Failed to {operation} ({entity_type}): {cause}"

    merged = dict(context)
    merged["error_type"] = type(error).__name__
    if isinstance(error, BitbucketMcpError):
        for key, value in error.context.items():
            merged.setdefault(key, value)

    logger.error(
        message,
        extra={
            "entity_type": entity_type,
            "operation": operation,
            "source": context.get("source"),
            "error_type": type(error).__name__,
            "status_code": status_code,
        },
    )
    return ControllerError(message, context=merged, status_code=status_code)


def format_error(error: BaseException) -> str:
    """Render an exception as a single user-facing line."""
    if isinstance(error, BitbucketMcpError):
        message = error.message
    else:
        message = str(error) or type(error).__name__

    status_code = getattr(error, "status_code", None)
    if status_code:
        return f"Error: {message} (HTTP {status_code})"
    return f"Error: {message}"


def handle_cli_error(error: BaseException) -> NoReturn:
    """Print a formatted error to stderr and exit with status 1."""
    logger.debug("CLI command failed", exc_info=error)
    print(format_error(error), file=sys.stderr)
    sys.exit(1)
