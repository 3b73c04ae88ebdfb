"""
Bitbucket MCP Server - Exceptions

Exception hierarchy shared by the HTTP client, controllers, CLI and tools.
Every exception carries an optional context dictionary for logging and for
rendering errors to the caller.
"""

from typing import Any, Dict, Optional


class BitbucketMcpError(Exception):
    """
    Base exception for the Bitbucket MCP server.

    Attributes:
        message: Human-readable error message
        context: Additional context (operation, identifiers, caller options)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class BitbucketApiError(BitbucketMcpError):
    """
    The Bitbucket API returned an error or could not be reached.

    `status_code` is None for transport failures (DNS, connection reset,
    timeout) where no HTTP response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code


class AuthenticationError(BitbucketApiError):
    """Credentials were rejected (401) or lack permission (403)."""


class NotFoundError(BitbucketApiError):
    """The requested workspace, repository or pull request does not exist."""


class ControllerError(BitbucketMcpError):
    """
    Unexpected failure inside a controller.

    Raised at the controller boundary with the entity type, operation,
    source identifier and original caller options attached, so the CLI
    and tool layers can render it.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code
