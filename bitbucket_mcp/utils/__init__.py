"""
Utilities Module

Defaults, error handling and logging helpers.
"""

from bitbucket_mcp.utils.defaults import DEFAULT_PAGE_SIZE, apply_defaults
from bitbucket_mcp.utils.error_handling import (
    format_error,
    handle_cli_error,
    handle_controller_error,
)
from bitbucket_mcp.utils.logging_config import configure_logging

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "apply_defaults",
    "format_error",
    "handle_cli_error",
    "handle_controller_error",
    "configure_logging",
]
