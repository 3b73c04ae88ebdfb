"""
Controllers - Shared Helpers

Workspace defaulting shared by every controller.
"""

import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

WorkspaceResolver = Callable[[], Awaitable[Optional[str]]]

WORKSPACE_REQUIRED = (
    "Error: Please provide a workspace (or ensure a default workspace is configured)."
)


async def resolve_workspace_slug(
    workspace_slug: Optional[str],
    resolver: WorkspaceResolver,
) -> Optional[str]:
    """Return the caller's workspace, falling back to the default one."""
    if workspace_slug:
        return workspace_slug

    default = await resolver()
    if default:
        logger.debug(f"Using default workspace: {default}")
    return default
