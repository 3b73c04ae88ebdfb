"""
Services - Default Workspace Resolver

Looks up the workspace to use when a caller does not name one.
"""

import logging
import threading
from typing import Optional

from cachetools import TTLCache

from bitbucket_mcp.config import get_settings
from bitbucket_mcp.services.bitbucket_client import BitbucketClient

logger = logging.getLogger(__name__)

_CACHE_KEY = "default_workspace"


class DefaultWorkspaceResolver:
    """
    Resolves the default workspace from configuration or the account.

    Resolution order:
    1. BITBUCKET_DEFAULT_WORKSPACE
    2. The first workspace the authenticated user belongs to

    A successful lookup is cached for the configured TTL. Failures are
    logged and reported as "no default"; they are never raised.
    """

    def __init__(self, settings=None, client: Optional[BitbucketClient] = None):
        self.settings = settings or get_settings()
        self.client = client or BitbucketClient(self.settings)
        self._lock = threading.Lock()
        self._cache = TTLCache(maxsize=1, ttl=self.settings.cache.ttl_workspace)

    async def get_default_workspace(self) -> Optional[str]:
        """
        Return the default workspace slug, or None if there is none.
        """
        configured = self.settings.bitbucket.default_workspace
        if configured:
            return configured

        if self.settings.cache.enabled:
            with self._lock:
                cached = self._cache.get(_CACHE_KEY)
            if cached:
                return cached

        try:
            data = await self.client.get(
                "/user/permissions/workspaces", params={"pagelen": 1}
            )
        except Exception as e:
            logger.warning(f"Could not look up default workspace: {e}")
            return None

        values = data.get("values") or []
        if not values:
            logger.warning("No workspaces found for the authenticated user")
            return None

        slug = (values[0].get("workspace") or {}).get("slug")
        if not slug:
            return None

        logger.debug(f"Resolved default workspace: {slug}")
        if self.settings.cache.enabled:
            with self._lock:
                self._cache[_CACHE_KEY] = slug
        return slug

    def clear(self) -> None:
        """Forget the cached workspace."""
        with self._lock:
            self._cache.clear()

    async def __call__(self) -> Optional[str]:
        return await self.get_default_workspace()
