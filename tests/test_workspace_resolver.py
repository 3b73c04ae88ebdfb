"""
Unit Tests for the Default Workspace Resolver
"""

import pytest

from bitbucket_mcp.exceptions import AuthenticationError
from bitbucket_mcp.services import DefaultWorkspaceResolver

MEMBERSHIPS = {
    "values": [
        {"permission": "owner", "workspace": {"slug": "firstteam", "name": "First Team"}},
    ]
}


class TestDefaultWorkspaceResolver:

    @pytest.mark.asyncio
    async def test_configured_workspace_wins(self, settings, client):
        settings.bitbucket.default_workspace = "configured"
        resolver = DefaultWorkspaceResolver(settings, client)

        assert await resolver.get_default_workspace() == "configured"
        client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_workspace_from_account(self, settings, client):
        client.get.return_value = MEMBERSHIPS
        resolver = DefaultWorkspaceResolver(settings, client)

        assert await resolver() == "firstteam"
        client.get.assert_awaited_once_with(
            "/user/permissions/workspaces", params={"pagelen": 1}
        )

    @pytest.mark.asyncio
    async def test_lookup_is_cached(self, settings, client):
        client.get.return_value = MEMBERSHIPS
        resolver = DefaultWorkspaceResolver(settings, client)

        await resolver.get_default_workspace()
        await resolver.get_default_workspace()

        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_clear_forces_new_lookup(self, settings, client):
        client.get.return_value = MEMBERSHIPS
        resolver = DefaultWorkspaceResolver(settings, client)

        await resolver.get_default_workspace()
        resolver.clear()
        await resolver.get_default_workspace()

        assert client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_cache_disabled(self, settings, client):
        settings.cache.enabled = False
        client.get.return_value = MEMBERSHIPS
        resolver = DefaultWorkspaceResolver(settings, client)

        await resolver.get_default_workspace()
        await resolver.get_default_workspace()

        assert client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_api_failure_means_no_default(self, settings, client):
        client.get.side_effect = AuthenticationError("bad credentials", status_code=401)
        resolver = DefaultWorkspaceResolver(settings, client)

        assert await resolver.get_default_workspace() is None

    @pytest.mark.asyncio
    async def test_no_workspaces(self, settings, client):
        resolver = DefaultWorkspaceResolver(settings, client)

        assert await resolver.get_default_workspace() is None
