"""
Shared fixtures
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from bitbucket_mcp.schemas import ControllerResponse
from bitbucket_mcp.services import SearchHandlers


@pytest.fixture
def settings():
    """Settings stand-in with no default workspace configured."""
    mock = MagicMock()
    mock.bitbucket.base_url = "https://api.bitbucket.org/2.0"
    mock.bitbucket.username = "jdoe"
    mock.bitbucket.app_password = "app-secret"
    mock.bitbucket.default_workspace = None
    mock.bitbucket.timeout_seconds = 5.0
    mock.cache.enabled = True
    mock.cache.ttl_workspace = 60
    mock.log.level = "INFO"
    mock.log.format = "text"
    return mock


@pytest.fixture
def handlers():
    """Search handlers that record calls and return fixed responses."""
    mock = AsyncMock(spec=SearchHandlers)
    mock.search_code.return_value = ControllerResponse(content="code results")
    mock.search_content.return_value = ControllerResponse(content="content results")
    mock.search_repositories.return_value = ControllerResponse(content="repository results")
    mock.search_pull_requests.return_value = ControllerResponse(content="pull request results")
    return mock


@pytest.fixture
def no_default_workspace():
    return AsyncMock(return_value=None)


@pytest.fixture
def client():
    """BitbucketClient stand-in."""
    mock = MagicMock()
    mock.get = AsyncMock(return_value={"values": []})
    return mock
