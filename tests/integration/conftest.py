"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from langtool.client.clients import ServerClient

# Skip all integration tests unless RUN_LANGTOOL_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LANGTOOL_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_LANGTOOL_NETWORK_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def client():
    """Client for the server named by the environment, or the public one."""
    async with ServerClient.from_env_or_default() as client:
        yield client
