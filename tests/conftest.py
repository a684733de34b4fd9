"""Pytest fixtures: a mock Jellyfin server and sessions logged in against it."""

import pytest
import pytest_asyncio

from jellyfin_cli.api import Session
from jellyfin_cli.models.config import Credentials

from .mock_jellyfin import MockJellyfin


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="alice", password="s3cret")


@pytest_asyncio.fixture
async def jellyfin():
    mock = MockJellyfin()
    await mock.start()
    yield mock
    await mock.close()


@pytest_asyncio.fixture
async def session(jellyfin, credentials):
    """An authenticated session against the mock server."""
    session = await Session.create(jellyfin.base_url, credentials)
    yield session
    await session.close()
