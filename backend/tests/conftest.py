"""Test fixtures: in-memory file service, remote client, engine and app client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from filedock.devserver import InMemoryFileStore, create_file_service
from filedock.main import create_app
from filedock.services import init_services, shutdown_services
from filedock.services.remote_files import RemoteFileService
from filedock.services.sync_engine import SyncEngine

PLACEHOLDER = "Upload your first file!"
REMOTE_URL = "http://files.test"


@pytest.fixture
def file_store():
    return InMemoryFileStore()


@pytest.fixture
def file_service(file_store):
    return create_file_service(file_store)


@pytest.fixture
def remote(file_service):
    """Remote client wired to the in-memory file service."""
    return RemoteFileService(base_url=REMOTE_URL, transport=ASGITransport(app=file_service))


@pytest.fixture
def engine(remote):
    return SyncEngine(remote, placeholder_text=PLACEHOLDER, name_max_length=60)


@pytest.fixture
def mock_remote():
    """Remote client double with awaitable endpoints."""
    remote = MagicMock(spec=RemoteFileService)
    remote.base_url = REMOTE_URL
    remote.list_files = AsyncMock(return_value=[])
    remote.upload_file = AsyncMock()
    remote.delete_file = AsyncMock()
    remote.download_url.side_effect = lambda name: f"{REMOTE_URL}/download?file={name}"
    return remote


@pytest.fixture
def mock_engine(mock_remote):
    return SyncEngine(mock_remote, placeholder_text=PLACEHOLDER, name_max_length=60)


@pytest_asyncio.fixture
async def app(file_service):
    """Widget host with services pointed at the in-memory file service."""
    await init_services(transport=ASGITransport(app=file_service), public_url=REMOTE_URL)
    yield create_app()
    await shutdown_services()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
