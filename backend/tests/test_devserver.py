"""Tests for the in-memory dev file service."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def files_client(file_service):
    transport = ASGITransport(app=file_service)
    async with AsyncClient(transport=transport, base_url="http://files.test") as c:
        yield c


@pytest.mark.asyncio
async def test_list_shape(files_client, file_store):
    file_store.put("a.txt", b"abc", uploaded_at=1700000000)
    resp = await files_client.get("/fileslist")
    assert resp.json() == [{"fileName": "a.txt", "fileSize": 3, "uploadDate": 1700000000}]


@pytest.mark.asyncio
async def test_upload_strips_client_path(files_client, file_store):
    resp = await files_client.post("/upload", files={"file": ("docs/a.txt", b"a", "text/plain")})
    assert resp.json()["fileName"] == "a.txt"
    assert "a.txt" in file_store


@pytest.mark.asyncio
async def test_upload_duplicate_refused(files_client, file_store):
    file_store.put("a.txt", b"a")
    resp = await files_client.post("/upload", files={"file": ("a.txt", b"b", "text/plain")})
    assert resp.json() == {"err": 403}
    assert file_store.get("a.txt").content == b"a"


@pytest.mark.asyncio
async def test_download(files_client, file_store):
    file_store.put("a b.txt", b"hello", content_type="text/plain")
    resp = await files_client.get("/download", params={"file": "a b.txt"})
    assert resp.status_code == 200
    assert resp.content == b"hello"
    assert "attachment" in resp.headers["content-disposition"]


@pytest.mark.asyncio
async def test_download_missing(files_client):
    resp = await files_client.get("/download", params={"file": "missing.txt"})
    assert resp.status_code == 404
