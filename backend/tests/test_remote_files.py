"""Tests for the remote file service client."""

import httpx
import pytest

from filedock.services.remote_files import RemoteFileService, TransportError

REMOTE_URL = "http://files.test"


def _mock_remote(handler) -> RemoteFileService:
    return RemoteFileService(base_url=REMOTE_URL, transport=httpx.MockTransport(handler))


class TestAgainstFileService:
    @pytest.mark.asyncio
    async def test_list_empty(self, remote):
        assert await remote.list_files() == []

    @pytest.mark.asyncio
    async def test_list_in_server_order(self, remote, file_store):
        file_store.put("b.txt", b"bb", uploaded_at=1700000001)
        file_store.put("a.txt", b"a", uploaded_at=1700000000)

        files = await remote.list_files()
        assert [f.file_name for f in files] == ["b.txt", "a.txt"]
        assert files[0].file_size == 2
        assert files[0].upload_date == 1700000001

    @pytest.mark.asyncio
    async def test_upload_echoes_stored_file(self, remote, file_store):
        resp = await remote.upload_file("report.pdf", b"%PDF-1.7", "application/pdf")
        assert resp.ok
        assert resp.file_name == "report.pdf"
        assert resp.file_size == 8
        assert resp.upload_date > 0
        assert "report.pdf" in file_store

    @pytest.mark.asyncio
    async def test_upload_empty_is_business_error(self, remote):
        resp = await remote.upload_file("empty.txt", b"")
        assert not resp.ok
        assert resp.err == 400

    @pytest.mark.asyncio
    async def test_delete(self, remote, file_store):
        file_store.put("a.txt", b"a")
        resp = await remote.delete_file("a.txt")
        assert resp.ok
        assert "a.txt" not in file_store

    @pytest.mark.asyncio
    async def test_delete_unknown_is_business_error(self, remote):
        resp = await remote.delete_file("missing.txt")
        assert resp.err == 403


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_http_error_status(self):
        remote = _mock_remote(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(TransportError) as exc_info:
            await remote.list_files()
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        remote = _mock_remote(handler)
        with pytest.raises(TransportError) as exc_info:
            await remote.delete_file("a.txt")
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        remote = _mock_remote(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(TransportError):
            await remote.list_files()

    @pytest.mark.asyncio
    async def test_non_list_body_is_empty(self):
        remote = _mock_remote(lambda request: httpx.Response(200, json={"files": []}))
        assert await remote.list_files() == []

    @pytest.mark.asyncio
    async def test_malformed_list_item(self):
        remote = _mock_remote(lambda request: httpx.Response(200, json=[{"fileName": "a.txt"}]))
        with pytest.raises(TransportError):
            await remote.list_files()

    @pytest.mark.asyncio
    async def test_millisecond_upload_date_is_malformed(self):
        remote = _mock_remote(lambda request: httpx.Response(
            200, json=[{"fileName": "a.txt", "fileSize": 1, "uploadDate": 1700000000000}],
        ))
        with pytest.raises(TransportError):
            await remote.list_files()

    @pytest.mark.asyncio
    async def test_upload_echo_with_out_of_range_date(self):
        remote = _mock_remote(lambda request: httpx.Response(
            200, json={"err": 0, "fileName": "a.txt", "fileSize": 1, "uploadDate": -5},
        ))
        with pytest.raises(TransportError):
            await remote.upload_file("a.txt", b"a")

    @pytest.mark.asyncio
    async def test_upload_success_without_fields(self):
        remote = _mock_remote(lambda request: httpx.Response(200, json={"err": 0}))
        with pytest.raises(TransportError):
            await remote.upload_file("a.txt", b"a")

    @pytest.mark.asyncio
    async def test_delete_response_without_err(self):
        remote = _mock_remote(lambda request: httpx.Response(200, json={"ok": True}))
        with pytest.raises(TransportError):
            await remote.delete_file("a.txt")


class TestRequests:
    @pytest.mark.asyncio
    async def test_delete_sends_json_body(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = request.content
            return httpx.Response(200, json={"err": 0})

        await _mock_remote(handler).delete_file("a b.txt")
        assert seen["path"] == "/delete"
        assert b'"file"' in seen["body"]
        assert b"a b.txt" in seen["body"]

    @pytest.mark.asyncio
    async def test_upload_sends_multipart_file_field(self):
        seen = {}

        def handler(request):
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.read()
            return httpx.Response(
                200, json={"err": 0, "fileName": "a.txt", "fileSize": 3, "uploadDate": 1},
            )

        await _mock_remote(handler).upload_file("a.txt", b"abc")
        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="file"; filename="a.txt"' in seen["body"]


def test_download_url_encodes_name():
    remote = RemoteFileService(base_url=REMOTE_URL)
    url = remote.download_url("my report&v=2.pdf")
    parsed = httpx.URL(url)
    assert parsed.path == "/download"
    assert parsed.params["file"] == "my report&v=2.pdf"


def test_download_url_uses_public_url():
    remote = RemoteFileService(base_url="http://internal:1316", public_url="https://files.example.com/")
    assert remote.download_url("a.txt").startswith("https://files.example.com/download?")
