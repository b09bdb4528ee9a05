"""Remote file service client: list, upload, delete and download links."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from filedock.config import settings
from filedock.schemas.files import (
    DeleteRequest,
    DeleteResponse,
    RemoteFileInfo,
    UploadResponse,
)

logger = logging.getLogger(__name__)


class RemoteServiceError(Exception):
    """Base error for the remote file service."""


class TransportError(RemoteServiceError):
    """Network failure, non-2xx status or malformed response body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteFileService:
    """HTTP client for the remote file store.

    Endpoints: GET /fileslist, POST /upload, POST /delete, GET /download.
    """

    def __init__(
        self,
        base_url: str | None = None,
        public_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.remote_url).rstrip("/")
        self._public_url = (public_url or self._base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and return the decoded JSON body."""
        try:
            async with self._client() as client:
                resp = await client.request(method, path, **kwargs)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TransportError(f"{method} {path} returned HTTP {status}", status) from e
        except (httpx.HTTPError, OSError) as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(f"{method} {path} returned a malformed body") from e

    async def list_files(self) -> list[RemoteFileInfo]:
        """Fetch the remote file list in server order.

        A body that is valid JSON but not a list is treated as empty.
        """
        data = await self._request("GET", "/fileslist")
        if not isinstance(data, list):
            logger.warning("File list is not a JSON array (%s), treating as empty", type(data).__name__)
            return []
        try:
            return [RemoteFileInfo.model_validate(item) for item in data]
        except ValidationError as e:
            raise TransportError(f"Malformed file list entry: {e.errors()[0]['msg']}") from e

    async def upload_file(
        self,
        name: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> UploadResponse:
        """Upload raw bytes as multipart field ``file`` with the original name."""
        files = {"file": (name, content, content_type)}
        data = await self._request("POST", "/upload", files=files)
        try:
            result = UploadResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError("Malformed upload response") from e
        if result.ok and (
            result.file_name is None or result.file_size is None or result.upload_date is None
        ):
            raise TransportError("Upload response is missing the stored file fields")
        return result

    async def delete_file(self, name: str) -> DeleteResponse:
        """Ask the server to delete ``name``."""
        payload = DeleteRequest(file=name).model_dump()
        data = await self._request("POST", "/delete", json=payload)
        try:
            return DeleteResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError("Malformed delete response") from e

    def download_url(self, name: str) -> str:
        """Direct download link for ``name``."""
        return str(httpx.URL(f"{self._public_url}/download", params={"file": name}))
