"""In-memory remote file service used in dev mode and by the tests.

Implements the same four endpoints and ``err`` codes as the real backend,
keeping file bodies in memory only.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response

from filedock.schemas.files import (
    ERR_EMPTY_UPLOAD,
    ERR_OK,
    ERR_REFUSED,
    DeleteRequest,
    DeleteResponse,
    RemoteFileInfo,
    UploadResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    name: str
    content: bytes
    content_type: str
    uploaded_at: int

    def info(self) -> RemoteFileInfo:
        # Stored values go out as-is, the way a real backend reports them
        return RemoteFileInfo.model_construct(
            file_name=self.name,
            file_size=len(self.content),
            upload_date=self.uploaded_at,
        )


class InMemoryFileStore:
    """Flat, insertion-ordered file collection."""

    def __init__(self):
        self._files: dict[str, StoredFile] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __len__(self) -> int:
        return len(self._files)

    def list(self) -> list[StoredFile]:
        return list(self._files.values())

    def get(self, name: str) -> StoredFile | None:
        return self._files.get(name)

    def put(
        self,
        name: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        uploaded_at: int | None = None,
    ) -> StoredFile:
        stored = StoredFile(
            name=name,
            content=content,
            content_type=content_type,
            uploaded_at=int(time.time()) if uploaded_at is None else uploaded_at,
        )
        self._files[name] = stored
        return stored

    def delete(self, name: str) -> bool:
        return self._files.pop(name, None) is not None


def create_file_service(store: InMemoryFileStore | None = None) -> FastAPI:
    """Build the dev file service app around ``store``."""
    store = store if store is not None else InMemoryFileStore()
    app = FastAPI(title="FileDock dev file service")
    app.state.store = store

    @app.get("/fileslist")
    async def files_list():
        return [f.info().model_dump(by_alias=True) for f in store.list()]

    @app.post("/upload")
    async def upload(file: UploadFile = File(...)):
        content = await file.read()
        name = PurePosixPath((file.filename or "").replace("\\", "/")).name
        if not name:
            logger.warning("[DEV] Upload without a file name")
            return UploadResponse(err=ERR_REFUSED).model_dump(by_alias=True, exclude_none=True)
        if not content:
            logger.warning("[DEV] Empty upload: %s", name)
            return UploadResponse(err=ERR_EMPTY_UPLOAD).model_dump(by_alias=True, exclude_none=True)
        if name in store:
            logger.warning("[DEV] Duplicate upload refused: %s", name)
            return UploadResponse(err=ERR_REFUSED).model_dump(by_alias=True, exclude_none=True)

        stored = store.put(name, content, file.content_type or "application/octet-stream")
        logger.info("[DEV] Stored %s (%d bytes)", name, len(content))
        info = stored.info()
        return UploadResponse(
            err=ERR_OK,
            file_name=info.file_name,
            file_size=info.file_size,
            upload_date=info.upload_date,
        ).model_dump(by_alias=True)

    @app.post("/delete")
    async def delete(body: DeleteRequest):
        if not store.delete(body.file):
            logger.warning("[DEV] Delete of unknown file: %s", body.file)
            return DeleteResponse(err=ERR_REFUSED).model_dump()
        logger.info("[DEV] Deleted %s", body.file)
        return DeleteResponse(err=ERR_OK).model_dump()

    @app.get("/download")
    async def download(file: str):
        stored = store.get(file)
        if stored is None:
            raise HTTPException(404, "File not found")
        return Response(
            content=stored.content,
            media_type=stored.content_type,
            headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(stored.name)}"},
        )

    return app
