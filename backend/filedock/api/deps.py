"""FastAPI dependency injection: the sync engine and uploaded selections."""

from __future__ import annotations

from fastapi import UploadFile

from filedock.services import get_sync_engine
from filedock.services.sync_engine import SelectedFile, SyncEngine, UploadControl


async def get_engine() -> SyncEngine:
    """The process-wide sync engine."""
    return get_sync_engine()


def get_upload_control() -> UploadControl:
    """Selection control for one submit.

    The browser sends its chosen file with every submit, so each request
    gets its own control and concurrent clients never share one.
    """
    return UploadControl()


async def read_selection(file: UploadFile | None) -> SelectedFile | None:
    """Turn a multipart file field into a selection.

    Browsers submit an unnamed, empty part when nothing was chosen.
    """
    if file is None or not file.filename:
        return None
    content = await file.read()
    return SelectedFile(
        name=file.filename,
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )
