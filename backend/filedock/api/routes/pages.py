"""Widget HTML pages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import HTMLResponse

from filedock.api.deps import get_engine, get_upload_control, read_selection
from filedock.config import settings
from filedock.render import render_confirm_page, render_page
from filedock.services.sync_engine import SyncEngine, SyncResult, UploadControl

router = APIRouter()


def _page(engine: SyncEngine, result: SyncResult | None = None) -> HTMLResponse:
    # The reloaded page starts with an empty file input, so submit stays disabled
    return HTMLResponse(render_page(engine.view(result=result), title=settings.app_name))


@router.get("/", response_class=HTMLResponse)
async def index(engine: SyncEngine = Depends(get_engine)):
    """Page load: rebuild from the server, then render."""
    result = await engine.initialize()
    return _page(engine, result)


@router.post("/upload", response_class=HTMLResponse)
async def upload(
    file: UploadFile | None = File(None),
    engine: SyncEngine = Depends(get_engine),
    control: UploadControl = Depends(get_upload_control),
):
    result = await engine.upload(await read_selection(file), control=control)
    return _page(engine, result)


@router.get("/delete", response_class=HTMLResponse)
async def confirm_delete(file: str):
    """Yes/no gate shown before any delete request."""
    return HTMLResponse(render_confirm_page(file, title=settings.app_name))


@router.post("/delete", response_class=HTMLResponse)
async def delete(
    file: str = Form(...),
    confirm: str = Form("no"),
    engine: SyncEngine = Depends(get_engine),
):
    result = await engine.delete(file, lambda _name: confirm == "yes")
    return _page(engine, result)
