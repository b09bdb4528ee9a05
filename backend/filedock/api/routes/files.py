"""File widget JSON API: view, refresh, upload, delete."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from filedock.api.deps import get_engine, get_upload_control, read_selection
from filedock.schemas.widget import SyncResultOut, WidgetView
from filedock.services.sync_engine import SyncEngine, SyncOutcome, SyncResult, UploadControl

router = APIRouter()

OUTCOME_STATUS: dict[SyncOutcome, int] = {
    SyncOutcome.OK: 200,
    SyncOutcome.DECLINED: 200,
    SyncOutcome.PRECONDITION_FAILED: 409,
    SyncOutcome.BUSINESS_ERROR: 422,
    SyncOutcome.TRANSPORT_ERROR: 502,
}


class DeleteBody(BaseModel):
    file: str
    confirmed: bool = False


def _result_response(
    engine: SyncEngine,
    result: SyncResult,
    status_code: int | None = None,
    control: UploadControl | None = None,
) -> JSONResponse:
    body = SyncResultOut(
        outcome=result.outcome.value,
        message=result.message,
        error_code=result.error_code,
        entry=result.entry,
        view=engine.view(control, result),
    )
    return JSONResponse(
        status_code=status_code or OUTCOME_STATUS[result.outcome],
        content=body.model_dump(mode="json"),
    )


@router.get("", response_model=WidgetView)
async def get_view(engine: SyncEngine = Depends(get_engine)):
    """Current widget state."""
    return engine.view()


@router.post("/refresh")
async def refresh(engine: SyncEngine = Depends(get_engine)):
    """Rebuild the local registry from the remote file list."""
    result = await engine.initialize()
    return _result_response(engine, result)


@router.post("/upload")
async def upload(
    file: UploadFile | None = File(None),
    engine: SyncEngine = Depends(get_engine),
    control: UploadControl = Depends(get_upload_control),
):
    """Upload one file, refusing names already in the registry."""
    selected = await read_selection(file)
    result = await engine.upload(selected, control=control)
    status_code = 400 if selected is None and result.outcome == SyncOutcome.PRECONDITION_FAILED else None
    return _result_response(engine, result, status_code, control)


@router.post("/delete")
async def delete(body: DeleteBody, engine: SyncEngine = Depends(get_engine)):
    """Delete one file. ``confirmed`` is the user's answer to the yes/no gate."""
    result = await engine.delete(body.file, lambda _name: body.confirmed)
    return _result_response(engine, result)
