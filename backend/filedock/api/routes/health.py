"""Health check."""

from fastapi import APIRouter

from filedock import __version__
from filedock.schemas.system import HealthResponse
from filedock.services import get_sync_engine
from filedock.services.sync_engine import SyncOutcome

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight check, including whether the last sync reached the remote."""
    last = get_sync_engine().last_result
    return HealthResponse(
        version=__version__,
        remote_reachable=last is None or last.outcome != SyncOutcome.TRANSPORT_ERROR,
    )


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
