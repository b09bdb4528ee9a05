"""Widget services, singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from filedock.config import settings

if TYPE_CHECKING:
    import httpx

    from filedock.services.remote_files import RemoteFileService
    from filedock.services.sync_engine import SyncEngine

logger = logging.getLogger(__name__)

_remote_service: RemoteFileService | None = None
_sync_engine: SyncEngine | None = None


async def init_services(
    transport: httpx.AsyncBaseTransport | None = None,
    public_url: str | None = None,
) -> None:
    """Create the remote client and sync engine, then load the file list."""
    global _remote_service, _sync_engine

    from filedock.services.remote_files import RemoteFileService
    from filedock.services.sync_engine import SyncEngine

    _remote_service = RemoteFileService(
        base_url=settings.remote_url,
        public_url=public_url or settings.remote_public_url,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    )
    _sync_engine = SyncEngine(
        _remote_service,
        placeholder_text=settings.placeholder_text,
        name_max_length=settings.display_name_max_length,
    )

    result = await _sync_engine.initialize()
    if result.ok:
        logger.info("Sync engine initialized with %d file(s)", len(_sync_engine.files))
    else:
        logger.warning("Sync engine started without a file list: %s", result.message)


async def shutdown_services() -> None:
    """Drop the service singletons."""
    global _remote_service, _sync_engine
    _sync_engine = None
    _remote_service = None


def get_remote_service() -> RemoteFileService:
    if _remote_service is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _remote_service


def get_sync_engine() -> SyncEngine:
    if _sync_engine is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _sync_engine
