"""FileDock FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filedock import __version__
from filedock.config import settings
from filedock.services import init_services, shutdown_services

logger = logging.getLogger(__name__)

DEV_REMOTE_PREFIX = "/remote"


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # === STARTUP ===
    _setup_logging()

    transport: httpx.AsyncBaseTransport | None = None
    public_url: str | None = None
    dev_service = getattr(app.state, "dev_file_service", None)
    if dev_service is not None:
        transport = httpx.ASGITransport(app=dev_service)
        public_url = DEV_REMOTE_PREFIX
        logger.info("[DEV] Using in-process file service at %s", DEV_REMOTE_PREFIX)
    else:
        logger.info("Remote file service: %s", settings.remote_url)

    await init_services(transport=transport, public_url=public_url)
    logger.info("FileDock v%s started, listening on %s:%s", __version__, settings.host, settings.port)

    try:
        yield
    finally:
        # === SHUTDOWN ===
        await shutdown_services()
        logger.info("FileDock shutting down")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def create_app() -> FastAPI:
    """Application factory."""
    from filedock.api.routes import api_router
    from filedock.api.routes.pages import router as pages_router

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(pages_router, include_in_schema=False)

    # Dev mode: serve the in-memory file service from this process
    if settings.is_dev_mode:
        from filedock.devserver import create_file_service

        dev_service = create_file_service()
        app.state.dev_file_service = dev_service
        app.mount(DEV_REMOTE_PREFIX, dev_service, name="dev-file-service")
    else:
        app.state.dev_file_service = None

    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    uvicorn.run(
        "filedock.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
