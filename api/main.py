# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-13
# Description: main.py
# -----------------------------------------------------------------------------
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.AppContainer import AppContainer
from api.routers import (
    assistant,
    auth,
    companies,
    contacts,
    health,
    interactions,
    notes,
    notifications,
    search,
    stats,
    threads,
)
from services.common import EntityNotFoundError

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"

ROUTERS = (
    health.router,
    auth.router,
    companies.router,
    contacts.router,
    interactions.router,
    notes.router,
    notifications.router,
    search.router,
    stats.router,
    threads.router,
    assistant.router,
)


def create_app(container: Optional[AppContainer] = None) -> FastAPI:
    """
    Build the API. Without a container one is built from the environment
    when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.container is None:
            app.state.container = AppContainer()
        app.state.container.startup()
        yield
        app.state.container.shutdown()

    app = FastAPI(title="CRM Assistant API", lifespan=lifespan)
    app.state.container = container

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    @app.exception_handler(EntityNotFoundError)
    async def entity_not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        logger.warning("%s %s -> 404 (%s)", request.method, request.url.path, exc)
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("CRM_API_HOST", "127.0.0.1"),
        port=int(os.getenv("CRM_API_PORT", "8000")),
        reload=False,
    )
