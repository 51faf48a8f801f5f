# agilesync/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agilesync.config import Settings, get_settings
from agilesync.dependencies import AppContainer
from agilesync.shared.api.middleware import CorrelationIdMiddleware
from agilesync.shared.database.engine import check_connection
from agilesync.shared.exceptions import register_exception_handlers
from agilesync.shared.logging import get_logger, setup_logging
from agilesync.identity.api.routes import admin_router, identity_router

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, container: Optional[AppContainer] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    container = container or AppContainer.build(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await container.startup()
        logger.info("Application started", app=settings.APP_NAME, environment=settings.ENVIRONMENT)
        try:
            yield
        finally:
            await container.shutdown()
            logger.info("Application stopped")

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
        swagger_ui_parameters={"persistAuthorization": True},
    )
    app.state.container = container

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    app.add_middleware(CorrelationIdMiddleware)

    # Routers
    app.include_router(identity_router)
    app.include_router(admin_router)

    # Centralized error handling → {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health(request: Request):
        db = await check_connection(request.app.state.container.engine)
        body = {"status": "ok" if db["healthy"] else "degraded", "checks": {"database": db}}
        code = status.HTTP_200_OK if db["healthy"] else status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(status_code=code, content=body)

    return app
