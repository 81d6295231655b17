#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker Web Dashboard - FastAPI Application
Трекер ежедневных целей с анализом динамики по периодам
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from config import config
from database.manager import DatabaseError, DocumentStore
from models.record import ValidationError
from services.auth import AuthError
from shared.models import HealthCheck
from dashboard import dependencies
from dashboard.api import charts, tracker

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """Создание FastAPI приложения; store подменяется в тестах"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info("🚀 Запуск GrowthTracker Dashboard...")
        app.state.start_time = time.time()

        try:
            if store is None:
                config.ensure_directories()
            dependencies.init_components(store)
            logger.info(f"🌐 Dashboard доступен на: http://{config.server.host}:{config.server.port}")
        except (DatabaseError, OSError) as e:
            # Трекер отключается, сервер продолжает работать
            logger.error(f"❌ Ошибка инициализации хранилища: {e}")

        yield

        logger.info("🛑 Остановка Dashboard...")
        dependencies.cleanup_components()

    app = FastAPI(
        title="GrowthTracker Dashboard",
        description="Ежедневные цели, история и сравнение периодов",
        version=APP_VERSION,
        docs_url="/api/docs" if config.server.debug_mode else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)})

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error(f"❌ Ошибка хранилища: {exc}")
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})

    # ===== ROUTES =====

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        return HealthCheck(
            status="healthy",
            service="growthtracker-dashboard",
            version=APP_VERSION,
            timestamp=time.time(),
        )

    app.include_router(tracker.router)
    app.include_router(charts.router)

    return app


app = create_app()
