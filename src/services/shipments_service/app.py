# src/services/shipments_service/app.py
"""
FastAPI приложение для Shipments Service.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.common.constants import TypeMsg
from src.common.logger import log_info
from src.config import settings
from src.services.shipments_service import dependencies
from src.services.shipments_service.routes import router
from src.shared.models.common import HealthStatus


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Жизненный цикл приложения."""
    await log_info("Shipments Service запускается...", type_msg=TypeMsg.INFO)

    await dependencies.init_dependencies()

    yield

    await dependencies.close_dependencies()
    await log_info("Shipments Service остановлен", type_msg=TypeMsg.INFO)


app = FastAPI(
    title="Shipments Service",
    description="Приём и сопровождение грузовых отправлений",
    version=settings.system.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса."""
    deps = {}

    try:
        db = dependencies.get_db()
        deps["postgres"] = "healthy" if await db.health_check() else "unhealthy"
    except RuntimeError:
        deps["postgres"] = "unhealthy"

    if settings.shipments.PUBLISH_EVENTS:
        event_bus = dependencies.get_event_bus()
        healthy = event_bus is not None and await event_bus.health_check()
        deps["rabbitmq"] = "healthy" if healthy else "unhealthy"

    overall = "healthy" if all(v == "healthy" for v in deps.values()) else "degraded"

    return HealthStatus(
        service="shipments_service",
        status=overall,
        version=settings.system.VERSION,
        dependencies=deps,
    )
