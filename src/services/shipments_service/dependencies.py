# src/services/shipments_service/dependencies.py
"""
Зависимости для Shipments Service.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Header, HTTPException, status

from src.common.constants import USER_ID_HEADER, USER_ROLE_HEADER, TypeMsg
from src.common.logger import log_error, log_info
from src.infra.database import DatabaseManager, close_db, init_db
from src.infra.event_bus import EventBus, close_event_bus, init_event_bus
from src.services.shipments_service.policy import KeywordDenylistPolicy
from src.services.shipments_service.repository import ShipmentRepository
from src.services.shipments_service.service import ShipmentService
from src.shared.models.caller_dto import CallerIdentity
from src.shared.models.enums import UserRole


_db: Optional[DatabaseManager] = None
_event_bus: Optional[EventBus] = None
_shipment_service: Optional[ShipmentService] = None


async def init_dependencies() -> None:
    """Инициализация всех зависимостей сервиса."""
    global _db, _event_bus, _shipment_service

    from src.config import settings

    _db = await init_db()

    if settings.shipments.PUBLISH_EVENTS:
        _event_bus = await _connect_event_bus()
    else:
        await log_info("Публикация событий отключена", type_msg=TypeMsg.DEBUG)

    _shipment_service = ShipmentService(
        repository=ShipmentRepository(_db),
        event_bus=_event_bus,
        content_policy=KeywordDenylistPolicy(settings.shipments.PROHIBITED_KEYWORDS),
        enforce_transitions=settings.shipments.ENFORCE_STATUS_TRANSITIONS,
        sort_by_created_at=settings.shipments.SORT_LIST_BY_CREATED_AT,
    )

    await log_info("Shipments Service инициализирован", type_msg=TypeMsg.INFO)


async def _connect_event_bus() -> Optional[EventBus]:
    # Брокер не обязателен для приёма запросов
    try:
        return await init_event_bus()
    except Exception as e:
        await log_error(f"RabbitMQ недоступен, события не будут публиковаться: {e}")
        return None


async def close_dependencies() -> None:
    """Закрытие всех ресурсов."""
    global _db, _event_bus, _shipment_service

    if _event_bus:
        await close_event_bus()

    if _db:
        await close_db()

    _db = None
    _event_bus = None
    _shipment_service = None


def get_db() -> DatabaseManager:
    if _db is None:
        raise RuntimeError("DatabaseManager не инициализирован")
    return _db


def get_event_bus() -> Optional[EventBus]:
    return _event_bus


def get_shipment_service() -> ShipmentService:
    if _shipment_service is None:
        raise RuntimeError("ShipmentService не инициализирован")
    return _shipment_service


# === AUTH DEPENDENCY ===

async def get_caller(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
    x_user_role: Annotated[Optional[str], Header(alias=USER_ROLE_HEADER)] = None,
) -> CallerIdentity:
    """
    Собрать CallerIdentity из заголовков, выставленных Request Gateway.

    Без X-User-Id запрос не аутентифицирован. Роль по умолчанию client.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {USER_ID_HEADER} header",
        )

    role = UserRole.CLIENT
    if x_user_role:
        try:
            role = UserRole(x_user_role.strip().lower())
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Unknown role: {x_user_role}",
            )

    return CallerIdentity(user_id=x_user_id.strip(), role=role)
