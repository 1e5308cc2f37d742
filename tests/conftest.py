# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")

from src.shared.models.location_dto import LocationDTO
from src.shared.models.shipment_dto import CreateShipmentRequest, ShipmentDTO


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "_comment_system": "тестовая конфигурация",
        "PROJECT_NAME": "cargo_hub_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "LOG_LEVEL": "DEBUG",
        "ENVIRONMENT": "test",
        "SHIPMENTS_SERVICE_HOST": "127.0.0.1",
        "SHIPMENTS_SERVICE_PORT": 9092,
        "LOG_TO_FILE": False,
        "LOG_FILE_PATH": "logs/test.log",
        "LOG_FORMAT": "json",
        "LOG_MAX_BYTES": 1024,
        "DB_HOST": "localhost",
        "DB_PORT": 5432,
        "DB_NAME": "cargo_hub_test",
        "DB_USER": "postgres",
        "DB_PASSWORD": "",
        "DB_MIN_POOL_SIZE": 1,
        "DB_MAX_POOL_SIZE": 3,
        "DB_COMMAND_TIMEOUT": 30,
        "DB_CONNECT_ATTEMPTS": 2,
        "DB_CONNECT_RETRY_DELAY": 0.5,
        "RABBITMQ_HOST": "localhost",
        "RABBITMQ_PORT": 5672,
        "RABBITMQ_USER": "guest",
        "RABBITMQ_PASSWORD": "guest",
        "RABBITMQ_VHOST": "/",
        "RABBITMQ_EXCHANGE": "cargo.test",
        "PROHIBITED_KEYWORDS": ["Drugs", " weapons ", "", "bomb", "illegal", "explosives"],
        "ENFORCE_STATUS_TRANSITIONS": False,
        "SORT_LIST_BY_CREATED_AT": True,
        "PUBLISH_EVENTS": False,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Временный config.json."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(mock_config), encoding="utf-8")
    return path


# =============================================================================
# МОКИ ИНФРАСТРУКТУРЫ
# =============================================================================

@pytest.fixture
def mock_db() -> AsyncMock:
    """Мок менеджера базы данных."""
    db = AsyncMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.fetchval = AsyncMock(return_value=None)
    return db


@pytest.fixture
def mock_event_bus() -> AsyncMock:
    """Мок шины событий."""
    event_bus = AsyncMock()
    event_bus.publish = AsyncMock(return_value=True)
    event_bus.health_check = AsyncMock(return_value=True)
    return event_bus


# =============================================================================
# ТЕСТОВЫЕ ДАННЫЕ
# =============================================================================

@pytest.fixture
def sample_shipment_row() -> dict[str, Any]:
    """Строка таблицы shipments в том виде, как её отдаёт asyncpg."""
    return {
        "id": uuid4(),
        "client_id": "client-1",
        "description": "Fragile glassware",
        "weight_kg": 12.5,
        "volume_m3": 0.4,
        "pickup_lat": 50.45,
        "pickup_lon": 30.52,
        "pickup_address": "Kyiv, Khreshchatyk 1",
        "delivery_lat": 53.55,
        "delivery_lon": 9.99,
        "delivery_address": "Hamburg, Jungfernstieg 7",
        "photos": '["https://cdn.example.com/p/1.jpg"]',
        "policy_accepted": True,
        "status": "created",
        "trip_id": None,
        "created_at": datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc),
    }


@pytest.fixture
def create_request() -> CreateShipmentRequest:
    """Запрос на создание отправления без запрещённых слов."""
    return CreateShipmentRequest(
        description="Fragile glassware",
        weight_kg=12.5,
        volume_m3=0.4,
        pickup_location=LocationDTO(lat=50.45, lon=30.52, address="Kyiv, Khreshchatyk 1"),
        delivery_location=LocationDTO(lat=53.55, lon=9.99, address="Hamburg, Jungfernstieg 7"),
        photos=["https://cdn.example.com/p/1.jpg"],
        policy_accepted=True,
    )


def make_shipment(
    client_id: str = "client-1",
    status: str = "created",
    trip_id: Optional[str] = None,
    description: str = "Fragile glassware",
) -> ShipmentDTO:
    """Собирает ShipmentDTO для тестов сервиса."""
    return ShipmentDTO(
        id=str(uuid4()),
        client_id=client_id,
        description=description,
        weight_kg=12.5,
        volume_m3=0.4,
        pickup_location=LocationDTO(lat=50.45, lon=30.52, address="Kyiv, Khreshchatyk 1"),
        status=status,
        trip_id=trip_id,
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def shipment_factory():
    """Фабрика ShipmentDTO."""
    return make_shipment


class InMemoryShipmentRepository:
    """Хранилище отправлений в памяти с интерфейсом ShipmentRepository."""

    def __init__(self) -> None:
        self.records: dict[str, ShipmentDTO] = {}
        self.update_calls = 0

    async def insert(self, shipment: ShipmentDTO) -> ShipmentDTO:
        self.records[shipment.id] = shipment
        return shipment

    async def find_one(self, shipment_id: str) -> Optional[ShipmentDTO]:
        return self.records.get(shipment_id)

    async def find_many(
        self,
        client_id: Optional[str] = None,
        trip_id: Optional[str] = None,
        order_by_created_at: bool = False,
    ) -> list[ShipmentDTO]:
        result = [
            s for s in self.records.values()
            if (client_id is None or s.client_id == client_id)
            and (trip_id is None or s.trip_id == trip_id)
        ]
        if order_by_created_at:
            result.sort(key=lambda s: s.created_at, reverse=True)
        return result

    async def update(self, shipment_id: str, **fields: Any) -> Optional[ShipmentDTO]:
        self.update_calls += 1
        current = self.records.get(shipment_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields)
        self.records[shipment_id] = updated
        return updated


@pytest.fixture
def memory_repository() -> InMemoryShipmentRepository:
    """Пустое хранилище отправлений в памяти."""
    return InMemoryShipmentRepository()
