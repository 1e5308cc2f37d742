# src/shared/events/__init__.py
"""
Схемы событий для RabbitMQ.

Все события содержат event_id для дедупликации
и публикуются с event_type в качестве routing key.
"""

from src.shared.events.base import DomainEvent, EventMetadata
from src.shared.events.shipment_events import (
    ShipmentCreated,
    ShipmentStatusChanged,
    ShipmentTripAssigned,
)

__all__ = [
    "DomainEvent",
    "EventMetadata",
    "ShipmentCreated",
    "ShipmentStatusChanged",
    "ShipmentTripAssigned",
]
