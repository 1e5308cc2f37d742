# src/shared/events/shipment_events.py
"""
События домена отправлений (shipment).
"""

from __future__ import annotations

from typing import Literal

from src.shared.events.base import DomainEvent


class ShipmentCreated(DomainEvent):
    """Событие: отправление создано клиентом."""

    event_type: Literal["shipment.created"] = "shipment.created"

    shipment_id: str
    client_id: str
    status: str
    weight_kg: float
    volume_m3: float
    pickup_lat: float
    pickup_lon: float
    pickup_address: str
    delivery_lat: float | None = None
    delivery_lon: float | None = None
    delivery_address: str | None = None


class ShipmentStatusChanged(DomainEvent):
    """Событие: статус отправления изменён."""

    event_type: Literal["shipment.status_changed"] = "shipment.status_changed"

    shipment_id: str
    client_id: str
    old_status: str | None = None
    new_status: str
    changed_by: str | None = None


class ShipmentTripAssigned(DomainEvent):
    """Событие: отправление привязано к поездке или отвязано от неё."""

    event_type: Literal["shipment.trip_assigned"] = "shipment.trip_assigned"

    shipment_id: str
    client_id: str
    trip_id: str | None = None
    previous_trip_id: str | None = None
