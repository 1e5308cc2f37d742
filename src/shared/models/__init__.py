# src/shared/models/__init__.py
"""
Общие DTO и Pydantic-модели.
"""

from src.shared.models.enums import ShipmentStatus, UserRole
from src.shared.models.location_dto import LocationDTO
from src.shared.models.caller_dto import CallerIdentity
from src.shared.models.shipment_dto import (
    ShipmentDTO,
    CreateShipmentRequest,
    UpdateStatusRequest,
    AssignTripRequest,
)
from src.shared.models.common import ErrorResponse, HealthStatus

__all__ = [
    "ShipmentStatus",
    "UserRole",
    "LocationDTO",
    "CallerIdentity",
    "ShipmentDTO",
    "CreateShipmentRequest",
    "UpdateStatusRequest",
    "AssignTripRequest",
    "ErrorResponse",
    "HealthStatus",
]
