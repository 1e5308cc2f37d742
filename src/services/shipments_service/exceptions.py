from src.infra.database import StoreUnavailable


class ShipmentError(Exception):
    """Базовая ошибка сервиса отправлений."""
    pass


class PolicyViolation(ShipmentError):
    """Описание содержит запрещённое слово."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__("Shipment description contains prohibited items.")


class ShipmentNotFound(ShipmentError):
    def __init__(self, shipment_id: str):
        self.shipment_id = shipment_id
        super().__init__(f"Shipment {shipment_id} not found")


class UnknownShipmentStatus(ShipmentError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Unknown shipment status: {status}")


class InvalidStatusTransition(ShipmentError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Invalid transition from {current} to {requested}")


class ShipmentAccessDenied(ShipmentError):
    pass


__all__ = [
    "ShipmentError",
    "PolicyViolation",
    "ShipmentNotFound",
    "UnknownShipmentStatus",
    "InvalidStatusTransition",
    "ShipmentAccessDenied",
    "StoreUnavailable",
]
