from enum import Enum


class ShipmentStatus(str, Enum):
    """Статусы отправления."""
    CREATED = "created"
    ACCEPTED = "accepted"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class UserRole(str, Enum):
    """Роли пользователей, которые проставляет Request Gateway."""
    CLIENT = "client"
    DRIVER = "driver"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value
