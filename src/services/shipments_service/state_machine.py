from typing import Union

from src.shared.models.enums import ShipmentStatus


class ShipmentStateMachine:
    ALLOWED_TRANSITIONS = {
        ShipmentStatus.CREATED: [ShipmentStatus.ACCEPTED, ShipmentStatus.CANCELLED],
        ShipmentStatus.ACCEPTED: [ShipmentStatus.IN_TRANSIT, ShipmentStatus.CANCELLED],
        ShipmentStatus.IN_TRANSIT: [ShipmentStatus.DELIVERED, ShipmentStatus.CANCELLED],
        ShipmentStatus.DELIVERED: [],
        ShipmentStatus.CANCELLED: [],
    }

    INITIAL = ShipmentStatus.CREATED

    @staticmethod
    def normalize(status: Union[str, ShipmentStatus]) -> ShipmentStatus:
        """
        Приводит значение статуса к ShipmentStatus.

        Строки из режима совместимости ("ACCEPTED", " delivered ") тоже
        распознаются. Неизвестное значение даёт ValueError.
        """
        if isinstance(status, ShipmentStatus):
            return status
        return ShipmentStatus(str(status).strip().lower())

    @staticmethod
    def can_transition(current_status: Union[str, ShipmentStatus], new_status: Union[str, ShipmentStatus]) -> bool:
        try:
            curr = ShipmentStateMachine.normalize(current_status)
            new = ShipmentStateMachine.normalize(new_status)
        except ValueError:
            return False
        return new in ShipmentStateMachine.ALLOWED_TRANSITIONS.get(curr, [])

    @staticmethod
    def is_terminal(status: Union[str, ShipmentStatus]) -> bool:
        try:
            return not ShipmentStateMachine.ALLOWED_TRANSITIONS[ShipmentStateMachine.normalize(status)]
        except (ValueError, KeyError):
            return False
