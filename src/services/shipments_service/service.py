from datetime import datetime, timezone
from typing import List, Optional, Union
from uuid import uuid4

from src.common.constants import TypeMsg
from src.common.logger import log_info, log_warning
from src.infra.event_bus import EventBus
from src.services.shipments_service.exceptions import (
    InvalidStatusTransition,
    PolicyViolation,
    ShipmentAccessDenied,
    ShipmentNotFound,
    UnknownShipmentStatus,
)
from src.services.shipments_service.policy import ContentPolicy, KeywordDenylistPolicy
from src.services.shipments_service.repository import ShipmentRepository
from src.services.shipments_service.state_machine import ShipmentStateMachine
from src.shared.events.base import DomainEvent
from src.shared.events.shipment_events import (
    ShipmentCreated,
    ShipmentStatusChanged,
    ShipmentTripAssigned,
)
from src.shared.models.caller_dto import CallerIdentity
from src.shared.models.enums import ShipmentStatus
from src.shared.models.shipment_dto import CreateShipmentRequest, ShipmentDTO


class ShipmentService:
    """
    Жизненный цикл отправления: проверка политики контента, создание,
    выборки владельца, смена статуса и привязка к поездке.

    Состояния в процессе нет, всё хранится в БД. Гонки между
    одновременными обновлениями решаются по правилу "последний записавший".
    """

    def __init__(
        self,
        repository: ShipmentRepository,
        event_bus: Optional[EventBus] = None,
        content_policy: Optional[ContentPolicy] = None,
        enforce_transitions: bool = True,
        sort_by_created_at: bool = False,
    ):
        self.repository = repository
        self.event_bus = event_bus
        self.content_policy = content_policy or KeywordDenylistPolicy()
        self.enforce_transitions = enforce_transitions
        self.sort_by_created_at = sort_by_created_at

    async def create(self, request: CreateShipmentRequest, requester_id: str) -> ShipmentDTO:
        if self.content_policy(request.description):
            keyword = None
            if isinstance(self.content_policy, KeywordDenylistPolicy):
                keyword = self.content_policy.find_prohibited(request.description)
            await log_warning(
                f"Отправление клиента {requester_id} отклонено политикой контента",
                extra={"requester_id": requester_id, "keyword": keyword},
            )
            raise PolicyViolation(keyword or "")

        shipment = ShipmentDTO(
            id=str(uuid4()),
            client_id=requester_id,
            description=request.description,
            weight_kg=request.weight_kg,
            volume_m3=request.volume_m3,
            pickup_location=request.pickup_location,
            delivery_location=request.delivery_location,
            photos=list(request.photos),
            policy_accepted=request.policy_accepted,
            status=ShipmentStateMachine.INITIAL,
            trip_id=None,
            created_at=datetime.now(timezone.utc),
        )

        created = await self.repository.insert(shipment)
        await log_info(f"Отправление {created.id} создано клиентом {requester_id}", type_msg=TypeMsg.INFO)

        delivery = created.delivery_location
        await self._publish(ShipmentCreated(
            shipment_id=created.id,
            client_id=created.client_id,
            status=str(created.status),
            weight_kg=created.weight_kg,
            volume_m3=created.volume_m3,
            pickup_lat=created.pickup_location.lat,
            pickup_lon=created.pickup_location.lon,
            pickup_address=created.pickup_location.address or "",
            delivery_lat=delivery.lat if delivery else None,
            delivery_lon=delivery.lon if delivery else None,
            delivery_address=delivery.address if delivery else None,
        ))
        return created

    async def list_for_requester(self, requester_id: str) -> List[ShipmentDTO]:
        return await self.repository.find_many(
            client_id=requester_id,
            order_by_created_at=self.sort_by_created_at,
        )

    async def get_by_id(self, shipment_id: str, caller: Optional[CallerIdentity] = None) -> ShipmentDTO:
        """
        Returns the shipment or raises ShipmentNotFound.

        With a caller, a client only sees its own shipments; someone else's
        shipment is reported as not found so ids cannot be probed.
        """
        shipment = await self.repository.find_one(shipment_id)
        if shipment is None:
            raise ShipmentNotFound(shipment_id)
        self._ensure_visible(shipment, caller)
        return shipment

    async def update_status(
        self,
        shipment_id: str,
        new_status: Union[str, ShipmentStatus],
        caller: Optional[CallerIdentity] = None,
    ) -> ShipmentDTO:
        shipment = await self.get_by_id(shipment_id, caller)
        old_status = str(shipment.status)

        if self.enforce_transitions:
            target: Union[str, ShipmentStatus] = self._parse_status(new_status)
            if not ShipmentStateMachine.can_transition(shipment.status, target):
                raise InvalidStatusTransition(old_status, str(target))
        else:
            # Режим совместимости: перезапись любым значением
            target = new_status

        updated = await self.repository.update(shipment_id, status=target)
        if updated is None:
            raise ShipmentNotFound(shipment_id)

        await log_info(
            f"Статус отправления {shipment_id}: {old_status} -> {updated.status}",
            type_msg=TypeMsg.INFO,
        )
        await self._publish(ShipmentStatusChanged(
            shipment_id=updated.id,
            client_id=updated.client_id,
            old_status=old_status,
            new_status=str(updated.status),
            changed_by=caller.user_id if caller else None,
        ))
        return updated

    async def assign_trip(
        self,
        shipment_id: str,
        trip_id: Optional[str],
        caller: Optional[CallerIdentity] = None,
    ) -> ShipmentDTO:
        self._ensure_privileged(caller)

        shipment = await self.get_by_id(shipment_id, caller)
        updated = await self.repository.update(shipment_id, trip_id=trip_id)
        if updated is None:
            raise ShipmentNotFound(shipment_id)

        await log_info(f"Отправление {shipment_id} привязано к поездке {trip_id}", type_msg=TypeMsg.INFO)
        await self._publish(ShipmentTripAssigned(
            shipment_id=updated.id,
            client_id=updated.client_id,
            trip_id=trip_id,
            previous_trip_id=shipment.trip_id,
        ))
        return updated

    async def list_for_trip(self, trip_id: str, caller: Optional[CallerIdentity] = None) -> List[ShipmentDTO]:
        self._ensure_privileged(caller)
        return await self.repository.find_many(
            trip_id=trip_id,
            order_by_created_at=self.sort_by_created_at,
        )

    @staticmethod
    def _parse_status(value: Union[str, ShipmentStatus]) -> ShipmentStatus:
        try:
            return ShipmentStateMachine.normalize(value)
        except ValueError:
            raise UnknownShipmentStatus(value) from None

    @staticmethod
    def _ensure_visible(shipment: ShipmentDTO, caller: Optional[CallerIdentity]) -> None:
        if caller is None or caller.is_privileged:
            return
        if shipment.client_id != caller.user_id:
            raise ShipmentNotFound(shipment.id)

    @staticmethod
    def _ensure_privileged(caller: Optional[CallerIdentity]) -> None:
        if caller is not None and not caller.is_privileged:
            raise ShipmentAccessDenied(f"Role {caller.role} cannot manage trip assignments")

    async def _publish(self, event: DomainEvent) -> None:
        if self.event_bus is None:
            return
        await self.event_bus.publish(event)
