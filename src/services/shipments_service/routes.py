from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from src.services.shipments_service.dependencies import get_caller, get_shipment_service
from src.services.shipments_service.exceptions import (
    InvalidStatusTransition,
    PolicyViolation,
    ShipmentAccessDenied,
    ShipmentError,
    ShipmentNotFound,
    StoreUnavailable,
    UnknownShipmentStatus,
)
from src.services.shipments_service.service import ShipmentService
from src.shared.models.caller_dto import CallerIdentity
from src.shared.models.common import ErrorResponse
from src.shared.models.shipment_dto import (
    AssignTripRequest,
    CreateShipmentRequest,
    ShipmentDTO,
    UpdateStatusRequest,
)

router = APIRouter(prefix="/shipments", tags=["Shipments"])

_STATUS_CODES = {
    PolicyViolation: status.HTTP_400_BAD_REQUEST,
    UnknownShipmentStatus: status.HTTP_400_BAD_REQUEST,
    ShipmentNotFound: status.HTTP_404_NOT_FOUND,
    InvalidStatusTransition: status.HTTP_409_CONFLICT,
    ShipmentAccessDenied: status.HTTP_403_FORBIDDEN,
}


def _to_http(error: Exception) -> HTTPException:
    if isinstance(error, StoreUnavailable):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Shipment store is unavailable",
        )
    code = _STATUS_CODES.get(type(error), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(error))


_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Нет идентификатора вызывающего"},
    503: {"model": ErrorResponse, "description": "Хранилище недоступно"},
}


@router.post(
    "/",
    response_model=ShipmentDTO,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def create_shipment(
    request: CreateShipmentRequest,
    caller: CallerIdentity = Depends(get_caller),
    service: ShipmentService = Depends(get_shipment_service),
):
    try:
        return await service.create(request, caller.user_id)
    except (ShipmentError, StoreUnavailable) as e:
        raise _to_http(e)


@router.get("/", response_model=List[ShipmentDTO], responses=_ERROR_RESPONSES)
async def list_shipments(
    caller: CallerIdentity = Depends(get_caller),
    service: ShipmentService = Depends(get_shipment_service),
):
    try:
        return await service.list_for_requester(caller.user_id)
    except StoreUnavailable as e:
        raise _to_http(e)


@router.get(
    "/trip/{trip_id}",
    response_model=List[ShipmentDTO],
    responses={403: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def list_trip_shipments(
    trip_id: str,
    caller: CallerIdentity = Depends(get_caller),
    service: ShipmentService = Depends(get_shipment_service),
):
    try:
        return await service.list_for_trip(trip_id, caller)
    except (ShipmentError, StoreUnavailable) as e:
        raise _to_http(e)


@router.get(
    "/{shipment_id}",
    response_model=ShipmentDTO,
    responses={404: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def get_shipment(
    shipment_id: str,
    caller: CallerIdentity = Depends(get_caller),
    service: ShipmentService = Depends(get_shipment_service),
):
    try:
        return await service.get_by_id(shipment_id, caller)
    except (ShipmentError, StoreUnavailable) as e:
        raise _to_http(e)


@router.patch(
    "/{shipment_id}/status",
    response_model=ShipmentDTO,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        **_ERROR_RESPONSES,
    },
)
async def update_shipment_status(
    shipment_id: str,
    request: UpdateStatusRequest,
    caller: CallerIdentity = Depends(get_caller),
    service: ShipmentService = Depends(get_shipment_service),
):
    try:
        return await service.update_status(shipment_id, request.status, caller)
    except (ShipmentError, StoreUnavailable) as e:
        raise _to_http(e)


@router.patch(
    "/{shipment_id}/trip",
    response_model=ShipmentDTO,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        **_ERROR_RESPONSES,
    },
)
async def assign_shipment_trip(
    shipment_id: str,
    request: AssignTripRequest,
    caller: CallerIdentity = Depends(get_caller),
    service: ShipmentService = Depends(get_shipment_service),
):
    try:
        return await service.assign_trip(shipment_id, request.trip_id, caller)
    except (ShipmentError, StoreUnavailable) as e:
        raise _to_http(e)
