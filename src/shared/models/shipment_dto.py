from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.shared.models.enums import ShipmentStatus
from src.shared.models.location_dto import LocationDTO


class ShipmentDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str

    description: str
    weight_kg: float = 0.0
    volume_m3: float = 0.0

    pickup_location: LocationDTO
    delivery_location: Optional[LocationDTO] = None

    photos: List[str] = Field(default_factory=list)
    policy_accepted: bool = False

    # Вне режима проверки переходов здесь может оказаться произвольная строка
    status: Union[ShipmentStatus, str] = Field(ShipmentStatus.CREATED, union_mode="left_to_right")
    trip_id: Optional[str] = None

    created_at: datetime


class CreateShipmentRequest(BaseModel):
    """
    Тело запроса на создание отправления.
    Владелец, статус и поездка задаются сервисом, лишние ключи игнорируются.
    """
    model_config = ConfigDict(extra="ignore")

    description: str = Field(..., min_length=1)
    weight_kg: float = Field(0.0, ge=0)
    volume_m3: float = Field(0.0, ge=0)
    pickup_location: LocationDTO
    delivery_location: Optional[LocationDTO] = None
    photos: List[str] = Field(default_factory=list)
    policy_accepted: bool = False

    @field_validator("pickup_location")
    @classmethod
    def pickup_address_required(cls, v: LocationDTO) -> LocationDTO:
        if not v.address or not v.address.strip():
            raise ValueError("pickup_location.address is required")
        return v


class UpdateStatusRequest(BaseModel):
    # str, а не ShipmentStatus: проверку значения делает сервис в зависимости от режима
    status: str = Field(..., min_length=1)


class AssignTripRequest(BaseModel):
    trip_id: Optional[str] = None
