from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class LocationDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    address: Optional[str] = None
