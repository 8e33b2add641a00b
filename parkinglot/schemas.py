from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # the database hands back naive UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class VehicleType(str, Enum):
    car = 'Car'
    bike = 'Bike'


class SessionStatus(str, Enum):
    parked = 'PARKED'
    exited = 'EXITED'


class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class VehicleCreate(CamelModel):
    owner_name: str = Field(min_length=1)
    vehicle_number: str = Field(min_length=1)
    vehicle_type: VehicleType
    contact_number: str = Field(min_length=1)
    image_url: Optional[str] = None


class VehicleUpdate(CamelModel):
    owner_name: Optional[str] = Field(default=None, min_length=1)
    vehicle_number: Optional[str] = Field(default=None, min_length=1)
    vehicle_type: Optional[VehicleType] = None
    contact_number: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None


class VehicleOut(CamelModel):
    id: int
    owner_name: str
    vehicle_number: str
    vehicle_type: VehicleType
    contact_number: str
    image_url: Optional[str] = None
    created_at: UtcDatetime


class ParkingEntry(CamelModel):
    vehicle_number: str = Field(min_length=1)
    slot_number: str = Field(min_length=1)
    entry_image_url: Optional[str] = None


class ParkingSessionOut(CamelModel):
    id: int
    vehicle_number: str
    slot_number: str
    entry_time: UtcDatetime
    exit_time: Optional[UtcDatetime] = None
    status: SessionStatus
    entry_image_url: Optional[str] = None
    total_amount: Optional[int] = None


class FeeEstimate(CamelModel):
    session_id: int
    vehicle_number: str
    duration_minutes: int
    estimated_amount: int
    as_of: UtcDatetime


class DashboardStats(CamelModel):
    total_capacity: int
    currently_parked: int
    available_slots: int
    registered_vehicles: int
    utilization: int
