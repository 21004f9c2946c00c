"""Parking rate models."""

from pydantic import BaseModel, ConfigDict, Field

from parking_lot.domain.vehicles import VehicleSize


class ParkingRate(BaseModel):
    """Fee schedule for one vehicle size."""

    model_config = ConfigDict(frozen=True)

    base_fee: float = Field(ge=0.0)
    hourly_rate: float = Field(ge=0.0)


DEFAULT_RATES: dict[VehicleSize, ParkingRate] = {
    VehicleSize.SMALL: ParkingRate(base_fee=2.0, hourly_rate=1.0),
    VehicleSize.MEDIUM: ParkingRate(base_fee=5.0, hourly_rate=2.5),
    VehicleSize.LARGE: ParkingRate(base_fee=10.0, hourly_rate=5.0),
}
