"""Exit fee calculation."""

import math
from dataclasses import dataclass, field

from parking_lot.domain.errors import UnknownVehicleClassError
from parking_lot.domain.rates import DEFAULT_RATES, ParkingRate
from parking_lot.domain.vehicles import VehicleSize


@dataclass
class FeeCalculator:
    """Computes parking fees from a per-size rate table.

    The first started hour costs the base fee; every further started hour
    costs the hourly rate.
    """

    rates: dict[VehicleSize, ParkingRate] = field(
        default_factory=lambda: dict(DEFAULT_RATES)
    )

    def compute_fee(self, size: VehicleSize, duration_hours: float) -> float:
        """Return the fee for a stay of the given length."""
        rate = self.rates.get(size)
        if rate is None:
            raise UnknownVehicleClassError(size)

        hours = math.ceil(duration_hours)
        if hours <= 1:
            return rate.base_fee
        return rate.base_fee + (hours - 1) * rate.hourly_rate

    def get_rate(self, size: VehicleSize) -> ParkingRate | None:
        """Return the rate registered for a vehicle size."""
        return self.rates.get(size)

    def set_rate(self, size: VehicleSize, rate: ParkingRate) -> None:
        """Register or replace the rate for a vehicle size."""
        self.rates[size] = rate
