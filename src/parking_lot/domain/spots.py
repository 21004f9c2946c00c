"""Domain models for parking spots."""

from dataclasses import dataclass, replace
from enum import Enum

from parking_lot.domain.errors import SpotOccupiedError
from parking_lot.domain.vehicles import VehicleSize


class CapacityClass(str, Enum):
    """Largest vehicle size a spot can host."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


COMPATIBILITY: dict[CapacityClass, frozenset[VehicleSize]] = {
    CapacityClass.SMALL: frozenset({VehicleSize.SMALL}),
    CapacityClass.MEDIUM: frozenset({VehicleSize.SMALL, VehicleSize.MEDIUM}),
    CapacityClass.LARGE: frozenset(VehicleSize),
}


def fits(capacity: CapacityClass, size: VehicleSize) -> bool:
    """Return whether a spot of the given class can host the vehicle size."""
    return size in COMPATIBILITY[capacity]


@dataclass(frozen=True)
class Spot:
    """A parking spot and its current occupant, if any."""

    id: str
    floor: int
    capacity: CapacityClass
    occupant: str | None = None

    def __post_init__(self) -> None:
        if self.floor < 1:
            raise ValueError(f"Spot {self.id} has invalid floor {self.floor}")

    @property
    def is_available(self) -> bool:
        return self.occupant is None

    def can_fit(self, size: VehicleSize) -> bool:
        """Return whether this spot can host a vehicle of the given size."""
        return fits(self.capacity, size)

    def occupied_by(self, license_plate: str) -> "Spot":
        """Return a copy of the spot occupied by the vehicle."""
        if not self.is_available:
            raise SpotOccupiedError(self.id)
        return replace(self, occupant=license_plate)

    def released(self) -> "Spot":
        """Return a copy of the spot with no occupant."""
        return replace(self, occupant=None)

    def __str__(self) -> str:
        state = "Available" if self.is_available else "Occupied"
        return (
            f"Spot {self.id} (Floor {self.floor}, {self.capacity.value}) - {state}"
        )


@dataclass(frozen=True)
class AvailabilitySummary:
    """Available and total spot counts for one floor and capacity class."""

    floor: int
    capacity: CapacityClass
    available: int
    total: int
