"""Domain models for vehicles."""

from dataclasses import dataclass
from enum import Enum


class VehicleSize(str, Enum):
    """Size class of a vehicle."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass(frozen=True)
class Vehicle:
    """A vehicle identified by its license plate."""

    license_plate: str
    size: VehicleSize
    owner: str | None = None

    def __str__(self) -> str:
        return f"{self.size.value} - {self.license_plate}"
