"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from parking_lot.domain.rates import ParkingRate
from parking_lot.domain.spots import CapacityClass
from parking_lot.domain.vehicles import VehicleSize

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    floor_count: int = 3
    spots_per_floor: str = "small=10,medium=20,large=10"
    rates: dict[VehicleSize, ParkingRate] | None = None
    storage_backend: str = "memory"
    log_level: str = "INFO"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="PARKING_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_spot_layout(raw: str | None) -> dict[CapacityClass, int]:
    """Parse per-floor spot counts like ``small=10,medium=20,large=10``."""
    layout = dict.fromkeys(CapacityClass, 0)
    if raw is None:
        return layout
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value:
            continue
        name, sep, count = value.partition("=")
        if not sep:
            raise ValueError(f"Expected class=count, got {value!r}")
        try:
            capacity = CapacityClass(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown capacity class: {name.strip()!r}") from None
        count = count.strip()
        if not (count.isascii() and count.isdigit()):
            raise ValueError(f"Invalid spot count for {capacity.value}: {count!r}")
        layout[capacity] = int(count)
    return layout
