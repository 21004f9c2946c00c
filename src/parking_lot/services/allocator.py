"""Spot allocation and release."""

import asyncio
import logging
from dataclasses import dataclass, field

from parking_lot.domain.errors import SpotNotFoundError
from parking_lot.domain.spots import AvailabilitySummary, CapacityClass, Spot
from parking_lot.domain.vehicles import VehicleSize
from parking_lot.services.store import SpotStore

_logger = logging.getLogger(__name__)


@dataclass
class SpotAllocator:
    """Assigns spots to vehicles under a single allocation lock.

    Lower floors are preferred, with the spot id as a tie-break so that
    allocation is deterministic. Nothing inside the locked sections awaits,
    so a spot is never observed half-updated.
    """

    store: SpotStore
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def allocate(self, size: VehicleSize, vehicle_id: str) -> Spot | None:
        """Occupy the best available spot for the vehicle, or return None."""
        async with self._lock:
            candidates = sorted(
                (spot for spot in self.store.list_available() if spot.can_fit(size)),
                key=lambda spot: (spot.floor, spot.id),
            )
            if not candidates:
                return None
            spot = candidates[0].occupied_by(vehicle_id)
            self.store.update_spot(spot)
            return spot

    async def release(self, spot_id: str) -> None:
        """Mark a spot available again."""
        async with self._lock:
            spot = self.store.get_spot(spot_id)
            if spot is None:
                raise SpotNotFoundError(spot_id)
            if spot.is_available:
                _logger.warning("Release of already available spot: spot=%s", spot_id)
                return
            self.store.update_spot(spot.released())

    async def reclaim(self, spot_id: str, vehicle_id: str) -> Spot:
        """Put a vehicle back into the spot it was just released from."""
        async with self._lock:
            spot = self.store.get_spot(spot_id)
            if spot is None:
                raise SpotNotFoundError(spot_id)
            if spot.occupant == vehicle_id:
                return spot
            occupied = spot.occupied_by(vehicle_id)
            self.store.update_spot(occupied)
            return occupied

    async def availability(self) -> list[AvailabilitySummary]:
        """Return available and total counts per floor and capacity class."""
        async with self._lock:
            counts: dict[tuple[int, CapacityClass], list[int]] = {}
            for spot in self.store.list_spots():
                entry = counts.setdefault((spot.floor, spot.capacity), [0, 0])
                entry[1] += 1
                if spot.is_available:
                    entry[0] += 1

        return [
            AvailabilitySummary(
                floor=floor, capacity=capacity, available=available, total=total
            )
            for (floor, capacity), (available, total) in sorted(
                counts.items(), key=lambda item: (item[0][0], item[0][1].value)
            )
        ]

    async def has_capacity(self, size: VehicleSize) -> bool:
        """Return whether any available spot fits the vehicle size."""
        async with self._lock:
            return any(spot.can_fit(size) for spot in self.store.list_available())
