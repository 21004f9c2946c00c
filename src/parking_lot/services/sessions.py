"""Check-in and check-out orchestration for parking sessions."""

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from parking_lot.domain.errors import AlreadyParkedError, NoActiveSessionError
from parking_lot.domain.sessions import ActiveSession, CompletedSession, ParkingSession
from parking_lot.domain.spots import AvailabilitySummary, CapacityClass, Spot
from parking_lot.domain.vehicles import Vehicle, VehicleSize
from parking_lot.services.allocator import SpotAllocator
from parking_lot.services.fees import FeeCalculator
from parking_lot.services.store import SpotStore

_logger = logging.getLogger(__name__)

_SPOT_PREFIXES = {
    CapacityClass.SMALL: "S",
    CapacityClass.MEDIUM: "M",
    CapacityClass.LARGE: "L",
}


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _id_number(identifier: str, prefix: str) -> int:
    """Return the counter part of an id like ``T000042``, or 0 if it has none."""
    if not identifier.startswith(prefix):
        return 0
    digits = identifier[len(prefix) :]
    if not (digits.isascii() and digits.isdigit()):
        return 0
    return int(digits)


@dataclass
class SessionService:
    """Owns the ticket lifecycle for vehicles entering and leaving the lot.

    Check-in and check-out hold the session lock for their whole duration and
    take the allocator lock inside it. The order is always session, then
    allocator.
    """

    store: SpotStore
    allocator: SpotAllocator
    fee_calculator: FeeCalculator
    clock: Callable[[], datetime] = _utc_now
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _ticket_counter: int = field(default=1, init=False, repr=False)
    _spot_counters: dict[CapacityClass, int] = field(
        default_factory=lambda: dict.fromkeys(CapacityClass, 1),
        init=False,
        repr=False,
    )

    async def check_in(self, vehicle: Vehicle) -> ActiveSession | None:
        """Park a vehicle and return its ticket, or None when the lot is full."""
        async with self._lock:
            existing = self.store.active_session_for_vehicle(vehicle.license_plate)
            if existing is not None:
                raise AlreadyParkedError(vehicle.license_plate, existing.spot_id)

            spot = await self.allocator.allocate(vehicle.size, vehicle.license_plate)
            if spot is None:
                _logger.info("No available spots: vehicle=%s", vehicle)
                return None

            session = ActiveSession(
                id=self._next_ticket_id(),
                vehicle=vehicle,
                spot_id=spot.id,
                entry_time=self.clock(),
            )
            try:
                self.store.add_session(session)
            except Exception:
                _logger.exception(
                    "Failed to record check-in, releasing spot: vehicle=%s spot=%s",
                    vehicle,
                    spot.id,
                )
                await self.allocator.release(spot.id)
                raise
            _logger.info(
                "Checked in: vehicle=%s spot=%s floor=%s ticket=%s",
                vehicle,
                spot.id,
                spot.floor,
                session.id,
            )
            return session

    async def check_out(self, license_plate: str) -> CompletedSession:
        """Close the vehicle's active session, charge it and free its spot."""
        async with self._lock:
            session = self.store.active_session_for_vehicle(license_plate)
            if session is None:
                raise NoActiveSessionError(license_plate)

            exit_time = self.clock()
            duration = session.duration_hours(exit_time)
            fee = self.fee_calculator.compute_fee(session.vehicle.size, duration)

            completed = session.complete(exit_time, fee)
            # release is the only suspension point; store writes follow it
            await self.allocator.release(completed.spot_id)
            recorded = False
            try:
                self.store.update_session(completed)
                recorded = True
                self.store.complete_session(completed.id)
            except Exception:
                _logger.exception(
                    "Failed to record check-out, restoring spot: vehicle=%s spot=%s",
                    completed.vehicle,
                    completed.spot_id,
                )
                await self.allocator.reclaim(completed.spot_id, session.vehicle_id)
                if recorded:
                    self.store.update_session(session)
                raise

            _logger.info(
                "Checked out: vehicle=%s spot=%s hours=%.2f fee=%.2f",
                completed.vehicle,
                completed.spot_id,
                duration,
                fee,
            )
            return completed

    async def availability(self) -> list[AvailabilitySummary]:
        """Return a point-in-time availability summary."""
        return await self.allocator.availability()

    async def has_capacity(self, size: VehicleSize) -> bool:
        """Return whether a vehicle of this size could currently park."""
        return await self.allocator.has_capacity(size)

    def active_sessions(self) -> list[ActiveSession]:
        """Return all sessions that have not been checked out."""
        return self.store.list_active_sessions()

    def get_session(self, session_id: str) -> ParkingSession | None:
        """Return a session by ticket id."""
        return self.store.get_session(session_id)

    def list_sessions(self) -> list[ParkingSession]:
        """Return every recorded session."""
        return self.store.list_sessions()

    def initialize(
        self, floor_count: int, spots_per_floor: Mapping[CapacityClass, int]
    ) -> int:
        """Create the lot's spots and return how many were added.

        Meant to run once before any check-in traffic; it takes no lock.
        """
        if floor_count < 1:
            raise ValueError(f"floor_count must be at least 1, got {floor_count}")
        for capacity, count in spots_per_floor.items():
            if count < 0:
                raise ValueError(f"Negative spot count for {capacity.value}: {count}")

        created = 0
        for floor in range(1, floor_count + 1):
            for capacity in CapacityClass:
                for _ in range(spots_per_floor.get(capacity, 0)):
                    spot = Spot(
                        id=self._next_spot_id(capacity),
                        floor=floor,
                        capacity=capacity,
                    )
                    self.store.add_spot(spot)
                    created += 1

        _logger.info(
            "Parking lot initialized: floors=%s spots=%s", floor_count, created
        )
        return created

    def resume(self) -> None:
        """Continue ticket and spot numbering after what the store already holds.

        Used instead of ``initialize`` when the store outlives the service, so
        new ids never collide with recorded ones.
        """
        self._ticket_counter = (
            max(
                (
                    _id_number(session.id, "T")
                    for session in self.store.list_sessions()
                ),
                default=0,
            )
            + 1
        )
        for capacity, prefix in _SPOT_PREFIXES.items():
            self._spot_counters[capacity] = (
                max(
                    (_id_number(spot.id, prefix) for spot in self.store.list_spots()),
                    default=0,
                )
                + 1
            )
        _logger.info(
            "Resumed parking lot: next_ticket=%s spots=%s",
            self._ticket_counter,
            len(self.store.list_spots()),
        )

    def _next_ticket_id(self) -> str:
        ticket_id = f"T{self._ticket_counter:06d}"
        self._ticket_counter += 1
        return ticket_id

    def _next_spot_id(self, capacity: CapacityClass) -> str:
        number = self._spot_counters[capacity]
        self._spot_counters[capacity] = number + 1
        return f"{_SPOT_PREFIXES[capacity]}{number}"
