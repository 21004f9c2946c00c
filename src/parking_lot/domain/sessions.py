"""Domain models for parking sessions (tickets)."""

from dataclasses import dataclass
from datetime import datetime

from parking_lot.domain.errors import AlreadyCompletedError
from parking_lot.domain.vehicles import Vehicle

_SECONDS_PER_HOUR = 3600


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / _SECONDS_PER_HOUR


@dataclass(frozen=True)
class ActiveSession:
    """A vehicle's stay that has not ended yet."""

    id: str
    vehicle: Vehicle
    spot_id: str
    entry_time: datetime

    @property
    def vehicle_id(self) -> str:
        return self.vehicle.license_plate

    @property
    def is_active(self) -> bool:
        return True

    def duration_hours(self, now: datetime) -> float:
        """Return the elapsed stay in fractional hours."""
        return _hours_between(self.entry_time, now)

    def complete(self, exit_time: datetime, fee: float) -> "CompletedSession":
        """Close the session with its exit time and fee."""
        return CompletedSession(
            id=self.id,
            vehicle=self.vehicle,
            spot_id=self.spot_id,
            entry_time=self.entry_time,
            exit_time=exit_time,
            fee=fee,
        )

    def __str__(self) -> str:
        return f"Ticket {self.id} - {self.vehicle} - Active - Fee: N/A"


@dataclass(frozen=True)
class CompletedSession:
    """A finished stay with exit time and charged fee."""

    id: str
    vehicle: Vehicle
    spot_id: str
    entry_time: datetime
    exit_time: datetime
    fee: float

    @property
    def vehicle_id(self) -> str:
        return self.vehicle.license_plate

    @property
    def is_active(self) -> bool:
        return False

    def duration_hours(self, now: datetime | None = None) -> float:
        """Return the length of the stay in fractional hours."""
        return _hours_between(self.entry_time, self.exit_time)

    def complete(self, exit_time: datetime, fee: float) -> "CompletedSession":
        raise AlreadyCompletedError(self.id)

    def __str__(self) -> str:
        return f"Ticket {self.id} - {self.vehicle} - Completed - Fee: ${self.fee:.2f}"


ParkingSession = ActiveSession | CompletedSession
