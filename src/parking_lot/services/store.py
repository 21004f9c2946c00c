"""Spot and session storage."""

from dataclasses import dataclass, field
from typing import Protocol

from parking_lot.domain.sessions import ActiveSession, ParkingSession
from parking_lot.domain.spots import Spot


class SpotStore(Protocol):
    """Persistence interface for spots and sessions.

    Implementations apply no locking or policy; callers hold the allocator or
    session lock before mutating.
    """

    def add_spot(self, spot: Spot) -> None:
        """Insert a new spot."""

    def update_spot(self, spot: Spot) -> None:
        """Replace the stored state of an existing spot."""

    def get_spot(self, spot_id: str) -> Spot | None:
        """Return a spot by id, if present."""

    def list_spots(self) -> list[Spot]:
        """Return all spots."""

    def list_available(self) -> list[Spot]:
        """Return spots without an occupant."""

    def add_session(self, session: ParkingSession) -> None:
        """Insert a session and index it by vehicle while active."""

    def update_session(self, session: ParkingSession) -> None:
        """Replace the stored record of an existing session."""

    def get_session(self, session_id: str) -> ParkingSession | None:
        """Return a session by id, if present."""

    def active_session_for_vehicle(self, license_plate: str) -> ActiveSession | None:
        """Return the active session for a vehicle, if present."""

    def complete_session(self, session_id: str) -> None:
        """Drop the vehicle index entry for a session."""

    def list_sessions(self) -> list[ParkingSession]:
        """Return every session, active and completed."""

    def list_active_sessions(self) -> list[ActiveSession]:
        """Return sessions that have not been completed."""


@dataclass
class InMemorySpotStore(SpotStore):
    """Volatile store keeping spots and sessions in dicts."""

    spots: dict[str, Spot] = field(default_factory=dict)
    sessions: dict[str, ParkingSession] = field(default_factory=dict)
    active_by_vehicle: dict[str, str] = field(default_factory=dict)

    def add_spot(self, spot: Spot) -> None:
        self.spots[spot.id] = spot

    def update_spot(self, spot: Spot) -> None:
        self.spots[spot.id] = spot

    def get_spot(self, spot_id: str) -> Spot | None:
        return self.spots.get(spot_id)

    def list_spots(self) -> list[Spot]:
        return list(self.spots.values())

    def list_available(self) -> list[Spot]:
        return [spot for spot in self.spots.values() if spot.is_available]

    def add_session(self, session: ParkingSession) -> None:
        self.sessions[session.id] = session
        if isinstance(session, ActiveSession):
            self.active_by_vehicle[session.vehicle_id] = session.id

    def update_session(self, session: ParkingSession) -> None:
        self.sessions[session.id] = session

    def get_session(self, session_id: str) -> ParkingSession | None:
        return self.sessions.get(session_id)

    def active_session_for_vehicle(self, license_plate: str) -> ActiveSession | None:
        session_id = self.active_by_vehicle.get(license_plate)
        if session_id is None:
            return None
        session = self.sessions.get(session_id)
        return session if isinstance(session, ActiveSession) else None

    def complete_session(self, session_id: str) -> None:
        session = self.sessions.get(session_id)
        if session is None:
            return
        if self.active_by_vehicle.get(session.vehicle_id) == session_id:
            del self.active_by_vehicle[session.vehicle_id]

    def list_sessions(self) -> list[ParkingSession]:
        return list(self.sessions.values())

    def list_active_sessions(self) -> list[ActiveSession]:
        return [
            session
            for session in self.sessions.values()
            if isinstance(session, ActiveSession)
        ]
