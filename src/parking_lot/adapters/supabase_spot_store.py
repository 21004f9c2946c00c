"""Supabase-backed spot and session store."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from parking_lot.domain.sessions import ActiveSession, CompletedSession, ParkingSession
from parking_lot.domain.spots import CapacityClass, Spot
from parking_lot.domain.vehicles import Vehicle, VehicleSize
from parking_lot.services.store import SpotStore

_SPOT_COLUMNS = "id, floor, capacity, occupant"
_SESSION_COLUMNS = (
    "id, vehicle_plate, vehicle_size, vehicle_owner, spot_id, "
    "entry_time, exit_time, fee, is_active"
)


@dataclass
class SupabaseSpotStore(SpotStore):
    """Supabase implementation for spots and sessions."""

    client: Client

    def add_spot(self, spot: Spot) -> None:
        """Insert a spot row."""
        self.client.table("parking_spots").insert(_spot_row(spot)).execute()

    def update_spot(self, spot: Spot) -> None:
        """Update the occupant of a spot row."""
        self.client.table("parking_spots").update({"occupant": spot.occupant}).eq(
            "id", spot.id
        ).execute()

    def get_spot(self, spot_id: str) -> Spot | None:
        """Return a spot by id, if present."""
        response = (
            self.client.table("parking_spots")
            .select(_SPOT_COLUMNS)
            .eq("id", spot_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _spot_from_row(response.data[0])

    def list_spots(self) -> list[Spot]:
        """Return all spot rows."""
        response = (
            self.client.table("parking_spots")
            .select(_SPOT_COLUMNS)
            .order("floor")
            .order("id")
            .execute()
        )
        return [_spot_from_row(row) for row in response.data or []]

    def list_available(self) -> list[Spot]:
        """Return spot rows without an occupant."""
        response = (
            self.client.table("parking_spots")
            .select(_SPOT_COLUMNS)
            .is_("occupant", "null")
            .execute()
        )
        return [_spot_from_row(row) for row in response.data or []]

    def add_session(self, session: ParkingSession) -> None:
        """Insert a session row."""
        self.client.table("parking_sessions").insert(_session_row(session)).execute()

    def update_session(self, session: ParkingSession) -> None:
        """Write exit time and fee for a session row."""
        payload: dict[str, object] = {"exit_time": None, "fee": None}
        if isinstance(session, CompletedSession):
            payload = {"exit_time": session.exit_time.isoformat(), "fee": session.fee}
        self.client.table("parking_sessions").update(payload).eq(
            "id", session.id
        ).execute()

    def get_session(self, session_id: str) -> ParkingSession | None:
        """Return a session by ticket id, if present."""
        response = (
            self.client.table("parking_sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _session_from_row(response.data[0])

    def active_session_for_vehicle(self, license_plate: str) -> ActiveSession | None:
        """Return the active session for a vehicle, if present."""
        response = (
            self.client.table("parking_sessions")
            .select(_SESSION_COLUMNS)
            .eq("vehicle_plate", license_plate)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        session = _session_from_row(response.data[0])
        return session if isinstance(session, ActiveSession) else None

    def complete_session(self, session_id: str) -> None:
        """Clear the active flag of a session row."""
        self.client.table("parking_sessions").update({"is_active": False}).eq(
            "id", session_id
        ).execute()

    def list_sessions(self) -> list[ParkingSession]:
        """Return all session rows ordered by ticket id."""
        response = (
            self.client.table("parking_sessions")
            .select(_SESSION_COLUMNS)
            .order("id")
            .execute()
        )
        return [_session_from_row(row) for row in response.data or []]

    def list_active_sessions(self) -> list[ActiveSession]:
        """Return session rows without an exit time."""
        return [
            session
            for session in self.list_sessions()
            if isinstance(session, ActiveSession)
        ]


def _spot_row(spot: Spot) -> dict[str, object]:
    return {
        "id": spot.id,
        "floor": spot.floor,
        "capacity": spot.capacity.value,
        "occupant": spot.occupant,
    }


def _spot_from_row(row: dict[str, object]) -> Spot:
    occupant = row.get("occupant")
    return Spot(
        id=str(row["id"]),
        floor=int(row["floor"]),
        capacity=CapacityClass(row["capacity"]),
        occupant=str(occupant) if occupant is not None else None,
    )


def _session_row(session: ParkingSession) -> dict[str, object]:
    row: dict[str, object] = {
        "id": session.id,
        "vehicle_plate": session.vehicle.license_plate,
        "vehicle_size": session.vehicle.size.value,
        "vehicle_owner": session.vehicle.owner,
        "spot_id": session.spot_id,
        "entry_time": session.entry_time.isoformat(),
        "exit_time": None,
        "fee": None,
        "is_active": session.is_active,
    }
    if isinstance(session, CompletedSession):
        row["exit_time"] = session.exit_time.isoformat()
        row["fee"] = session.fee
    return row


def _session_from_row(row: dict[str, object]) -> ParkingSession:
    vehicle = Vehicle(
        license_plate=str(row["vehicle_plate"]),
        size=VehicleSize(row["vehicle_size"]),
        owner=row.get("vehicle_owner"),
    )
    entry_time = datetime.fromisoformat(str(row["entry_time"]))
    exit_time = row.get("exit_time")
    if exit_time:
        return CompletedSession(
            id=str(row["id"]),
            vehicle=vehicle,
            spot_id=str(row["spot_id"]),
            entry_time=entry_time,
            exit_time=datetime.fromisoformat(str(exit_time)),
            fee=float(row["fee"]),
        )
    return ActiveSession(
        id=str(row["id"]),
        vehicle=vehicle,
        spot_id=str(row["spot_id"]),
        entry_time=entry_time,
    )
