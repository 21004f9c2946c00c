"""Tests for the Supabase spot store."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from parking_lot.adapters.supabase_spot_store import SupabaseSpotStore
from parking_lot.domain.sessions import ActiveSession, CompletedSession
from parking_lot.domain.spots import CapacityClass, Spot
from parking_lot.domain.vehicles import Vehicle, VehicleSize


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def is_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _session_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": "T000001",
        "vehicle_plate": "CAR-001",
        "vehicle_size": "medium",
        "vehicle_owner": "Alice",
        "spot_id": "M1",
        "entry_time": "2026-01-05T08:00:00+00:00",
        "exit_time": None,
        "fee": None,
        "is_active": True,
    }
    row.update(overrides)
    return row


def test_supabase_spot_roundtrip() -> None:
    client = FakeSupabaseClient()
    spots_table = client.table("parking_spots")
    spots_table.queue(
        "select", [{"id": "M1", "floor": 2, "capacity": "medium", "occupant": None}]
    )
    store = SupabaseSpotStore(client)

    store.add_spot(Spot(id="M1", floor=2, capacity=CapacityClass.MEDIUM))
    assert spots_table.last_payload == {
        "id": "M1",
        "floor": 2,
        "capacity": "medium",
        "occupant": None,
    }

    fetched = store.get_spot("M1")
    assert fetched == Spot(id="M1", floor=2, capacity=CapacityClass.MEDIUM)

    store.update_spot(fetched.occupied_by("CAR-001"))
    assert spots_table.last_payload == {"occupant": "CAR-001"}
    assert ("id", "M1") in spots_table.last_filters


def test_supabase_list_available_filters_null_occupant() -> None:
    client = FakeSupabaseClient()
    spots_table = client.table("parking_spots")
    spots_table.queue(
        "select",
        [
            {"id": "S1", "floor": 1, "capacity": "small", "occupant": None},
            {"id": "L1", "floor": 1, "capacity": "large", "occupant": None},
        ],
    )
    store = SupabaseSpotStore(client)

    available = store.list_available()

    assert [spot.id for spot in available] == ["S1", "L1"]
    assert ("occupant", "null") in spots_table.last_filters


def test_supabase_empty_occupant_counts_as_occupied() -> None:
    client = FakeSupabaseClient()
    client.table("parking_spots").queue(
        "select", [{"id": "S1", "floor": 1, "capacity": "small", "occupant": ""}]
    )
    store = SupabaseSpotStore(client)

    spot = store.get_spot("S1")

    assert spot is not None
    assert spot.occupant == ""
    assert not spot.is_available


def test_supabase_session_lifecycle() -> None:
    client = FakeSupabaseClient()
    sessions_table = client.table("parking_sessions")
    store = SupabaseSpotStore(client)
    entry = datetime(2026, 1, 5, 8, tzinfo=UTC)
    session = ActiveSession(
        id="T000001",
        vehicle=Vehicle("CAR-001", VehicleSize.MEDIUM, "Alice"),
        spot_id="M1",
        entry_time=entry,
    )

    store.add_session(session)
    assert sessions_table.last_payload == _session_row()

    sessions_table.queue("select", [_session_row()])
    assert store.active_session_for_vehicle("CAR-001") == session
    assert ("is_active", True) in sessions_table.last_filters

    completed = session.complete(datetime(2026, 1, 5, 10, tzinfo=UTC), 7.5)
    store.update_session(completed)
    assert sessions_table.last_payload == {
        "exit_time": "2026-01-05T10:00:00+00:00",
        "fee": 7.5,
    }

    store.complete_session("T000001")
    assert sessions_table.last_payload == {"is_active": False}


def test_supabase_session_rows_map_to_variants() -> None:
    client = FakeSupabaseClient()
    sessions_table = client.table("parking_sessions")
    sessions_table.queue(
        "select",
        [
            _session_row(
                exit_time="2026-01-05T09:30:00+00:00", fee=10.0, is_active=False
            ),
            _session_row(id="T000002", vehicle_plate="MC-001", vehicle_size="small"),
        ],
    )
    store = SupabaseSpotStore(client)

    sessions = store.list_sessions()

    assert isinstance(sessions[0], CompletedSession)
    assert sessions[0].fee == 10.0
    assert sessions[0].duration_hours() == 1.5
    assert isinstance(sessions[1], ActiveSession)
    assert sessions[1].vehicle.size is VehicleSize.SMALL


def test_supabase_missing_rows_return_none() -> None:
    store = SupabaseSpotStore(FakeSupabaseClient())

    assert store.get_spot("nope") is None
    assert store.get_session("T999999") is None
    assert store.active_session_for_vehicle("GHOST-1") is None
