"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from parking_lot.app_logging import PACKAGE_LOGGER
from parking_lot.config import Settings
from parking_lot.domain.sessions import ParkingSession
from parking_lot.domain.spots import CapacityClass, Spot
from parking_lot.services.allocator import SpotAllocator
from parking_lot.services.fees import FeeCalculator
from parking_lot.services.sessions import SessionService
from parking_lot.services.store import InMemorySpotStore


@dataclass
class FakeClock:
    """Clock returning a fixed time that tests move forward by hand."""

    now: datetime = field(default_factory=lambda: datetime(2026, 1, 5, 8, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


def make_store(*spots: Spot) -> InMemorySpotStore:
    store = InMemorySpotStore()
    for spot in spots:
        store.add_spot(spot)
    return store


def make_service(
    floor_count: int = 1,
    layout: dict[CapacityClass, int] | None = None,
    clock: FakeClock | None = None,
    fee_calculator: FeeCalculator | None = None,
    store: InMemorySpotStore | None = None,
) -> SessionService:
    store = store if store is not None else InMemorySpotStore()
    service = SessionService(
        store=store,
        allocator=SpotAllocator(store),
        fee_calculator=fee_calculator or FeeCalculator(),
        clock=clock or FakeClock(),
    )
    service.initialize(floor_count, layout or {})
    return service


@pytest.fixture
def settings() -> Settings:
    return Settings(
        floor_count=2,
        spots_per_floor="small=1,medium=2,large=1",
        storage_backend="memory",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_service(clock: FakeClock) -> SessionService:
    return make_service(
        floor_count=2,
        layout={
            CapacityClass.SMALL: 2,
            CapacityClass.MEDIUM: 2,
            CapacityClass.LARGE: 1,
        },
        clock=clock,
    )


@dataclass
class FlakyStore(InMemorySpotStore):
    """In-memory store whose session writes can be switched to fail."""

    fail_on: set[str] = field(default_factory=set)

    def add_session(self, session: ParkingSession) -> None:
        if "add_session" in self.fail_on:
            raise RuntimeError("session insert failed")
        super().add_session(session)

    def update_session(self, session: ParkingSession) -> None:
        if "update_session" in self.fail_on:
            raise RuntimeError("session update failed")
        super().update_session(session)

    def complete_session(self, session_id: str) -> None:
        if "complete_session" in self.fail_on:
            raise RuntimeError("session index update failed")
        super().complete_session(session_id)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
