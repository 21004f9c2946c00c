"""Dependency container wiring for the parking lot."""

import logging
from dataclasses import dataclass

from supabase import create_client

from parking_lot.adapters.supabase_spot_store import SupabaseSpotStore
from parking_lot.app_logging import configure_logging
from parking_lot.config import Settings, parse_spot_layout
from parking_lot.domain.rates import DEFAULT_RATES
from parking_lot.services.allocator import SpotAllocator
from parking_lot.services.fees import FeeCalculator
from parking_lot.services.sessions import SessionService
from parking_lot.services.store import InMemorySpotStore, SpotStore

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: SpotStore
    fee_calculator: FeeCalculator
    allocator: SpotAllocator
    session_service: SessionService


def build_store(settings: Settings) -> SpotStore:
    """Create the spot store for the configured backend."""
    if settings.storage_backend == "memory":
        return InMemorySpotStore()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase backend requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseSpotStore(client)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    store = build_store(resolved_settings)
    fee_calculator = FeeCalculator(
        rates={**DEFAULT_RATES, **(resolved_settings.rates or {})}
    )
    allocator = SpotAllocator(store)
    session_service = SessionService(
        store=store,
        allocator=allocator,
        fee_calculator=fee_calculator,
    )
    if store.list_spots():
        _logger.info(
            "Reusing existing spots: backend=%s", resolved_settings.storage_backend
        )
        session_service.resume()
    else:
        session_service.initialize(
            resolved_settings.floor_count,
            parse_spot_layout(resolved_settings.spots_per_floor),
        )

    return AppContainer(
        settings=resolved_settings,
        store=store,
        fee_calculator=fee_calculator,
        allocator=allocator,
        session_service=session_service,
    )
