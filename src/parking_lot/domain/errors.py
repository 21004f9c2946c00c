"""Error taxonomy for parking operations."""

from parking_lot.domain.vehicles import VehicleSize


class ParkingError(Exception):
    """Base class for parking lot errors."""


class ConflictError(ParkingError):
    """The request conflicts with the current lot state."""


class NotFoundError(ParkingError):
    """A referenced vehicle, session or spot does not exist."""


class ConfigurationError(ParkingError):
    """The lot is misconfigured."""


class AlreadyParkedError(ConflictError):
    """Vehicle already has an active session."""

    def __init__(self, license_plate: str, spot_id: str) -> None:
        super().__init__(
            f"Vehicle {license_plate} is already parked at spot {spot_id}"
        )
        self.license_plate = license_plate
        self.spot_id = spot_id


class AlreadyCompletedError(ConflictError):
    """Session has already been completed."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Ticket {session_id} is already completed")
        self.session_id = session_id


class SpotOccupiedError(ConflictError):
    """Spot is already occupied by another vehicle."""

    def __init__(self, spot_id: str) -> None:
        super().__init__(f"Spot {spot_id} is already occupied")
        self.spot_id = spot_id


class NoActiveSessionError(NotFoundError):
    """No active session exists for the vehicle."""

    def __init__(self, license_plate: str) -> None:
        super().__init__(
            f"No active parking session found for vehicle {license_plate}"
        )
        self.license_plate = license_plate


class SpotNotFoundError(NotFoundError):
    """Spot id is not known to the store."""

    def __init__(self, spot_id: str) -> None:
        super().__init__(f"Spot {spot_id} not found")
        self.spot_id = spot_id


class UnknownVehicleClassError(ConfigurationError):
    """No parking rate is registered for the vehicle size."""

    def __init__(self, size: VehicleSize) -> None:
        super().__init__(f"No rate found for vehicle type: {size.value}")
        self.size = size
