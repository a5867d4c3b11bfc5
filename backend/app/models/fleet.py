"""Fleet vehicles and the append-only trip expense ledger."""

import enum
from datetime import datetime

from pydantic import Field

from app.models.base import Record, utcnow


class VehicleType(str, enum.Enum):
    SHIP = "Ship"
    TRUCK = "Truck"


class VehicleStatus(str, enum.Enum):
    AVAILABLE = "Available"
    IN_USE = "In Use"
    MAINTENANCE = "Maintenance"


class FleetVehicle(Record):
    type: VehicleType
    name: str
    capacity: float = Field(..., ge=0)
    fuel_cost_per_km: float = Field(..., ge=0)
    crew_cost: float = Field(..., ge=0)
    maintenance: float = Field(..., ge=0)
    status: VehicleStatus = VehicleStatus.AVAILABLE


class FleetTrip(Record):
    """One row per expense calculation; never updated."""
    vehicle_id: int
    vehicle_name: str
    vehicle_type: VehicleType
    distance: float = Field(..., gt=0)
    fuel_expense: float
    crew_expense: float
    maintenance_expense: float
    total_expense: float
    shipment_id: int | None = None
    created_at: datetime = Field(default_factory=utcnow)
