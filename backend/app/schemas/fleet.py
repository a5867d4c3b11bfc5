"""Pydantic schemas for fleet vehicles and trip expenses."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.models.fleet import VehicleStatus, VehicleType
from app.schemas.validators import validate_destination


class VehicleOut(BaseModel):
    id: int
    type: VehicleType
    name: str
    capacity: float
    fuel_cost_per_km: float
    crew_cost: float
    maintenance: float
    status: VehicleStatus

    model_config = {"from_attributes": True}


class FleetStats(BaseModel):
    total: int
    ships: int
    trucks: int
    available: int
    in_use: int


class FleetListResponse(BaseModel):
    fleet: list[VehicleOut]
    stats: FleetStats


class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus


# ── Trip expense ─────────────────────────────────────────────

class TripExpenseRequest(BaseModel):
    """Payload for POST /api/admin/fleet/calculate-expense."""
    vehicle_id: int
    distance: float = Field(..., gt=0, allow_inf_nan=False)
    shipment_id: int | None = None


class TripExpenseOut(BaseModel):
    vehicle_id: int
    vehicle_name: str
    vehicle_type: VehicleType
    distance: float
    fuel_expense: float
    crew_expense: float
    maintenance_expense: float
    total_expense: float

    model_config = {"from_attributes": True}


class TripExpenseResponse(BaseModel):
    success: bool = True
    trip_id: int
    expense: TripExpenseOut
    formula: str
    calculation: str


class TripOut(BaseModel):
    id: int
    vehicle_id: int
    vehicle_name: str
    vehicle_type: VehicleType
    distance: float
    fuel_expense: float
    crew_expense: float
    maintenance_expense: float
    total_expense: float
    shipment_id: int | None
    created_at: datetime

    model_config = {"from_attributes": True}


# ── Vehicle selection ────────────────────────────────────────

class SelectVehicleRequest(BaseModel):
    """Either a shipment to move, or an explicit weight + destination."""
    shipment_id: int | None = None
    weight: float | None = Field(None, gt=0, allow_inf_nan=False)
    destination: str | None = None

    @field_validator("destination")
    @classmethod
    def _destination(cls, v: str | None) -> str | None:
        return validate_destination(v) if v else None


class SelectVehicleResponse(BaseModel):
    vehicle: VehicleOut
    distance: float
    estimated_expense: TripExpenseOut
