"""Pydantic schemas for shipment creation, tracking and admin updates."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.models.inventory import ProductCategory
from app.models.shipment import ContainerClass, ShipmentStatus
from app.schemas.container import ContainerOut
from app.schemas.validators import sanitize_string, validate_destination


# ── Create / quote ───────────────────────────────────────────

class QuoteRequest(BaseModel):
    """Payload for POST /api/shipments/quote (no side effects)."""
    destination: str
    container_type: ContainerClass
    weight: float | None = Field(None, gt=0, allow_inf_nan=False)

    @field_validator("destination")
    @classmethod
    def _destination(cls, v: str) -> str:
        return validate_destination(v)


class ShipmentCreate(BaseModel):
    """Payload for POST /api/shipments/create."""
    product_name: str
    category: ProductCategory
    weight: float = Field(..., gt=0, allow_inf_nan=False)
    destination: str
    destination_country: str | None = None
    container_type: ContainerClass

    @field_validator("product_name")
    @classmethod
    def _product_name(cls, v: str) -> str:
        return sanitize_string(v, max_length=120)

    @field_validator("destination")
    @classmethod
    def _destination(cls, v: str) -> str:
        return validate_destination(v)

    @field_validator("destination_country")
    @classmethod
    def _country(cls, v: str | None) -> str | None:
        return sanitize_string(v, max_length=80) if v else None


class StatusUpdate(BaseModel):
    """Payload for PATCH /api/shipments/{id}/status."""
    status: ShipmentStatus


# ── Response ─────────────────────────────────────────────────

class ShipmentOut(BaseModel):
    id: int
    customer_id: int | None
    customer_name: str | None
    product_name: str
    category: ProductCategory
    weight: float
    destination: str
    destination_country: str
    distance: float
    container_type: ContainerClass
    price: float
    estimated_delivery_days: int
    status: ShipmentStatus
    container_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PriceBreakdown(BaseModel):
    distance_km: float
    container_type: ContainerClass
    rate_per_km: float
    capacity_kg: float
    total_price: float
    estimated_delivery_days: int
    # Display strings, e.g. "3.000 km × ₺8,00/km = ₺24.000,00"
    formula: str
    total_price_display: str


class ShipmentCreated(BaseModel):
    message: str
    shipment: ShipmentOut
    price_breakdown: PriceBreakdown


class TrackingInfo(BaseModel):
    order_id: int
    status: ShipmentStatus
    destination: str
    estimated_delivery: str
    current_location: str
    requested_bin_type: str


class TrackingResponse(BaseModel):
    shipment: ShipmentOut
    container: ContainerOut | None
    tracking: TrackingInfo


class ShipmentStatusUpdated(BaseModel):
    message: str
    shipment: ShipmentOut


class ContainerDetail(BaseModel):
    """A container together with the shipments loaded into it."""
    container: ContainerOut
    shipments: list[ShipmentOut]
    utilization: float
    remaining_capacity: float
