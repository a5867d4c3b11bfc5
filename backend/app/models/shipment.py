"""Shipment: a customer's order to move blueberries to a destination.

Lifecycle:  Pending → Ready → In Transit → Delivered

`distance`, `price` and `estimated_delivery_days` are derived at creation
time from the destination and the requested container class.
"""

import enum
from datetime import datetime

from pydantic import Field

from app.models.base import Record, utcnow
from app.models.inventory import ProductCategory


class ContainerClass(str, enum.Enum):
    """Service class a customer books; drives price and capacity limits."""
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class ShipmentStatus(str, enum.Enum):
    PENDING = "Pending"
    READY = "Ready"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"


class Shipment(Record):
    customer_id: int | None = None
    customer_name: str | None = None
    product_name: str
    category: ProductCategory
    weight: float = Field(..., gt=0)
    destination: str
    destination_country: str
    distance: float = Field(..., ge=0)
    container_type: ContainerClass
    price: float = Field(..., ge=0)
    estimated_delivery_days: int
    status: ShipmentStatus = ShipmentStatus.PENDING
    container_id: int | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
