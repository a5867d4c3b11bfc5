"""Container: a physical bin that shipments are packed into.

Lifecycle:  Available → Ready for Transport → In Transit → Delivered

A container's `type` is its physical bin size. It is deliberately a
separate enum from the `ContainerClass` a shipment books; CLASS_TO_BIN is
the only place the two meet.
"""

import enum
from datetime import datetime

from pydantic import Field

from app.models.base import Record, utcnow
from app.models.shipment import ContainerClass


class BinType(str, enum.Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class ContainerStatus(str, enum.Enum):
    AVAILABLE = "Available"
    READY = "Ready"
    READY_FOR_TRANSPORT = "Ready for Transport"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"


# Nominal capacity (kg) of each physical bin
BIN_CAPACITY_KG: dict[BinType, float] = {
    BinType.SMALL: 2000,
    BinType.MEDIUM: 5000,
    BinType.LARGE: 10000,
}

CLASS_TO_BIN: dict[ContainerClass, BinType] = {
    ContainerClass.SMALL: BinType.SMALL,
    ContainerClass.MEDIUM: BinType.MEDIUM,
    ContainerClass.LARGE: BinType.LARGE,
}

# Statuses that count as "in use" for utilization reporting
LOADED_STATUSES = (
    ContainerStatus.READY_FOR_TRANSPORT,
    ContainerStatus.IN_TRANSIT,
    ContainerStatus.DELIVERED,
)


class Container(Record):
    type: BinType
    capacity: float = Field(..., ge=0)
    current_load: float = Field(0, ge=0)
    status: ContainerStatus = ContainerStatus.AVAILABLE
    updated_at: datetime = Field(default_factory=utcnow)
