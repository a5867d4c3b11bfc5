"""Shipment pricing: price = distance × rate per km of the booked class."""

from __future__ import annotations

from dataclasses import dataclass

from app.middleware.exceptions import BusinessLogicError
from app.models.shipment import ContainerClass


@dataclass(frozen=True)
class ClassSpec:
    capacity_kg: float
    rate_per_km: float


CONTAINER_SPECS: dict[ContainerClass, ClassSpec] = {
    ContainerClass.SMALL: ClassSpec(capacity_kg=2000, rate_per_km=5),
    ContainerClass.MEDIUM: ClassSpec(capacity_kg=5000, rate_per_km=8),
    ContainerClass.LARGE: ClassSpec(capacity_kg=10000, rate_per_km=12),
}


def get_spec(container_type: ContainerClass | str) -> ClassSpec:
    try:
        return CONTAINER_SPECS[ContainerClass(container_type)]
    except ValueError:
        raise BusinessLogicError(
            f"Unknown container type: {container_type}",
            error_code="UNKNOWN_CONTAINER_TYPE",
        ) from None


def calculate_price(distance_km: float, container_type: ContainerClass | str) -> float:
    return distance_km * get_spec(container_type).rate_per_km


def check_capacity(weight_kg: float, container_type: ContainerClass | str) -> bool:
    """True if the weight fits the booked class. Shipment creation requires it."""
    return weight_kg <= get_spec(container_type).capacity_kg
