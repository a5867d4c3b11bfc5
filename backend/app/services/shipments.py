"""Shipment booking and tracking.

Creating a shipment:
  - Checks the weight against the booked class's capacity
  - Checks the category has enough stock to cover the weight
  - Derives distance, price and delivery estimate from the destination
  - Inserts the shipment and decrements inventory as one unit of work

Raises BusinessLogicError for capacity / stock failures; nothing is
written in that case.
"""

import logging

from app.database import DocumentStore
from app.middleware.exceptions import BusinessLogicError, ResourceNotFoundError
from app.models.base import utcnow
from app.models.container import CLASS_TO_BIN, ContainerStatus
from app.models.inventory import stock_status
from app.models.shipment import ContainerClass, Shipment, ShipmentStatus
from app.models.user import User
from app.schemas.shipment import PriceBreakdown, ShipmentCreate
from app.services.distance import country_of, estimate_delivery_days, resolve_distance
from app.services.pricing import calculate_price, check_capacity, get_spec
from app.utils.money import format_currency, format_number

logger = logging.getLogger(__name__)

STATUS_LOCATIONS: dict[ShipmentStatus, str] = {
    ShipmentStatus.PENDING: "Muğla Warehouse",
    ShipmentStatus.READY: "Loading Dock",
    ShipmentStatus.IN_TRANSIT: "En Route",
    ShipmentStatus.DELIVERED: "Destination",
}


def quote(destination: str, container_type: ContainerClass) -> PriceBreakdown:
    """Price, distance and delivery estimate for a destination and class."""
    class_spec = get_spec(container_type)
    distance = resolve_distance(destination)
    price = calculate_price(distance, container_type)
    days = estimate_delivery_days(distance, container_type)
    return PriceBreakdown(
        distance_km=distance,
        container_type=container_type,
        rate_per_km=class_spec.rate_per_km,
        capacity_kg=class_spec.capacity_kg,
        total_price=price,
        estimated_delivery_days=days,
        formula=(
            f"{format_number(distance, 'km')} × {format_currency(class_spec.rate_per_km)}/km"
            f" = {format_currency(price)}"
        ),
        total_price_display=format_currency(price),
    )


def create_shipment(
    body: ShipmentCreate,
    user: User,
    store: DocumentStore,
) -> tuple[Shipment, PriceBreakdown]:
    class_spec = get_spec(body.container_type)
    if not check_capacity(body.weight, body.container_type):
        raise BusinessLogicError(
            f"Weight exceeds {body.container_type.value} container capacity",
            error_code="CAPACITY_EXCEEDED",
            details={
                "alert": f"There is not enough space in {body.container_type.value} container",
                "capacity_kg": class_spec.capacity_kg,
                "weight_kg": body.weight,
            },
        )

    breakdown = quote(body.destination, body.container_type)

    with store.transaction():
        stock = store.find_one("inventory", lambda i: i.category == body.category)
        available = stock.quantity if stock else 0
        if stock is None or stock.quantity < body.weight:
            raise BusinessLogicError(
                f"Insufficient inventory for {body.category.value}. Available: {available:g} kg",
                error_code="INSUFFICIENT_INVENTORY",
                details={"available_kg": available, "requested_kg": body.weight},
            )

        shipment = store.insert("shipments", Shipment(
            customer_id=user.id,
            customer_name=user.username,
            product_name=body.product_name,
            category=body.category,
            weight=body.weight,
            destination=body.destination,
            destination_country=body.destination_country or country_of(body.destination),
            distance=breakdown.distance_km,
            container_type=body.container_type,
            price=breakdown.total_price,
            estimated_delivery_days=breakdown.estimated_delivery_days,
            status=ShipmentStatus.PENDING,
        ))

        remaining = stock.quantity - body.weight
        store.update("inventory", lambda i: i.id == stock.id, {
            "quantity": remaining,
            "status": stock_status(remaining, stock.min_stock),
            "last_updated": utcnow(),
        })

    logger.info(
        "Shipment %s created for %s: %s kg %s to %s (%s)",
        shipment.id, user.username, body.weight, body.category.value,
        body.destination, breakdown.total_price_display,
    )
    return shipment, breakdown


def tracking_view(shipment: Shipment) -> dict:
    return {
        "order_id": shipment.id,
        "status": shipment.status,
        "destination": shipment.destination,
        "estimated_delivery": f"{shipment.estimated_delivery_days} days",
        "current_location": STATUS_LOCATIONS.get(shipment.status, "Unknown"),
        "requested_bin_type": CLASS_TO_BIN[shipment.container_type].value,
    }


def _unload(store: DocumentStore, shipment: Shipment) -> None:
    """Take a shipment's weight back out of the container it was packed into."""
    container = store.get("containers", shipment.container_id)
    if container is None:
        return
    if container.status not in (ContainerStatus.READY, ContainerStatus.READY_FOR_TRANSPORT):
        raise BusinessLogicError(
            f"Shipment {shipment.id} is in container {container.id}, "
            f"which is {container.status.value}",
            error_code="CONTAINER_IN_USE",
            details={"container_id": container.id, "status": container.status.value},
        )
    remaining = max(container.current_load - shipment.weight, 0.0)
    store.update("containers", lambda c: c.id == container.id, {
        "current_load": remaining,
        "status": ContainerStatus.AVAILABLE if remaining == 0 else container.status,
        "updated_at": utcnow(),
    })


def update_status(store: DocumentStore, shipment_id: int, status: ShipmentStatus) -> Shipment:
    """Set a shipment's status. Moving it back to Pending also unloads it."""
    with store.transaction():
        shipment = store.get("shipments", shipment_id)
        if shipment is None:
            raise ResourceNotFoundError("Shipment", shipment_id)

        changes = {"status": status, "updated_at": utcnow()}
        if status == ShipmentStatus.PENDING and shipment.container_id is not None:
            _unload(store, shipment)
            changes["container_id"] = None

        shipment = store.update("shipments", lambda s: s.id == shipment_id, changes)
    logger.info("Shipment %s status → %s", shipment_id, status.value)
    return shipment
