"""Report aggregation: one composite snapshot of the whole operation.

Nothing here is new arithmetic: it counts and sums the collections and
reuses the financial and container calculators. Popular routes group
shipments by destination and keep the top five by count, ties in order of
first appearance.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime

from app.models.base import utcnow
from app.models.container import Container, ContainerStatus
from app.models.financial import Expense
from app.models.fleet import FleetTrip, FleetVehicle, VehicleStatus, VehicleType
from app.models.inventory import InventoryItem, StockStatus
from app.models.shipment import Shipment, ShipmentStatus
from app.services.container_optimizer import average_utilization
from app.services.distance import ORIGIN
from app.services.financials import collect_ledgers, summarize_ledgers
from app.utils.money import round_money

TOP_ROUTES = 5


def route_label(destination: str) -> str:
    return f"{ORIGIN.split(',')[0]} → {destination}"


def popular_routes(shipments: list[Shipment], limit: int = TOP_ROUTES) -> list[dict]:
    # Counter keeps first-seen order and most_common() sorts stably
    counts = Counter(s.destination for s in shipments)
    return [
        {"route": route_label(dest), "destination": dest, "shipments": n}
        for dest, n in counts.most_common(limit)
    ]


def status_counts(shipments: list[Shipment]) -> dict[str, int]:
    return {
        "total": len(shipments),
        "pending": sum(1 for s in shipments if s.status == ShipmentStatus.PENDING),
        "ready": sum(1 for s in shipments if s.status == ShipmentStatus.READY),
        "in_transit": sum(1 for s in shipments if s.status == ShipmentStatus.IN_TRANSIT),
        "delivered": sum(1 for s in shipments if s.status == ShipmentStatus.DELIVERED),
    }


def percent_of_minimum(item: InventoryItem) -> float | None:
    if item.min_stock <= 0:
        return None
    return round_money(item.quantity / item.min_stock * 100)


def category_stats(shipments: list[Shipment]) -> dict[str, dict]:
    stats: dict[str, dict] = {}
    for s in shipments:
        entry = stats.setdefault(s.category.value, {"count": 0, "weight": 0.0})
        entry["count"] += 1
        entry["weight"] += s.weight
    return stats


def fleet_stats(fleet: list[FleetVehicle]) -> dict:
    return {
        "total_vehicles": len(fleet),
        "ships": sum(1 for v in fleet if v.type == VehicleType.SHIP),
        "trucks": sum(1 for v in fleet if v.type == VehicleType.TRUCK),
        "total_capacity": sum(v.capacity for v in fleet),
    }


def generate_report(
    shipments: list[Shipment],
    containers: list[Container],
    fleet: list[FleetVehicle],
    trips: list[FleetTrip],
    inventory: list[InventoryItem],
    expenses: list[Expense] | None = None,
    generated_at: datetime | None = None,
) -> dict:
    ledgers = collect_ledgers(shipments, trips, expenses)
    financial = summarize_ledgers(ledgers)
    routes = popular_routes(shipments)

    return {
        "generated_at": generated_at or utcnow(),
        "period": "All Time",
        "financial": {
            "total_revenue": financial.total_revenue,
            "total_fleet_expense": round_money(ledgers.trip_expenses),
            "other_expenses": round_money(ledgers.other_expenses),
            "total_expenses": financial.total_expenses,
            "net_income": financial.net_income,
            "tax": financial.tax,
            "tax_rate": financial.tax_rate,
            "profit_after_tax": financial.profit_after_tax,
        },
        "shipments": status_counts(shipments),
        "containers": {
            "total": len(containers),
            "average_utilization": average_utilization(containers),
            "in_use": sum(1 for c in containers if c.status != ContainerStatus.AVAILABLE),
            "available": sum(1 for c in containers if c.status == ContainerStatus.AVAILABLE),
        },
        "routes": {
            "most_popular_route": routes[0]["route"] if routes else "N/A",
            "popular_routes": routes,
            "total_distance_covered": sum(s.distance for s in shipments),
        },
        "products": {
            "sold_per_category": category_stats(shipments),
            "total_weight": sum(s.weight for s in shipments),
        },
        "inventory": [
            {
                "category": item.category.value,
                "quantity": item.quantity,
                "status": item.status.value,
                "percent_of_minimum": percent_of_minimum(item),
            }
            for item in inventory
        ],
        "fleet": fleet_stats(fleet),
    }


def dashboard_stats(
    shipments: list[Shipment],
    containers: list[Container],
    fleet: list[FleetVehicle],
    inventory: list[InventoryItem],
) -> dict:
    """Headline numbers for the admin landing page."""
    return {
        "shipments": status_counts(shipments),
        "containers_available": sum(
            1 for c in containers if c.status == ContainerStatus.AVAILABLE
        ),
        "average_utilization": average_utilization(containers),
        "vehicles_available": sum(1 for v in fleet if v.status == VehicleStatus.AVAILABLE),
        "low_stock_categories": [
            i.category.value for i in inventory if i.status == StockStatus.LOW
        ],
    }
