"""Tests for report aggregation."""

from datetime import datetime, timezone

import pytest

from app.models.container import ContainerStatus
from app.models.fleet import FleetVehicle, VehicleType
from app.models.inventory import InventoryItem, ProductCategory, StockStatus
from app.models.shipment import ShipmentStatus
from app.services.reports import (
    dashboard_stats,
    generate_report,
    percent_of_minimum,
    popular_routes,
)


@pytest.mark.unit
class TestPopularRoutes:

    def test_ordered_by_count(self, make_shipment):
        shipments = [
            make_shipment(destination=d)
            for d in ["Paris, France", "Paris, France", "Rome, Italy",
                      "Paris, France", "Tokyo, Japan", "Rome, Italy"]
        ]
        routes = popular_routes(shipments)
        assert [(r["destination"], r["shipments"]) for r in routes] == [
            ("Paris, France", 3),
            ("Rome, Italy", 2),
            ("Tokyo, Japan", 1),
        ]
        assert routes[0]["route"] == "Muğla → Paris, France"

    def test_ties_keep_first_appearance(self, make_shipment):
        shipments = [make_shipment(destination=d) for d in ["Rome, Italy", "Paris, France"]]
        assert [r["destination"] for r in popular_routes(shipments)] == ["Rome, Italy", "Paris, France"]

    def test_top_five_only(self, make_shipment):
        shipments = [make_shipment(destination=f"City{i}, Germany") for i in range(8)]
        assert len(popular_routes(shipments)) == 5


@pytest.mark.unit
class TestGenerateReport:

    def test_composite_report(self, make_shipment, make_container):
        shipments = [
            make_shipment(id=1, weight=1000, price=5000, status=ShipmentStatus.DELIVERED),
            make_shipment(id=2, weight=500, price=3000, category=ProductCategory.ORGANIC),
        ]
        containers = [
            make_container(1, current_load=5000, status=ContainerStatus.READY_FOR_TRANSPORT),
            make_container(2),
        ]
        fleet = [
            FleetVehicle(id=1, type=VehicleType.SHIP, name="S", capacity=50000,
                         fuel_cost_per_km=1, crew_cost=0, maintenance=0),
        ]
        inventory = [
            InventoryItem(id=1, category=ProductCategory.FRESH, quantity=500,
                          min_stock=1000, status=StockStatus.LOW),
        ]
        stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)

        report = generate_report(shipments, containers, fleet, [], inventory, generated_at=stamp)

        assert report["generated_at"] == stamp
        assert report["financial"]["total_revenue"] == 5000
        assert report["financial"]["tax"] == 1000
        assert report["shipments"] == {
            "total": 2, "pending": 1, "ready": 0, "in_transit": 0, "delivered": 1,
        }
        assert report["containers"]["average_utilization"] == 50.0
        assert report["containers"]["in_use"] == 1
        assert report["routes"]["most_popular_route"] == "Muğla → Berlin, Germany"
        assert report["routes"]["total_distance_covered"] == 6000
        assert report["products"]["sold_per_category"] == {
            "Fresh": {"count": 1, "weight": 1000},
            "Organic": {"count": 1, "weight": 500},
        }
        assert report["inventory"][0]["percent_of_minimum"] == 50.0
        assert report["fleet"]["ships"] == 1

    def test_empty_report(self):
        report = generate_report([], [], [], [], [])
        assert report["routes"]["most_popular_route"] == "N/A"
        assert report["containers"]["average_utilization"] == 0.0
        assert report["financial"]["net_income"] == 0.0

    def test_percent_of_minimum_without_minimum(self):
        item = InventoryItem(id=1, category=ProductCategory.FROZEN, quantity=10, min_stock=0)
        assert percent_of_minimum(item) is None


@pytest.mark.unit
def test_dashboard_stats(make_shipment, make_container):
    inventory = [
        InventoryItem(id=1, category=ProductCategory.FROZEN, quantity=1, min_stock=5, status=StockStatus.LOW),
    ]
    stats = dashboard_stats([make_shipment(id=1)], [make_container(1)], [], inventory)
    assert stats["shipments"]["pending"] == 1
    assert stats["containers_available"] == 1
    assert stats["low_stock_categories"] == ["Frozen"]
