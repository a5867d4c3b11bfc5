"""Tests for the financial aggregation and money helpers."""

import pytest

from app.models.fleet import FleetTrip, VehicleType
from app.models.financial import Expense
from app.models.shipment import ShipmentStatus
from app.services.financials import collect_ledgers, recalculate, summarize, summarize_ledgers
from app.utils.money import format_currency, format_number, round_money


def _trip(total: float) -> FleetTrip:
    return FleetTrip(
        id=1,
        vehicle_id=1,
        vehicle_name="Truck",
        vehicle_type=VehicleType.TRUCK,
        distance=100,
        fuel_expense=total,
        crew_expense=0,
        maintenance_expense=0,
        total_expense=total,
    )


@pytest.mark.unit
class TestSummarize:

    def test_profit_is_taxed_at_twenty_percent(self):
        result = summarize(10000, 4000)
        assert result.net_income == 6000
        assert result.tax == 1200
        assert result.profit_after_tax == 4800
        assert result.tax_rate == "20%"

    @pytest.mark.parametrize("revenue, expenses", [(1000, 1000), (1000, 2500)])
    def test_no_tax_without_profit(self, revenue, expenses):
        result = summarize(revenue, expenses)
        assert result.tax == 0
        assert result.profit_after_tax == result.net_income

    def test_rounding_is_half_up(self):
        result = summarize(0.625, 0)
        assert result.tax == 0.13

    def test_idempotent(self):
        assert summarize(1234.567, 89.1) == summarize(1234.567, 89.1)


@pytest.mark.unit
class TestLedgers:

    def test_only_delivered_shipments_count_as_revenue(self, make_shipment):
        shipments = [
            make_shipment(id=1, price=1000, status=ShipmentStatus.DELIVERED),
            make_shipment(id=2, price=5000, status=ShipmentStatus.IN_TRANSIT),
            make_shipment(id=3, price=250.5, status=ShipmentStatus.DELIVERED),
        ]
        ledgers = collect_ledgers(shipments, [_trip(300)], [Expense(description="Rent", amount=200)])

        assert ledgers.delivered_shipments == 2
        assert float(ledgers.total_revenue) == 1250.5
        assert float(ledgers.total_expenses) == 500

        result = summarize_ledgers(ledgers)
        assert result.net_income == 750.5
        assert result.tax == 150.1
        assert result.profit_after_tax == 600.4

    def test_empty_ledgers(self):
        result = summarize_ledgers(collect_ledgers([], []))
        assert result.as_dict() == {
            "total_revenue": 0.0,
            "total_expenses": 0.0,
            "net_income": 0.0,
            "tax": 0.0,
            "tax_rate": "20%",
            "profit_after_tax": 0.0,
        }

    def test_recalculate_overwrites_snapshot(self, store, make_shipment):
        store.insert("shipments", make_shipment(price=2000, status=ShipmentStatus.DELIVERED))
        store.insert("fleet_trips", _trip(500))

        first, _, snapshot = recalculate(store)
        second, _, _ = recalculate(store)

        assert first == second
        assert snapshot.net_income == 1500
        assert store.get_financials().tax == 300


@pytest.mark.unit
class TestMoney:

    @pytest.mark.parametrize(
        "value, expected",
        [(0.125, 0.13), (-0.125, -0.13), (2.675, 2.68), (1.0, 1.0)],
    )
    def test_round_money(self, value, expected):
        assert round_money(value) == expected

    def test_round_money_is_stable(self):
        assert round_money(round_money(10.005)) == round_money(10.005)

    def test_format_currency(self):
        assert format_currency(1234567.891, "₺") == "₺1.234.567,89"
        assert format_currency(-5, "₺") == "-₺5,00"

    def test_format_number(self):
        assert format_number(12500, "km") == "12.500 km"
        assert format_number(1234.5) == "1.234,50"
