"""Financial aggregation.

    Net Income       = Revenue − Expenses
    Tax              = 20% of Net Income, only when Net Income > 0
    Profit After Tax = Net Income − Tax

Revenue is the sum of `price` over Delivered shipments. Expenses are the
logged fleet trips plus other recorded expenses. Arithmetic is done in
Decimal and each output rounded once, so recomputing from the same ledgers
always gives the same numbers.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal

from app.database import DocumentStore
from app.models.financial import Expense, FinancialSnapshot
from app.models.fleet import FleetTrip
from app.models.shipment import Shipment, ShipmentStatus
from app.utils.money import round_money, to_decimal

logger = logging.getLogger("tms.financials")

TAX_RATE = Decimal("0.20")


@dataclass(frozen=True)
class FinancialSummary:
    total_revenue: float
    total_expenses: float
    net_income: float
    tax: float
    tax_rate: str
    profit_after_tax: float

    def as_dict(self) -> dict:
        return asdict(self)

    def snapshot_patch(self) -> dict:
        """Fields of the persisted financial singleton."""
        return {
            "total_revenue": self.total_revenue,
            "total_expenses": self.total_expenses,
            "net_income": self.net_income,
            "tax": self.tax,
            "profit_after_tax": self.profit_after_tax,
        }


@dataclass(frozen=True)
class Ledgers:
    """Raw totals gathered from the collections."""
    total_revenue: Decimal
    trip_expenses: Decimal
    other_expenses: Decimal
    delivered_shipments: int
    fleet_trips: int
    total_trip_distance: float

    @property
    def total_expenses(self) -> Decimal:
        return self.trip_expenses + self.other_expenses


def summarize(total_revenue: float | Decimal, total_expenses: float | Decimal) -> FinancialSummary:
    revenue = to_decimal(total_revenue)
    expenses = to_decimal(total_expenses)

    net_income = revenue - expenses
    tax = net_income * TAX_RATE if net_income > 0 else Decimal("0")
    profit_after_tax = net_income - tax

    return FinancialSummary(
        total_revenue=round_money(revenue),
        total_expenses=round_money(expenses),
        net_income=round_money(net_income),
        tax=round_money(tax),
        tax_rate=f"{TAX_RATE * 100:.0f}%",
        profit_after_tax=round_money(profit_after_tax),
    )


def collect_ledgers(
    shipments: list[Shipment],
    trips: list[FleetTrip],
    expenses: list[Expense] | None = None,
) -> Ledgers:
    delivered = [s for s in shipments if s.status == ShipmentStatus.DELIVERED]
    return Ledgers(
        total_revenue=sum((to_decimal(s.price) for s in delivered), Decimal("0")),
        trip_expenses=sum((to_decimal(t.total_expense) for t in trips), Decimal("0")),
        other_expenses=sum((to_decimal(e.amount) for e in expenses or []), Decimal("0")),
        delivered_shipments=len(delivered),
        fleet_trips=len(trips),
        total_trip_distance=sum(t.distance for t in trips),
    )


def summarize_ledgers(ledgers: Ledgers) -> FinancialSummary:
    return summarize(ledgers.total_revenue, ledgers.total_expenses)


def recalculate(store: DocumentStore) -> tuple[FinancialSummary, Ledgers, FinancialSnapshot]:
    """Recompute from the ledgers and overwrite the stored snapshot.

    Running it twice with no ledger changes stores the same numbers.
    """
    with store.transaction():
        ledgers = collect_ledgers(
            store.find_all("shipments"),
            store.find_all("fleet_trips"),
            store.find_all("expenses"),
        )
        summary = summarize_ledgers(ledgers)
        snapshot = store.update_financials(summary.snapshot_patch())
    logger.info(
        "Financials recalculated: revenue=%s expenses=%s net=%s",
        summary.total_revenue, summary.total_expenses, summary.net_income,
    )
    return summary, ledgers, snapshot
