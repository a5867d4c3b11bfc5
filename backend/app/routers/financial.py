"""Financial router (admin).

Endpoints:
    GET   /api/admin/financial/summary       Recompute, store and return the summary
    POST  /api/admin/financial/recalculate   Same, explicit trigger
    POST  /api/admin/financial/expenses      Record a non-trip expense
    GET   /api/admin/financial/expenses      List recorded expenses

The summary is always derived from the ledgers (Delivered shipments, fleet
trips, other expenses) and the stored snapshot is overwritten, never
incremented.
"""

import logging

from fastapi import APIRouter, Depends, status

from app.auth.deps import require_permission
from app.config import settings
from app.database import DocumentStore, get_store
from app.models.base import utcnow
from app.models.financial import Expense, FinancialSnapshot
from app.models.user import User
from app.schemas.common import ListResponse
from app.schemas.financial import (
    ExpenseCreate,
    ExpenseOut,
    FinancialBreakdown,
    FinancialOut,
    FinancialStats,
    FinancialSummaryResponse,
    RecalculateResponse,
)
from app.services.financials import FinancialSummary, Ledgers, recalculate
from app.utils.money import format_currency, round_money

logger = logging.getLogger("tms.financials")

router = APIRouter()


# ── Helpers ──────────────────────────────────────────────────

def _financial_out(summary: FinancialSummary, snapshot: FinancialSnapshot) -> FinancialOut:
    return FinancialOut(
        **summary.as_dict(),
        generated_at=utcnow(),
        last_updated=snapshot.updated_at,
    )


def _stats(summary: FinancialSummary, ledgers: Ledgers) -> FinancialStats:
    delivered = ledgers.delivered_shipments
    return FinancialStats(
        delivered_shipments=delivered,
        average_revenue_per_shipment=(
            round_money(summary.total_revenue / delivered) if delivered else 0.0
        ),
        fleet_trips=ledgers.fleet_trips,
        total_trip_expense=round_money(ledgers.trip_expenses),
        other_expenses=round_money(ledgers.other_expenses),
        total_trip_distance=ledgers.total_trip_distance,
    )


# ── GET /summary ─────────────────────────────────────────────

@router.get("/summary", response_model=FinancialSummaryResponse)
def summary(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("financials.read")),
):
    result, ledgers, snapshot = recalculate(store)
    symbol = settings.currency_symbol
    return FinancialSummaryResponse(
        financial=_financial_out(result, snapshot),
        breakdown=FinancialBreakdown(
            total_revenue=format_currency(result.total_revenue, symbol),
            total_expenses=format_currency(result.total_expenses, symbol),
            net_income=format_currency(result.net_income, symbol),
            tax=format_currency(result.tax, symbol),
            profit_after_tax=format_currency(result.profit_after_tax, symbol),
        ),
        stats=_stats(result, ledgers),
    )


# ── POST /recalculate ────────────────────────────────────────

@router.post("/recalculate", response_model=RecalculateResponse)
def recalculate_financials(
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("financials.write")),
):
    result, ledgers, snapshot = recalculate(store)
    logger.info("Manual recalculation by %s", user.username)
    return RecalculateResponse(
        message="Financials recalculated successfully",
        financial=_financial_out(result, snapshot),
        stats=_stats(result, ledgers),
    )


# ── Expenses ─────────────────────────────────────────────────

@router.post("/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def record_expense(
    body: ExpenseCreate,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("financials.write")),
):
    expense = store.insert("expenses", Expense(
        description=body.description,
        amount=body.amount,
        recorded_by=user.id,
    ))
    logger.info("Expense %s recorded by %s: %s (%g)", expense.id, user.username, body.description, body.amount)
    return expense


@router.get("/expenses", response_model=ListResponse[ExpenseOut])
def list_expenses(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("financials.read")),
):
    expenses = store.find_all("expenses")
    return ListResponse(items=[ExpenseOut.model_validate(e) for e in expenses], count=len(expenses))
