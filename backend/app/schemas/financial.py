"""Pydantic schemas for the financial summary and the expense ledger."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.validators import sanitize_string


class FinancialOut(BaseModel):
    total_revenue: float
    total_expenses: float
    net_income: float
    tax: float
    tax_rate: str
    profit_after_tax: float
    generated_at: datetime
    last_updated: datetime


class FinancialBreakdown(BaseModel):
    """Display strings for the dashboard, e.g. "₺12.500,00"."""
    total_revenue: str
    total_expenses: str
    net_income: str
    tax: str
    profit_after_tax: str


class FinancialStats(BaseModel):
    delivered_shipments: int
    average_revenue_per_shipment: float
    fleet_trips: int
    total_trip_expense: float
    other_expenses: float
    total_trip_distance: float


class FinancialSummaryResponse(BaseModel):
    financial: FinancialOut
    breakdown: FinancialBreakdown
    stats: FinancialStats


class RecalculateResponse(BaseModel):
    message: str
    financial: FinancialOut
    stats: FinancialStats


# ── Other expenses ───────────────────────────────────────────

class ExpenseCreate(BaseModel):
    description: str
    amount: float = Field(..., gt=0, allow_inf_nan=False)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return sanitize_string(v)


class ExpenseOut(BaseModel):
    id: int
    description: str
    amount: float
    recorded_by: int | None
    created_at: datetime

    model_config = {"from_attributes": True}
