from datetime import datetime

from pydantic import BaseModel, Field

from app.models.base import Record, utcnow


class FinancialSnapshot(BaseModel):
    """Singleton summary, overwritten wholesale on every recalculation."""
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0
    tax: float = 0.0
    profit_after_tax: float = 0.0
    updated_at: datetime = Field(default_factory=utcnow)


class Expense(Record):
    """A non-trip operating expense (rent, insurance, ...)."""
    description: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    recorded_by: int | None = None
    created_at: datetime = Field(default_factory=utcnow)
