"""Inventory: stock of blueberries per product category, in kg.

Decremented when a shipment is created, incremented by restocks.
`status` is derived: OK while quantity >= min_stock, otherwise Low.
"""

import enum
from datetime import datetime

from pydantic import Field

from app.models.base import Record, utcnow


class ProductCategory(str, enum.Enum):
    FRESH = "Fresh"
    FROZEN = "Frozen"
    ORGANIC = "Organic"


class StockStatus(str, enum.Enum):
    OK = "OK"
    LOW = "Low"


def stock_status(quantity: float, min_stock: float) -> StockStatus:
    return StockStatus.OK if quantity >= min_stock else StockStatus.LOW


class InventoryItem(Record):
    category: ProductCategory
    quantity: float = Field(..., ge=0)
    min_stock: float = Field(0, ge=0)
    status: StockStatus = StockStatus.OK
    last_updated: datetime = Field(default_factory=utcnow)
