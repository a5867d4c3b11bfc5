"""Pydantic schemas for inventory stock and restocking."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.models.inventory import ProductCategory, StockStatus


class InventoryOut(BaseModel):
    id: int
    category: ProductCategory
    quantity: float
    min_stock: float
    status: StockStatus
    last_updated: datetime

    model_config = {"from_attributes": True}


class InventoryAlert(BaseModel):
    category: ProductCategory
    message: str
    current_stock: float
    minimum_stock: float
    deficit: float


class InventoryStats(BaseModel):
    total_categories: int
    total_quantity: float
    low_stock_items: int


class InventoryListResponse(BaseModel):
    inventory: list[InventoryOut]
    alerts: list[InventoryAlert]
    stats: InventoryStats


class InventoryDetail(BaseModel):
    inventory: InventoryOut
    alert: str | None
    stock_level: StockStatus
    percent_of_minimum: float | None


class RestockRequest(BaseModel):
    quantity: float = Field(..., gt=0, allow_inf_nan=False)


class InventoryUpdate(BaseModel):
    """Payload for PUT /api/admin/inventory/{category}; absent fields are kept."""
    quantity: float | None = Field(None, ge=0, allow_inf_nan=False)
    min_stock: float | None = Field(None, ge=0, allow_inf_nan=False)


class InventoryChanged(BaseModel):
    message: str
    inventory: InventoryOut
