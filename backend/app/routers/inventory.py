"""Inventory router (admin): stock levels, alerts and restocking.

Endpoints:
    GET   /api/admin/inventory                        List stock with low-stock alerts
    GET   /api/admin/inventory/{category}             One category
    POST  /api/admin/inventory/{category}/restock     Add stock
    PUT   /api/admin/inventory/{category}             Set quantity / minimum
"""

import logging

from fastapi import APIRouter, Depends

from app.auth.deps import require_permission
from app.database import DocumentStore, get_store
from app.middleware.exceptions import ResourceNotFoundError
from app.models.base import utcnow
from app.models.inventory import InventoryItem, ProductCategory, StockStatus, stock_status
from app.models.user import User
from app.schemas.inventory import (
    InventoryAlert,
    InventoryChanged,
    InventoryDetail,
    InventoryListResponse,
    InventoryOut,
    InventoryStats,
    InventoryUpdate,
    RestockRequest,
)
from app.services.reports import percent_of_minimum

logger = logging.getLogger("tms.inventory")

router = APIRouter()


def alert_message(category: ProductCategory) -> str:
    return f"{category.value} blueberries stock running low — please restock."


def _get_or_404(store: DocumentStore, category: ProductCategory) -> InventoryItem:
    item = store.find_one("inventory", lambda i: i.category == category)
    if item is None:
        raise ResourceNotFoundError("Inventory", category.value)
    return item


@router.get("", response_model=InventoryListResponse)
def list_inventory(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("inventory.manage")),
):
    items = store.find_all("inventory")
    alerts = [
        InventoryAlert(
            category=i.category,
            message=alert_message(i.category),
            current_stock=i.quantity,
            minimum_stock=i.min_stock,
            deficit=i.min_stock - i.quantity,
        )
        for i in items
        if i.quantity < i.min_stock
    ]
    return InventoryListResponse(
        inventory=[InventoryOut.model_validate(i) for i in items],
        alerts=alerts,
        stats=InventoryStats(
            total_categories=len(items),
            total_quantity=sum(i.quantity for i in items),
            low_stock_items=sum(1 for i in items if i.status == StockStatus.LOW),
        ),
    )


@router.get("/{category}", response_model=InventoryDetail)
def get_inventory(
    category: ProductCategory,
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("inventory.manage")),
):
    item = _get_or_404(store, category)
    level = stock_status(item.quantity, item.min_stock)
    return InventoryDetail(
        inventory=InventoryOut.model_validate(item),
        alert=alert_message(category) if level == StockStatus.LOW else None,
        stock_level=level,
        percent_of_minimum=percent_of_minimum(item),
    )


@router.post("/{category}/restock", response_model=InventoryChanged)
def restock(
    category: ProductCategory,
    body: RestockRequest,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("inventory.manage")),
):
    with store.transaction():
        item = _get_or_404(store, category)
        quantity = item.quantity + body.quantity
        updated = store.update("inventory", lambda i: i.id == item.id, {
            "quantity": quantity,
            "status": stock_status(quantity, item.min_stock),
            "last_updated": utcnow(),
        })

    logger.info("Restocked %s +%g kg → %g kg (%s)", category.value, body.quantity, quantity, user.username)
    return InventoryChanged(
        message=f"Restocked {body.quantity:g} kg of {category.value} blueberries",
        inventory=InventoryOut.model_validate(updated),
    )


@router.put("/{category}", response_model=InventoryChanged)
def update_inventory(
    category: ProductCategory,
    body: InventoryUpdate,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("inventory.manage")),
):
    with store.transaction():
        item = _get_or_404(store, category)
        quantity = item.quantity if body.quantity is None else body.quantity
        min_stock = item.min_stock if body.min_stock is None else body.min_stock
        updated = store.update("inventory", lambda i: i.id == item.id, {
            "quantity": quantity,
            "min_stock": min_stock,
            "status": stock_status(quantity, min_stock),
            "last_updated": utcnow(),
        })

    logger.info("Inventory %s set to %g kg (min %g) by %s", category.value, quantity, min_stock, user.username)
    return InventoryChanged(
        message=f"{category.value} inventory updated",
        inventory=InventoryOut.model_validate(updated),
    )
