"""Shipment router: customer booking, public tracking, admin status changes.

Endpoints:
    POST   /api/shipments/create          Book a shipment (authenticated)
    GET    /api/shipments/my-shipments    Caller's own shipments
    GET    /api/shipments/track/{id}      Public tracking view
    GET    /api/shipments/all             All shipments, optional ?status= (admin)
    PATCH  /api/shipments/{id}/status     Change status (admin)
    GET    /api/shipments/destinations    Known destinations + origin
    POST   /api/shipments/quote           Price / distance / ETA preview
"""

from fastapi import APIRouter, Depends, Query, status

from app.auth.deps import require_permission
from app.database import DocumentStore, get_store
from app.middleware.exceptions import ResourceNotFoundError
from app.models.shipment import ShipmentStatus
from app.models.user import User
from app.schemas.common import ListResponse
from app.schemas.container import ContainerOut
from app.schemas.shipment import (
    PriceBreakdown,
    QuoteRequest,
    ShipmentCreate,
    ShipmentCreated,
    ShipmentOut,
    ShipmentStatusUpdated,
    StatusUpdate,
    TrackingInfo,
    TrackingResponse,
)
from app.services.distance import ORIGIN, known_destinations
from app.services.pricing import check_capacity
from app.services.shipments import create_shipment, quote, tracking_view, update_status

router = APIRouter()


# ── POST /api/shipments/create ───────────────────────────────

@router.post("/create", response_model=ShipmentCreated, status_code=status.HTTP_201_CREATED)
def create(
    body: ShipmentCreate,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("shipment.create")),
):
    shipment, breakdown = create_shipment(body, user, store)
    return ShipmentCreated(
        message="Shipment created successfully",
        shipment=ShipmentOut.model_validate(shipment),
        price_breakdown=breakdown,
    )


# ── GET /api/shipments/my-shipments ──────────────────────────

@router.get("/my-shipments", response_model=ListResponse[ShipmentOut])
def my_shipments(
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("shipment.read")),
):
    items = store.find_all("shipments", lambda s: s.customer_id == user.id)
    items.sort(key=lambda s: s.created_at, reverse=True)
    return ListResponse(items=[ShipmentOut.model_validate(s) for s in items], count=len(items))


# ── GET /api/shipments/track/{id} ────────────────────────────

@router.get("/track/{shipment_id}", response_model=TrackingResponse)
def track(shipment_id: int, store: DocumentStore = Depends(get_store)):
    """Public: anyone holding the order number can track it."""
    shipment = store.get("shipments", shipment_id)
    if shipment is None:
        raise ResourceNotFoundError("Shipment", shipment_id)

    container = None
    if shipment.container_id is not None:
        found = store.get("containers", shipment.container_id)
        container = ContainerOut.model_validate(found) if found else None

    return TrackingResponse(
        shipment=ShipmentOut.model_validate(shipment),
        container=container,
        tracking=TrackingInfo(**tracking_view(shipment)),
    )


# ── GET /api/shipments/all ───────────────────────────────────

@router.get("/all", response_model=ListResponse[ShipmentOut])
def all_shipments(
    shipment_status: ShipmentStatus | None = Query(None, alias="status"),
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("shipment.manage")),
):
    if shipment_status is None:
        items = store.find_all("shipments")
    else:
        items = store.find_all("shipments", lambda s: s.status == shipment_status)
    items.sort(key=lambda s: s.created_at, reverse=True)
    return ListResponse(items=[ShipmentOut.model_validate(s) for s in items], count=len(items))


# ── PATCH /api/shipments/{id}/status ─────────────────────────

@router.patch("/{shipment_id}/status", response_model=ShipmentStatusUpdated)
def change_status(
    shipment_id: int,
    body: StatusUpdate,
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("shipment.manage")),
):
    shipment = update_status(store, shipment_id, body.status)
    return ShipmentStatusUpdated(
        message=f"Shipment status updated to {body.status.value}",
        shipment=ShipmentOut.model_validate(shipment),
    )


# ── GET /api/shipments/destinations ──────────────────────────

@router.get("/destinations")
async def destinations():
    return {"origin": ORIGIN, "destinations": known_destinations()}


# ── POST /api/shipments/quote ────────────────────────────────

@router.post("/quote")
async def price_quote(body: QuoteRequest):
    """Preview price and delivery estimate. Writes nothing."""
    breakdown: PriceBreakdown = quote(body.destination, body.container_type)
    result = breakdown.model_dump()
    if body.weight is not None:
        result["fits_container"] = check_capacity(body.weight, body.container_type)
    return result
