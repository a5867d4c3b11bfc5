"""Fleet router (admin): vehicles, trip expenses and vehicle selection.

Endpoints:
    GET    /api/admin/fleet                     List vehicles with stats
    GET    /api/admin/fleet/trips               Trip expense ledger
    POST   /api/admin/fleet/calculate-expense   Compute and log a trip expense
    POST   /api/admin/fleet/select-vehicle      Cheapest suitable vehicle
    GET    /api/admin/fleet/{id}                Vehicle detail
    PATCH  /api/admin/fleet/{id}/status         Change vehicle status
"""

import logging

from fastapi import APIRouter, Depends

from app.auth.deps import require_permission
from app.config import settings
from app.database import DocumentStore, get_store
from app.middleware.exceptions import InvalidInputError, ResourceNotFoundError
from app.models.fleet import VehicleStatus, VehicleType
from app.models.user import User
from app.schemas.common import ListResponse
from app.schemas.fleet import (
    FleetListResponse,
    FleetStats,
    SelectVehicleRequest,
    SelectVehicleResponse,
    TripExpenseOut,
    TripExpenseRequest,
    TripExpenseResponse,
    TripOut,
    VehicleOut,
    VehicleStatusUpdate,
)
from app.services.distance import country_of, resolve_distance
from app.services.fleet import calculate_trip_expense, formula_breakdown, select_vehicle

logger = logging.getLogger("tms.fleet")

router = APIRouter()

FORMULA = "(Fuel Cost/km × Distance) + Crew/Driver + Maintenance"


@router.get("", response_model=FleetListResponse)
def list_fleet(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("fleet.manage")),
):
    fleet = store.find_all("fleet")
    stats = FleetStats(
        total=len(fleet),
        ships=sum(1 for v in fleet if v.type == VehicleType.SHIP),
        trucks=sum(1 for v in fleet if v.type == VehicleType.TRUCK),
        available=sum(1 for v in fleet if v.status == VehicleStatus.AVAILABLE),
        in_use=sum(1 for v in fleet if v.status == VehicleStatus.IN_USE),
    )
    return FleetListResponse(fleet=[VehicleOut.model_validate(v) for v in fleet], stats=stats)


@router.get("/trips", response_model=ListResponse[TripOut])
def list_trips(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("fleet.manage")),
):
    trips = store.find_all("fleet_trips")
    trips.sort(key=lambda t: t.created_at, reverse=True)
    return ListResponse(items=[TripOut.model_validate(t) for t in trips], count=len(trips))


@router.post("/calculate-expense", response_model=TripExpenseResponse)
def calculate_expense(
    body: TripExpenseRequest,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("fleet.manage")),
):
    """Compute a trip expense and append it to the ledger.

    Trip rows feed total expenses in the financial summary.
    """
    vehicle = store.get("fleet", body.vehicle_id)
    if vehicle is None:
        raise ResourceNotFoundError("Vehicle", body.vehicle_id)
    if body.shipment_id is not None and store.get("shipments", body.shipment_id) is None:
        raise ResourceNotFoundError("Shipment", body.shipment_id)

    expense = calculate_trip_expense(vehicle, body.distance)
    trip = store.insert("fleet_trips", expense.to_trip(body.shipment_id))

    logger.info(
        "Trip %s logged by %s: %s over %g km = %g",
        trip.id, user.username, vehicle.name, body.distance, expense.total_expense,
    )
    return TripExpenseResponse(
        trip_id=trip.id,
        expense=TripExpenseOut(**expense.as_dict()),
        formula=FORMULA,
        calculation=formula_breakdown(
            expense, vehicle.fuel_cost_per_km, settings.currency_symbol
        ),
    )


@router.post("/select-vehicle", response_model=SelectVehicleResponse)
def choose_vehicle(
    body: SelectVehicleRequest,
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("fleet.manage")),
):
    if body.shipment_id is not None:
        shipment = store.get("shipments", body.shipment_id)
        if shipment is None:
            raise ResourceNotFoundError("Shipment", body.shipment_id)
        weight = shipment.weight
        country = shipment.destination_country
        distance = shipment.distance
    elif body.weight is not None and body.destination:
        weight = body.weight
        country = country_of(body.destination)
        distance = resolve_distance(body.destination)
    else:
        raise InvalidInputError("Provide shipment_id, or weight and destination")

    vehicle = select_vehicle(weight, country, distance, store.find_all("fleet"))
    expense = calculate_trip_expense(vehicle, distance)
    return SelectVehicleResponse(
        vehicle=VehicleOut.model_validate(vehicle),
        distance=distance,
        estimated_expense=TripExpenseOut(**expense.as_dict()),
    )


@router.get("/{vehicle_id}", response_model=VehicleOut)
def get_vehicle(
    vehicle_id: int,
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("fleet.manage")),
):
    vehicle = store.get("fleet", vehicle_id)
    if vehicle is None:
        raise ResourceNotFoundError("Vehicle", vehicle_id)
    return vehicle


@router.patch("/{vehicle_id}/status", response_model=VehicleOut)
def change_vehicle_status(
    vehicle_id: int,
    body: VehicleStatusUpdate,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("fleet.manage")),
):
    vehicle = store.update("fleet", lambda v: v.id == vehicle_id, {"status": body.status})
    if vehicle is None:
        raise ResourceNotFoundError("Vehicle", vehicle_id)
    logger.info("Vehicle %s status → %s (%s)", vehicle_id, body.status.value, user.username)
    return vehicle
