"""Fleet trip expenses and vehicle selection.

Trip Expense = (Fuel Cost/km × Distance) + Crew/Driver + Maintenance

Distances are validated by the caller (request schema): finite and > 0.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from app.middleware.exceptions import BusinessLogicError
from app.models.fleet import FleetTrip, FleetVehicle, VehicleStatus, VehicleType
from app.services.distance import is_domestic


@dataclass(frozen=True)
class TripExpense:
    vehicle_id: int | None
    vehicle_name: str
    vehicle_type: VehicleType
    distance: float
    fuel_expense: float
    crew_expense: float
    maintenance_expense: float
    total_expense: float

    def as_dict(self) -> dict:
        return asdict(self)

    def to_trip(self, shipment_id: int | None = None) -> FleetTrip:
        """Ledger row for this calculation."""
        return FleetTrip(
            vehicle_id=self.vehicle_id,
            vehicle_name=self.vehicle_name,
            vehicle_type=self.vehicle_type,
            distance=self.distance,
            fuel_expense=self.fuel_expense,
            crew_expense=self.crew_expense,
            maintenance_expense=self.maintenance_expense,
            total_expense=self.total_expense,
            shipment_id=shipment_id,
        )


def calculate_trip_expense(vehicle: FleetVehicle, distance_km: float) -> TripExpense:
    fuel = vehicle.fuel_cost_per_km * distance_km
    total = fuel + vehicle.crew_cost + vehicle.maintenance
    return TripExpense(
        vehicle_id=vehicle.id,
        vehicle_name=vehicle.name,
        vehicle_type=vehicle.type,
        distance=distance_km,
        fuel_expense=fuel,
        crew_expense=vehicle.crew_cost,
        maintenance_expense=vehicle.maintenance,
        total_expense=total,
    )


def select_vehicle(
    weight_kg: float,
    destination_country: str,
    distance_km: float,
    fleet: list[FleetVehicle],
) -> FleetVehicle:
    """Pick the cheapest available vehicle able to carry `weight_kg`.

    Trucks serve domestic destinations, ships everything else. Cost is the
    trip expense over `distance_km`; ties keep fleet order.

    Raises BusinessLogicError(NO_MATCHING_VEHICLE) if nothing qualifies.
    """
    wanted = VehicleType.TRUCK if is_domestic(destination_country) else VehicleType.SHIP
    candidates = [
        v for v in fleet
        if v.type == wanted
        and v.status == VehicleStatus.AVAILABLE
        and v.capacity >= weight_kg
    ]
    if not candidates:
        scope = "domestic" if wanted == VehicleType.TRUCK else "international"
        raise BusinessLogicError(
            f"No available {wanted.value.lower()}s for {scope} delivery of {weight_kg} kg",
            error_code="NO_MATCHING_VEHICLE",
        )
    return min(
        candidates,
        key=lambda v: calculate_trip_expense(v, distance_km).total_expense,
    )


def formula_breakdown(expense: TripExpense, fuel_cost_per_km: float, symbol: str = "₺") -> str:
    return (
        f"({symbol}{fuel_cost_per_km:g} × {expense.distance:g} km) + "
        f"{symbol}{expense.crew_expense:g} + {symbol}{expense.maintenance_expense:g} = "
        f"{symbol}{expense.total_expense:g}"
    )
