"""Management CLI for the data file.

Usage:
    python -m app.cli seed                              # Containers, fleet, inventory
    python -m app.cli create-admin USER EMAIL PASSWORD  # Admin accounts are CLI-only
    python -m app.cli recalculate                       # Rebuild the financial snapshot
    python -m app.cli show                              # Collection counts + financials
"""

import sys

from app.database import COLLECTIONS, DocumentStore, store
from app.middleware.exceptions import TMSException
from app.models import Container, FleetVehicle, InventoryItem
from app.models.container import BIN_CAPACITY_KG, BinType
from app.models.fleet import VehicleType
from app.models.inventory import ProductCategory
from app.models.user import UserRole
from app.services.financials import recalculate
from app.services.users import create_user

SEED_CONTAINERS = [
    BinType.SMALL, BinType.SMALL,
    BinType.MEDIUM, BinType.MEDIUM,
    BinType.LARGE, BinType.LARGE,
]

SEED_FLEET = [
    # type, name, capacity kg, fuel/km, crew, maintenance
    (VehicleType.SHIP, "Aegean Star", 50000, 45, 15000, 8000),
    (VehicleType.SHIP, "Bodrum Express", 30000, 35, 12000, 6000),
    (VehicleType.TRUCK, "Truck TR-48-01", 20000, 8, 2500, 1000),
    (VehicleType.TRUCK, "Truck TR-48-02", 12000, 6, 2000, 800),
]

SEED_INVENTORY = [
    # category, quantity kg, minimum kg
    (ProductCategory.FRESH, 10000, 2000),
    (ProductCategory.FROZEN, 8000, 1500),
    (ProductCategory.ORGANIC, 5000, 1000),
]


def seed(db: DocumentStore) -> None:
    """Insert reference data into empty collections only."""
    with db.transaction():
        if not db.find_all("containers"):
            for bin_type in SEED_CONTAINERS:
                db.insert("containers", Container(type=bin_type, capacity=BIN_CAPACITY_KG[bin_type]))
            print(f"  containers: {len(SEED_CONTAINERS)}")
        if not db.find_all("fleet"):
            for vtype, name, capacity, fuel, crew, maintenance in SEED_FLEET:
                db.insert("fleet", FleetVehicle(
                    type=vtype,
                    name=name,
                    capacity=capacity,
                    fuel_cost_per_km=fuel,
                    crew_cost=crew,
                    maintenance=maintenance,
                ))
            print(f"  fleet: {len(SEED_FLEET)}")
        if not db.find_all("inventory"):
            for category, quantity, min_stock in SEED_INVENTORY:
                db.insert("inventory", InventoryItem(
                    category=category, quantity=quantity, min_stock=min_stock,
                ))
            print(f"  inventory: {len(SEED_INVENTORY)}")
    print("Seed complete.")


def create_admin(db: DocumentStore, username: str, email: str, password: str) -> None:
    user = create_user(db, username, email, password, role=UserRole.ADMIN)
    print(f"Created admin {user.username} (id={user.id})")


def show(db: DocumentStore) -> None:
    for name in COLLECTIONS:
        print(f"  {name:<12} {len(db.find_all(name))}")
    fin = db.get_financials()
    print(
        f"\n  revenue={fin.total_revenue} expenses={fin.total_expenses} "
        f"net={fin.net_income} tax={fin.tax} after_tax={fin.profit_after_tax}"
    )


def main(argv: list[str]) -> int:
    cmd = argv[0] if argv else ""
    try:
        if cmd == "seed":
            seed(store)
        elif cmd == "create-admin" and len(argv) == 4:
            create_admin(store, *argv[1:])
        elif cmd == "recalculate":
            summary, _, _ = recalculate(store)
            print(summary.as_dict())
        elif cmd == "show":
            show(store)
        else:
            print("Usage: python -m app.cli [seed|create-admin USER EMAIL PASSWORD|recalculate|show]")
            return 2
    except TMSException as e:
        print(f"Error: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
