"""Aggregate record imports; the store maps collection names onto these."""

from app.models.base import Record  # noqa: F401
from app.models.container import BinType, Container, ContainerStatus  # noqa: F401
from app.models.financial import Expense, FinancialSnapshot  # noqa: F401
from app.models.fleet import FleetTrip, FleetVehicle, VehicleStatus, VehicleType  # noqa: F401
from app.models.inventory import InventoryItem, ProductCategory, StockStatus  # noqa: F401
from app.models.shipment import ContainerClass, Shipment, ShipmentStatus  # noqa: F401
from app.models.user import User, UserRole  # noqa: F401
