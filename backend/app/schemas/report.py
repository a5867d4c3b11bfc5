"""Pydantic schemas for the composite report and dashboard stats."""

from datetime import datetime

from pydantic import BaseModel


class ReportFinancial(BaseModel):
    total_revenue: float
    total_fleet_expense: float
    other_expenses: float
    total_expenses: float
    net_income: float
    tax: float
    tax_rate: str
    profit_after_tax: float


class ShipmentCounts(BaseModel):
    total: int
    pending: int
    ready: int
    in_transit: int
    delivered: int


class ReportContainers(BaseModel):
    total: int
    average_utilization: float
    in_use: int
    available: int


class PopularRoute(BaseModel):
    route: str
    destination: str
    shipments: int


class ReportRoutes(BaseModel):
    most_popular_route: str
    popular_routes: list[PopularRoute]
    total_distance_covered: float


class CategoryStat(BaseModel):
    count: int
    weight: float


class ReportProducts(BaseModel):
    sold_per_category: dict[str, CategoryStat]
    total_weight: float


class ReportInventoryRow(BaseModel):
    category: str
    quantity: float
    status: str
    percent_of_minimum: float | None


class ReportFleet(BaseModel):
    total_vehicles: int
    ships: int
    trucks: int
    total_capacity: float


class Report(BaseModel):
    generated_at: datetime
    period: str
    financial: ReportFinancial
    shipments: ShipmentCounts
    containers: ReportContainers
    routes: ReportRoutes
    products: ReportProducts
    inventory: list[ReportInventoryRow]
    fleet: ReportFleet


class ReportResponse(BaseModel):
    success: bool = True
    report: Report


class DashboardStats(BaseModel):
    shipments: ShipmentCounts
    containers_available: int
    average_utilization: float
    vehicles_available: int
    low_stock_categories: list[str]
