"""Pydantic schemas for containers and the loading optimizer."""

from datetime import datetime

from pydantic import BaseModel

from app.models.container import BinType, ContainerStatus


class ContainerOut(BaseModel):
    id: int
    type: BinType
    capacity: float
    current_load: float
    status: ContainerStatus
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContainerStats(BaseModel):
    total: int
    available: int
    ready: int
    in_transit: int
    average_utilization: float
    average_utilization_display: str


class ContainerListResponse(BaseModel):
    containers: list[ContainerOut]
    stats: ContainerStats


# ── Optimizer output ─────────────────────────────────────────

class AssignmentOut(BaseModel):
    shipment_id: int
    container_id: int
    container_type: BinType
    weight: float

    model_config = {"from_attributes": True}


class ContainerUsageOut(BaseModel):
    id: int
    type: BinType
    capacity: float
    current_load: float
    remaining_capacity: float
    shipment_count: int
    utilization: float
    status: ContainerStatus

    model_config = {"from_attributes": True}


class OptimizationOut(BaseModel):
    total_shipments_assigned: int
    containers_used: int
    assignments: list[AssignmentOut]
    container_details: list[ContainerUsageOut]
    unassigned: list[int]


class OptimizationResponse(BaseModel):
    success: bool
    message: str
    optimization: OptimizationOut


class ContainerResetResponse(BaseModel):
    message: str
    container: ContainerOut
    released_shipments: list[int]
