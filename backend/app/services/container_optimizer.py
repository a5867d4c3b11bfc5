"""Container loading: First-Fit Decreasing bin packing.

    1. Keep Pending shipments and Available containers.
    2. Sort shipments by weight, heaviest first (stable for equal weights).
    3. Put each shipment in the first container, in the given order, whose
       remaining capacity can hold it. No backtracking.
    4. Containers that received anything become "Ready for Transport".

Shipments that fit nowhere are reported in `unassigned`; that is still a
successful run. Having nothing to pack (no pending shipments or no
available containers) is reported as an unsuccessful result rather than
raised, and nothing should be written back in that case.

The optimizer is pure: it returns what should change and the caller
persists it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.models.container import LOADED_STATUSES, BinType, Container, ContainerStatus
from app.models.shipment import Shipment, ShipmentStatus
from app.utils.money import round_money


@dataclass
class Assignment:
    shipment_id: int
    container_id: int
    container_type: BinType
    weight: float


@dataclass
class ContainerUsage:
    id: int
    type: BinType
    capacity: float
    current_load: float
    remaining_capacity: float
    shipment_count: int
    utilization: float
    status: ContainerStatus


@dataclass
class OptimizationResult:
    success: bool
    message: str
    assignments: list[Assignment] = field(default_factory=list)
    updated_containers: list[ContainerUsage] = field(default_factory=list)
    unassigned: list[int] = field(default_factory=list)

    @property
    def total_assigned(self) -> int:
        return len(self.assignments)

    @property
    def containers_used(self) -> int:
        return len(self.updated_containers)


@dataclass
class _Bin:
    container: Container
    capacity: float
    current_load: float
    remaining: float
    shipment_count: int = 0


def utilization_pct(current_load: float, capacity: float) -> float:
    if capacity <= 0:
        return 0.0
    return round_money(current_load / capacity * 100)


def optimize_containers(
    shipments: list[Shipment],
    containers: list[Container],
) -> OptimizationResult:
    pending = [s for s in shipments if s.status == ShipmentStatus.PENDING]
    available = [c for c in containers if c.status == ContainerStatus.AVAILABLE]

    if not pending:
        return OptimizationResult(success=False, message="No pending shipments to optimize")
    if not available:
        return OptimizationResult(success=False, message="No available containers")

    # sorted() is stable: equal weights keep their input order
    ordered = sorted(pending, key=lambda s: s.weight, reverse=True)

    bins = [
        _Bin(
            container=c,
            capacity=c.capacity,
            current_load=c.current_load,
            remaining=max(c.capacity - c.current_load, 0),
        )
        for c in available
    ]

    assignments: list[Assignment] = []
    unassigned: list[int] = []

    for shipment in ordered:
        target = next((b for b in bins if shipment.weight <= b.remaining), None)
        if target is None:
            unassigned.append(shipment.id)
            continue
        target.remaining = round_money(target.remaining - shipment.weight)
        target.current_load = round_money(target.current_load + shipment.weight)
        target.shipment_count += 1
        assignments.append(Assignment(
            shipment_id=shipment.id,
            container_id=target.container.id,
            container_type=target.container.type,
            weight=shipment.weight,
        ))

    updated = []
    for b in bins:
        if not b.shipment_count:
            continue
        load = min(b.current_load, b.capacity)
        updated.append(ContainerUsage(
            id=b.container.id,
            type=b.container.type,
            capacity=b.capacity,
            current_load=load,
            remaining_capacity=max(round_money(b.capacity - load), 0),
            shipment_count=b.shipment_count,
            utilization=utilization_pct(load, b.capacity),
            status=ContainerStatus.READY_FOR_TRANSPORT,
        ))

    message = f"Optimized {len(assignments)} shipments into {len(updated)} containers"
    if unassigned:
        message += f"; {len(unassigned)} could not be placed"

    return OptimizationResult(
        success=True,
        message=message,
        assignments=assignments,
        updated_containers=updated,
        unassigned=unassigned,
    )


def average_utilization(containers: list[Container]) -> float:
    """Mean utilization % over loaded containers (0 if none are loaded)."""
    loaded = [c for c in containers if c.status in LOADED_STATUSES]
    if not loaded:
        return 0.0
    total = sum(
        min(c.current_load, c.capacity) / c.capacity * 100
        for c in loaded
        if c.capacity > 0
    )
    return round_money(total / len(loaded))
