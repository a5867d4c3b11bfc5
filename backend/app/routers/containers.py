"""Container management router (admin).

Endpoints:
    GET   /api/admin/containers               List containers with stats
    GET   /api/admin/containers/{id}          Detail with loaded shipments
    POST  /api/admin/containers/optimize      Pack Pending shipments (first-fit decreasing)
    POST  /api/admin/containers/{id}/reset    Unload a container back to Available
"""

import logging

from fastapi import APIRouter, Depends

from app.auth.deps import require_permission
from app.database import DocumentStore, get_store
from app.middleware.exceptions import BusinessLogicError, ResourceNotFoundError
from app.models.base import utcnow
from app.models.container import ContainerStatus
from app.models.shipment import ShipmentStatus
from app.models.user import User
from app.schemas.container import (
    AssignmentOut,
    ContainerListResponse,
    ContainerOut,
    ContainerResetResponse,
    ContainerStats,
    ContainerUsageOut,
    OptimizationOut,
    OptimizationResponse,
)
from app.schemas.shipment import ContainerDetail, ShipmentOut
from app.services.container_optimizer import (
    average_utilization,
    optimize_containers,
    utilization_pct,
)

logger = logging.getLogger("tms.containers")

router = APIRouter()

RESETTABLE_STATUSES = (
    ContainerStatus.READY,
    ContainerStatus.READY_FOR_TRANSPORT,
)


# ── GET /api/admin/containers ────────────────────────────────

@router.get("", response_model=ContainerListResponse)
def list_containers(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("containers.manage")),
):
    containers = store.find_all("containers")
    avg = average_utilization(containers)
    stats = ContainerStats(
        total=len(containers),
        available=sum(1 for c in containers if c.status == ContainerStatus.AVAILABLE),
        ready=sum(
            1 for c in containers
            if c.status in (ContainerStatus.READY, ContainerStatus.READY_FOR_TRANSPORT)
        ),
        in_transit=sum(1 for c in containers if c.status == ContainerStatus.IN_TRANSIT),
        average_utilization=avg,
        average_utilization_display=f"{avg:.2f}%",
    )
    return ContainerListResponse(
        containers=[ContainerOut.model_validate(c) for c in containers],
        stats=stats,
    )


# ── GET /api/admin/containers/{id} ───────────────────────────

@router.get("/{container_id}", response_model=ContainerDetail)
def get_container(
    container_id: int,
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("containers.manage")),
):
    container = store.get("containers", container_id)
    if container is None:
        raise ResourceNotFoundError("Container", container_id)

    loaded = store.find_all("shipments", lambda s: s.container_id == container_id)
    return ContainerDetail(
        container=ContainerOut.model_validate(container),
        shipments=[ShipmentOut.model_validate(s) for s in loaded],
        utilization=utilization_pct(container.current_load, container.capacity),
        remaining_capacity=max(container.capacity - container.current_load, 0),
    )


# ── POST /api/admin/containers/optimize ──────────────────────

@router.post("/optimize", response_model=OptimizationResponse)
def optimize(
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("containers.manage")),
):
    """Pack all Pending shipments into Available containers.

    Assignments and container loads are written in one unit of work, so a
    storage failure leaves both collections as they were.
    """
    with store.transaction():
        result = optimize_containers(
            store.find_all("shipments"),
            store.find_all("containers"),
        )
        if not result.success:
            raise BusinessLogicError(result.message, error_code="NOTHING_TO_OPTIMIZE")

        now = utcnow()
        for a in result.assignments:
            store.update("shipments", lambda s, sid=a.shipment_id: s.id == sid, {
                "status": ShipmentStatus.READY,
                "container_id": a.container_id,
                "updated_at": now,
            })
        for c in result.updated_containers:
            store.update("containers", lambda r, cid=c.id: r.id == cid, {
                "current_load": c.current_load,
                "status": c.status,
                "updated_at": now,
            })

    logger.info("Optimization by %s: %s", user.username, result.message)
    return OptimizationResponse(
        success=True,
        message=result.message,
        optimization=OptimizationOut(
            total_shipments_assigned=result.total_assigned,
            containers_used=result.containers_used,
            assignments=[AssignmentOut.model_validate(a) for a in result.assignments],
            container_details=[
                ContainerUsageOut.model_validate(c) for c in result.updated_containers
            ],
            unassigned=result.unassigned,
        ),
    )


# ── POST /api/admin/containers/{id}/reset ────────────────────

@router.post("/{container_id}/reset", response_model=ContainerResetResponse)
def reset_container(
    container_id: int,
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("containers.manage")),
):
    """Empty a loaded container and send its Ready shipments back to Pending.

    Only containers still at the loading dock can be reset.
    """
    with store.transaction():
        existing = store.get("containers", container_id)
        if existing is None:
            raise ResourceNotFoundError("Container", container_id)
        if existing.status not in RESETTABLE_STATUSES:
            raise BusinessLogicError(
                f"Container {container_id} is {existing.status.value} and cannot be reset",
                error_code="CONTAINER_IN_USE",
                details={"status": existing.status.value},
            )

        def _loaded(s) -> bool:
            return s.container_id == container_id and s.status == ShipmentStatus.READY

        released = [s.id for s in store.find_all("shipments", _loaded)]
        container = store.update("containers", lambda c: c.id == container_id, {
            "current_load": 0,
            "status": ContainerStatus.AVAILABLE,
            "updated_at": utcnow(),
        })
        store.update_many("shipments", _loaded, {
            "status": ShipmentStatus.PENDING,
            "container_id": None,
            "updated_at": utcnow(),
        })

    logger.info(
        "Container %s reset by %s, released %d shipments",
        container_id, user.username, len(released),
    )
    return ContainerResetResponse(
        message=f"Container {container_id} reset",
        container=ContainerOut.model_validate(container),
        released_shipments=released,
    )
