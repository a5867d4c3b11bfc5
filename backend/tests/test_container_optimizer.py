"""Tests for first-fit-decreasing container loading."""

import pytest

from app.models.container import ContainerStatus
from app.models.shipment import ShipmentStatus
from app.services.container_optimizer import (
    average_utilization,
    optimize_containers,
    utilization_pct,
)


@pytest.mark.unit
class TestOptimizeContainers:

    def test_first_fit_decreasing_order(self, make_shipment, make_container):
        """8000 → #1, 3000 → #2 (only 2000 left in #1), 1000 → back into #1."""
        shipments = [
            make_shipment(id=1, weight=8000),
            make_shipment(id=2, weight=3000),
            make_shipment(id=3, weight=1000),
        ]
        containers = [
            make_container(1, capacity=10000),
            make_container(2, capacity=5000),
        ]

        result = optimize_containers(shipments, containers)

        assert result.success
        assert [(a.shipment_id, a.container_id) for a in result.assignments] == [(1, 1), (2, 2), (3, 1)]
        assert result.unassigned == []
        assert {c.id: c.current_load for c in result.updated_containers} == {1: 9000, 2: 3000}
        assert all(c.status == ContainerStatus.READY_FOR_TRANSPORT for c in result.updated_containers)

    def test_input_order_does_not_matter_for_weights(self, make_shipment, make_container):
        shipments = [
            make_shipment(id=3, weight=1000),
            make_shipment(id=1, weight=8000),
            make_shipment(id=2, weight=3000),
        ]
        containers = [make_container(1, capacity=10000), make_container(2, capacity=5000)]

        result = optimize_containers(shipments, containers)
        assert [a.shipment_id for a in result.assignments] == [1, 2, 3]

    def test_equal_weights_keep_input_order(self, make_shipment, make_container):
        shipments = [make_shipment(id=i, weight=500) for i in (5, 2, 9)]
        result = optimize_containers(shipments, [make_container(1)])
        assert [a.shipment_id for a in result.assignments] == [5, 2, 9]

    def test_no_fit_is_partial_success(self, make_shipment, make_container):
        result = optimize_containers(
            [make_shipment(id=1, weight=600)],
            [make_container(1, capacity=500)],
        )
        assert result.success
        assert result.assignments == []
        assert result.unassigned == [1]
        assert result.updated_containers == []
        assert result.total_assigned == 0

    def test_existing_load_reduces_room(self, make_shipment, make_container):
        result = optimize_containers(
            [make_shipment(id=1, weight=3000)],
            [make_container(1, capacity=5000, current_load=2500), make_container(2, capacity=5000)],
        )
        assert result.assignments[0].container_id == 2

    def test_overloaded_container_clamps_to_zero_room(self, make_shipment, make_container):
        result = optimize_containers(
            [make_shipment(id=1, weight=1)],
            [make_container(1, capacity=1000, current_load=1200), make_container(2)],
        )
        assert result.assignments[0].container_id == 2

    def test_only_pending_and_available_are_considered(self, make_shipment, make_container):
        shipments = [
            make_shipment(id=1, weight=100, status=ShipmentStatus.READY),
            make_shipment(id=2, weight=100),
        ]
        containers = [
            make_container(1, status=ContainerStatus.IN_TRANSIT),
            make_container(2),
        ]
        result = optimize_containers(shipments, containers)
        assert [(a.shipment_id, a.container_id) for a in result.assignments] == [(2, 2)]

    def test_nothing_pending(self, make_shipment, make_container):
        result = optimize_containers(
            [make_shipment(id=1, status=ShipmentStatus.DELIVERED)],
            [make_container(1)],
        )
        assert not result.success
        assert result.message == "No pending shipments to optimize"

    def test_no_available_containers(self, make_shipment, make_container):
        result = optimize_containers(
            [make_shipment(id=1)],
            [make_container(1, status=ContainerStatus.READY_FOR_TRANSPORT)],
        )
        assert not result.success
        assert result.message == "No available containers"


@pytest.mark.unit
class TestUtilization:

    def test_utilization_pct(self):
        assert utilization_pct(2500, 10000) == 25.0
        assert utilization_pct(1, 3) == 33.33
        assert utilization_pct(10, 0) == 0.0

    def test_average_ignores_available_containers(self, make_container):
        containers = [
            make_container(1, current_load=5000, status=ContainerStatus.READY_FOR_TRANSPORT),
            make_container(2, current_load=2500, status=ContainerStatus.IN_TRANSIT),
            make_container(3, current_load=9000, status=ContainerStatus.AVAILABLE),
        ]
        assert average_utilization(containers) == 37.5

    def test_average_with_nothing_loaded(self, make_container):
        assert average_utilization([make_container(1)]) == 0.0
