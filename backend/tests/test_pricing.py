"""Tests for pricing, delivery estimates and distance lookup."""

import pytest

from app.middleware.exceptions import BusinessLogicError
from app.models.shipment import ContainerClass
from app.services.distance import (
    DEFAULT_DISTANCE_KM,
    country_of,
    estimate_delivery_days,
    is_domestic,
    known_destinations,
    resolve_distance,
)
from app.services.pricing import calculate_price, check_capacity, get_spec


@pytest.mark.unit
class TestPricing:

    @pytest.mark.parametrize(
        "container_type, expected",
        [
            (ContainerClass.SMALL, 15000),
            (ContainerClass.MEDIUM, 24000),
            (ContainerClass.LARGE, 36000),
        ],
    )
    def test_price_is_distance_times_rate(self, container_type, expected):
        assert calculate_price(3000, container_type) == expected

    def test_worked_examples(self):
        assert calculate_price(1000, ContainerClass.MEDIUM) == 8000
        assert calculate_price(0, ContainerClass.SMALL) == 0

    def test_accepts_plain_string_class(self):
        assert calculate_price(100, "Medium") == 800

    def test_unknown_class_is_business_error(self):
        with pytest.raises(BusinessLogicError) as exc:
            calculate_price(100, "Huge")
        assert exc.value.error_code == "UNKNOWN_CONTAINER_TYPE"

    def test_capacity_boundary_is_inclusive(self):
        assert check_capacity(2000, ContainerClass.SMALL)
        assert not check_capacity(2000.01, ContainerClass.SMALL)
        assert check_capacity(10000, ContainerClass.LARGE)

    def test_class_table(self):
        class_spec = get_spec(ContainerClass.MEDIUM)
        assert class_spec.capacity_kg == 5000
        assert class_spec.rate_per_km == 8


@pytest.mark.unit
class TestDistance:

    def test_known_destination(self):
        assert resolve_distance("Berlin, Germany") == 3000
        assert resolve_distance("Istanbul, Turkey") == 650

    def test_known_destination_is_case_insensitive(self):
        assert resolve_distance("  berlin, GERMANY ") == 3000

    def test_unknown_city_uses_country_estimate(self):
        assert resolve_distance("Munich, Germany") == 3000
        assert resolve_distance("Kayseri, Turkey") == 300
        assert resolve_distance("Osaka, Japan") == 9800

    def test_unknown_country_uses_default(self):
        assert resolve_distance("Lima, Peru") == DEFAULT_DISTANCE_KM

    def test_country_of_takes_text_after_last_comma(self):
        assert country_of("Bodrum, Muğla, Turkey") == "Turkey"
        assert country_of("Paris, France") == "France"

    def test_is_domestic(self):
        assert is_domestic("Turkey")
        assert not is_domestic("Germany")

    def test_known_destinations_sorted(self):
        names = known_destinations()
        assert names == sorted(names)
        assert "Tokyo, Japan" in names


@pytest.mark.unit
class TestDeliveryEstimate:

    @pytest.mark.parametrize(
        "distance, container_type, expected",
        [
            (3000, ContainerClass.SMALL, 7),     # 6 transit + 1
            (2100, ContainerClass.LARGE, 8),     # 5 transit + 3
            (3000, ContainerClass.MEDIUM, 8),    # 6 transit + 2
            (3001, ContainerClass.LARGE, 10),    # ceil → 7 transit + 3
            (60, ContainerClass.SMALL, 2),       # 1 transit + 1
        ],
    )
    def test_transit_plus_processing(self, distance, container_type, expected):
        assert estimate_delivery_days(distance, container_type) == expected

    def test_unknown_class_gets_default_processing(self):
        assert estimate_delivery_days(500, "Huge") == 3
