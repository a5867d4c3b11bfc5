"""Distance and delivery-time estimates from the Muğla headquarters.

Distances come from a fixed table of known destinations ("City, Country").
Unknown cities fall back to a per-country estimate, and anything else to a
default international distance, so `resolve_distance` never fails.
"""

from __future__ import annotations

import math

from app.models.shipment import ContainerClass

ORIGIN = "Muğla, Turkey"

DEFAULT_DISTANCE_KM = 3000
KM_PER_DAY = 500

KNOWN_DISTANCES_KM: dict[str, float] = {
    # Domestic
    "Istanbul, Turkey": 650,
    "Ankara, Turkey": 520,
    "Izmir, Turkey": 120,
    "Antalya, Turkey": 200,
    "Bodrum, Turkey": 60,
    # Europe
    "Berlin, Germany": 3000,
    "Paris, France": 3200,
    "London, UK": 3500,
    "Rome, Italy": 2100,
    "Madrid, Spain": 3800,
    "Amsterdam, Netherlands": 3300,
    "Vienna, Austria": 2400,
    "Athens, Greece": 800,
    "Sofia, Bulgaria": 1100,
    "Bucharest, Romania": 1400,
    # Middle East
    "Dubai, UAE": 3400,
    "Tel Aviv, Israel": 1200,
    "Cairo, Egypt": 1500,
    "Beirut, Lebanon": 1000,
    "Riyadh, Saudi Arabia": 2800,
    # Asia
    "Mumbai, India": 5500,
    "Shanghai, China": 8500,
    "Tokyo, Japan": 9800,
    "Singapore, Singapore": 9200,
    "Bangkok, Thailand": 7800,
    # North America
    "New York, USA": 9500,
    "Los Angeles, USA": 12000,
    "Chicago, USA": 9800,
    "Toronto, Canada": 9200,
    "Mexico City, Mexico": 11500,
}

# Checked in order; the first rule with a keyword contained in the
# country name wins.
COUNTRY_RULES: list[tuple[tuple[str, ...], float]] = [
    (("turkey",), 300),
    (("germany", "france"), 3000),
    (("uk", "england"), 3500),
    (("spain", "portugal"), 3800),
    (("italy",), 2100),
    (("greece",), 800),
    (("egypt",), 1500),
    (("uae", "emirates"), 3400),
    (("india",), 5500),
    (("china",), 8500),
    (("japan",), 9800),
    (("usa", "united states"), 10000),
    (("canada",), 9200),
]

PROCESSING_DAYS: dict[ContainerClass, int] = {
    ContainerClass.SMALL: 1,
    ContainerClass.MEDIUM: 2,
    ContainerClass.LARGE: 3,
}
DEFAULT_PROCESSING_DAYS = 2

_LOWERCASE_INDEX = {name.lower(): km for name, km in KNOWN_DISTANCES_KM.items()}


def country_of(destination: str) -> str:
    """Text after the last comma, e.g. "Berlin, Germany" → "Germany"."""
    return destination.split(",")[-1].strip()


def estimate_by_country(country: str) -> float:
    needle = country.strip().lower()
    for keywords, km in COUNTRY_RULES:
        if any(k in needle for k in keywords):
            return km
    return DEFAULT_DISTANCE_KM


def resolve_distance(destination: str) -> float:
    """Distance in km from the origin to `destination`."""
    if destination in KNOWN_DISTANCES_KM:
        return KNOWN_DISTANCES_KM[destination]

    km = _LOWERCASE_INDEX.get(destination.strip().lower())
    if km is not None:
        return km

    return estimate_by_country(country_of(destination))


def is_domestic(country: str) -> bool:
    return "turkey" in country.lower()


def estimate_delivery_days(distance_km: float, container_type: ContainerClass | str) -> int:
    """Transit days at 500 km/day plus per-class handling days."""
    try:
        processing = PROCESSING_DAYS[ContainerClass(container_type)]
    except ValueError:
        processing = DEFAULT_PROCESSING_DAYS
    return math.ceil(distance_km / KM_PER_DAY) + processing


def known_destinations() -> list[str]:
    return sorted(KNOWN_DISTANCES_KM)
