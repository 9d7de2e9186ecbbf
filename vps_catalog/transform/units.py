"""Unit conversion and location formatting shared by the adapters."""

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

Number = Union[int, float]

UNIT_STEP = 1024
MAX_LOCATIONS = 10


def scale_unit(value: Number, unit: str, next_unit: str) -> Tuple[Number, str]:
    """Step ``value`` up one unit once it reaches 1024 of the base unit.

    >>> scale_unit(2048, "MB", "GB")
    (2.0, 'GB')
    >>> scale_unit(512, "MB", "GB")
    (512, 'MB')
    """
    if value >= UNIT_STEP:
        return value / UNIT_STEP, next_unit
    return value, unit


def bytes_to_mb(value: Number) -> float:
    return value / (UNIT_STEP * UNIT_STEP)


def bytes_to_gb(value: Number) -> float:
    return value / (UNIT_STEP * UNIT_STEP * UNIT_STEP)


def format_location(city: str, country: str) -> str:
    return f"{city}, {country}"


def cap_locations(locations: Iterable[str], limit: int = MAX_LOCATIONS) -> List[str]:
    """First ``limit`` locations in provider order."""
    capped: List[str] = []
    for location in locations:
        if len(capped) >= limit:
            break
        capped.append(location)
    return capped
