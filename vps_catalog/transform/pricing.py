"""Monthly price derivation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

HOURS_PER_MONTH = 730

# Scaleway heuristic (EUR): no per-plan price endpoint is queried
ESTIMATE_PER_CORE = 3.5
ESTIMATE_PER_GB_RAM = 2.5


def round_price(value: float) -> float:
    """Round half-up to cents (``round()`` would use banker's rounding)."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def monthly_from_hourly(hourly: float) -> float:
    return round_price(Decimal(str(hourly)) * HOURS_PER_MONTH)


def cheapest(options: Sequence[T], amount: Callable[[T], float]) -> T:
    """Lowest-priced option; ties go to the option listed first."""
    if not options:
        raise ValueError("no price options to choose from")
    return min(options, key=amount)


def estimate_monthly_price(cores: int, ram_gb: float) -> float:
    return round_price(cores * ESTIMATE_PER_CORE + ram_gb * ESTIMATE_PER_GB_RAM)
