"""Rule tables for tag and feature derivation.

A rule pairs a predicate over :class:`PlanFacts` with the labels it appends.
Rules are evaluated in order and every matching rule contributes, so the
output order is fully determined by the table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class PlanFacts:
    """Provider-neutral numbers and labels the rules look at."""

    monthly_price: float
    cores: int
    memory_mb: float
    kind: str = ""  # plan class / type / storage tier
    name: str = ""
    architecture: str = "x86"
    bandwidth_gb: Optional[float] = None


@dataclass(frozen=True)
class Rule:
    when: Callable[[PlanFacts], bool]
    add: Tuple[str, ...]


def always(_: PlanFacts) -> bool:
    return True


def kind_in(*kinds: str) -> Callable[[PlanFacts], bool]:
    return lambda facts: facts.kind in kinds


def name_contains(*fragments: str) -> Callable[[PlanFacts], bool]:
    return lambda facts: any(fragment in facts.name for fragment in fragments)


def apply_rules(base: Iterable[str], rules: Sequence[Rule], facts: PlanFacts) -> List[str]:
    labels = list(base)
    for rule in rules:
        if rule.when(facts):
            labels.extend(rule.add)
    return labels


# Shared by Vultr, UpCloud and Scaleway
PRICE_TIER_RULES: Tuple[Rule, ...] = (
    Rule(lambda f: f.monthly_price <= 6, ("budget", "ultra-budget")),
    Rule(lambda f: 6 < f.monthly_price <= 12, ("budget",)),
)

HIGH_MEMORY_8GB = Rule(lambda f: f.memory_mb >= 8192, ("high-memory",))
HIGH_BANDWIDTH_2TB = Rule(
    lambda f: f.bandwidth_gb is not None and f.bandwidth_gb >= 2048, ("high-bandwidth",)
)
