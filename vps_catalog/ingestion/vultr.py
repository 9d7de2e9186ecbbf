"""Vultr cloud compute plans (https://www.vultr.com/api/)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from vps_catalog.schemas.raw import VultrPlan, VultrPlansResponse, VultrRegionsResponse
from vps_catalog.transform.rules import (
    HIGH_BANDWIDTH_2TB,
    HIGH_MEMORY_8GB,
    PRICE_TIER_RULES,
    PlanFacts,
    Rule,
    always,
    apply_rules,
    kind_in,
)
from vps_catalog.transform.units import cap_locations, format_location, scale_unit
from .base import BaseSource

API_BASE_URL = "https://api.vultr.com/v2"

# Cloud Compute, High Frequency, High Performance, Optimized/Dedicated
COMPUTE_TYPES = ("vc2", "vhf", "vhp", "vdc")
NVME_TYPES = ("vhf", "vhp", "vdc")

FEATURED_PLANS = {"vc2-1c-1gb", "vc2-1c-2gb", "vc2-2c-4gb"}

FEATURE_RULES = (
    Rule(kind_in("vc2"), ("Cloud Compute", "DDoS Protection", "100% SSD Storage")),
    Rule(kind_in("vhf"), ("High Frequency", "3 GHz+ CPU", "NVMe Storage", "DDoS Protection")),
    Rule(kind_in("vhp"), ("High Performance", "Latest CPU", "NVMe Storage", "DDoS Protection")),
    Rule(kind_in("vdc"), ("Dedicated CPU", "100% Dedicated Resources", "NVMe Storage")),
    Rule(always, ("Full Root Access", "IPv6 Support")),
)

BASE_TAGS = ("global",)
TAG_RULES = (
    *PRICE_TIER_RULES,
    Rule(kind_in("vhf", "vhp"), ("high-performance",)),
    Rule(kind_in("vdc"), ("dedicated", "high-performance")),
    HIGH_MEMORY_8GB,
    HIGH_BANDWIDTH_2TB,
)


class VultrSource(BaseSource):
    """Vultr compute plans; bare metal and other non-compute types are dropped."""

    name = "vultr"
    display_name = "Vultr"
    website = "https://www.vultr.com"

    def __init__(self, api_key: Optional[str], **kwargs: Any):
        self.api_key = api_key
        super().__init__(**kwargs)

    def missing_credentials(self) -> List[str]:
        return [] if self.api_key else ["VULTR_API_KEY"]

    def client_options(self) -> Dict[str, Any]:
        return {
            "headers": {
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            }
        }

    async def _collect(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        payloads = await self._get_all(
            client,
            {
                "plans": f"{API_BASE_URL}/plans?per_page=500",
                "regions": f"{API_BASE_URL}/regions?per_page=500",
            },
        )
        plans = self._parse(VultrPlansResponse, payloads["plans"], "plans").plans
        regions = self._parse(VultrRegionsResponse, payloads["regions"], "regions").regions
        region_names = {region.id: format_location(region.city, region.country) for region in regions}

        return [
            self._to_candidate(plan, region_names)
            for plan in plans
            if plan.type in COMPUTE_TYPES
        ]

    def _to_candidate(self, plan: VultrPlan, region_names: Dict[str, str]) -> Dict[str, Any]:
        ram_amount, ram_unit = scale_unit(plan.ram, "MB", "GB")
        bandwidth_amount, bandwidth_unit = scale_unit(plan.bandwidth, "GB", "TB")
        facts = PlanFacts(
            monthly_price=plan.monthly_cost,
            cores=plan.vcpu_count,
            memory_mb=plan.ram,
            kind=plan.type,
            bandwidth_gb=plan.bandwidth,
        )

        return {
            "id": self.plan_id(plan.id),
            "provider": self.display_name,
            "name": plan.id.upper(),
            "price": {"monthly": plan.monthly_cost, "currency": "USD"},
            "specs": {
                "cpu": {"cores": plan.vcpu_count, "type": "CPU" if plan.type == "vdc" else "vCPU"},
                "ram": {"amount": ram_amount, "unit": ram_unit},
                "storage": {
                    "amount": plan.disk,
                    "unit": "GB",
                    "type": "NVMe" if plan.type in NVME_TYPES else "SSD",
                },
                "bandwidth": {"amount": bandwidth_amount, "unit": bandwidth_unit, "unlimited": False},
            },
            "features": apply_rules((), FEATURE_RULES, facts),
            # Unknown region ids are shown as-is
            "locations": cap_locations(region_names.get(loc, loc) for loc in plan.locations),
            "uptime": {"percentage": 99.99, "sla": True},
            "support": "24/7 Support",
            "website": self.website,
            "tags": apply_rules(BASE_TAGS, TAG_RULES, facts),
            "featured": plan.id in FEATURED_PLANS,
        }
