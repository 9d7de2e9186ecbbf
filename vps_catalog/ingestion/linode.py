"""Linode (Akamai) instance types. The catalog endpoints are public."""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from vps_catalog.schemas.raw import LinodeRegionsResponse, LinodeType, LinodeTypesResponse
from vps_catalog.transform.rules import PlanFacts, Rule, apply_rules, kind_in
from vps_catalog.transform.units import cap_locations, scale_unit
from .base import BaseSource

API_BASE_URL = "https://api.linode.com/v4"

EXCLUDED_CLASSES = {"gpu", "accelerated"}

FEATURED_TYPES = {"g6-nanode-1", "g6-standard-1", "g6-standard-2"}

CLASS_NAMES = {
    "nanode": "Nanode",
    "standard": "Standard",
    "dedicated": "Dedicated CPU",
    "highmem": "High Memory",
    "premium": "Premium",
}

BASE_FEATURES = (
    "SSD Storage",
    "IPv6",
    "Private Networking",
    "DDoS Protection",
    "Monitoring",
    "Backup Service",
    "API Access",
    "Cloud Firewall",
)
FEATURE_RULES = (
    Rule(kind_in("nanode"), ("Shared CPU",)),
    Rule(kind_in("standard"), ("Shared CPU", "Burstable Performance")),
    Rule(kind_in("dedicated"), ("Dedicated CPU", "Sustained Performance")),
    Rule(kind_in("highmem"), ("High Memory", "Optimized for Memory-Intensive Applications")),
    Rule(kind_in("premium"), ("Premium Hardware", "Enhanced Performance", "Advanced Networking")),
)

BASE_TAGS = ("reliable", "developer-friendly")
TAG_RULES = (
    Rule(lambda f: f.monthly_price <= 10, ("budget",)),
    Rule(kind_in("dedicated"), ("high-performance", "dedicated")),
    Rule(kind_in("highmem"), ("high-memory",)),
    Rule(kind_in("premium"), ("premium", "enhanced")),
    Rule(kind_in("nanode"), ("entry-level",)),
)


def class_display_name(plan_class: str) -> str:
    return CLASS_NAMES.get(plan_class, plan_class[:1].upper() + plan_class[1:])


class LinodeSource(BaseSource):
    name = "linode"
    display_name = "Linode"
    website = "https://linode.com"

    def client_options(self) -> Dict[str, Any]:
        return {"headers": {"Accept": "application/json"}}

    async def _collect(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        payloads = await self._get_all(
            client,
            {
                "types": f"{API_BASE_URL}/linode/types",
                "regions": f"{API_BASE_URL}/regions",
            },
        )
        types = self._parse(LinodeTypesResponse, payloads["types"], "types").data
        regions = self._parse(LinodeRegionsResponse, payloads["regions"], "regions").data
        # Every type is sold in every healthy region
        locations = cap_locations(region.label for region in regions if region.status == "ok")

        return [
            self._to_candidate(plan, locations)
            for plan in types
            if plan.plan_class not in EXCLUDED_CLASSES
        ]

    def _to_candidate(self, plan: LinodeType, locations: List[str]) -> Dict[str, Any]:
        ram_amount, ram_unit = scale_unit(plan.memory, "MB", "GB")
        disk_amount, disk_unit = scale_unit(plan.disk, "MB", "GB")
        transfer_amount, transfer_unit = scale_unit(plan.transfer, "GB", "TB")
        facts = PlanFacts(
            monthly_price=plan.price.monthly,
            cores=plan.vcpus,
            memory_mb=plan.memory,
            kind=plan.plan_class,
            bandwidth_gb=plan.transfer,
        )

        return {
            "id": self.plan_id(plan.id),
            "provider": self.display_name,
            "name": f"{class_display_name(plan.plan_class)} {plan.label}",
            "price": {"monthly": plan.price.monthly, "currency": "USD"},
            "specs": {
                "cpu": {
                    "cores": plan.vcpus,
                    "type": "CPU" if plan.plan_class == "dedicated" else "vCPU",
                },
                "ram": {"amount": ram_amount, "unit": ram_unit},
                "storage": {"amount": disk_amount, "unit": disk_unit, "type": "SSD"},
                "bandwidth": {"amount": transfer_amount, "unit": transfer_unit, "unlimited": False},
            },
            "features": apply_rules(BASE_FEATURES, FEATURE_RULES, facts),
            "locations": list(locations),
            "uptime": {"percentage": 99.9, "sla": True},
            "support": "24/7 Support",
            "website": self.website,
            "featured": plan.id in FEATURED_TYPES,
            "tags": apply_rules(BASE_TAGS, TAG_RULES, facts),
        }
