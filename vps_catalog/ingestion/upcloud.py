"""UpCloud server plans (https://developers.upcloud.com/).

UpCloud publishes hourly prices per zone; the monthly figure shown on the
site is ``hourly * 730`` taken from the first zone of the price list.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from vps_catalog.schemas.raw import (
    UpCloudPlan,
    UpCloudPlansResponse,
    UpCloudPriceZones,
    UpCloudPricingResponse,
    UpCloudZonesResponse,
)
from vps_catalog.transform.pricing import monthly_from_hourly
from vps_catalog.transform.rules import (
    HIGH_BANDWIDTH_2TB,
    HIGH_MEMORY_8GB,
    PRICE_TIER_RULES,
    PlanFacts,
    Rule,
    apply_rules,
    kind_in,
)
from vps_catalog.transform.units import cap_locations, scale_unit
from .base import BaseSource

API_BASE_URL = "https://api.upcloud.com/1.3"

FEATURED_PLANS = {"1xCPU-2GB", "2xCPU-4GB", "4xCPU-8GB"}

BASE_FEATURES = (
    "MaxIOPS Storage",
    "Full Root Access",
    "DDoS Protection",
    "100% Uptime SLA",
    "Private Networking",
    "Firewall",
    "IPv6 Support",
)
FEATURE_RULES = (Rule(kind_in("maxiops"), ("NVMe Storage",)),)

BASE_TAGS = ("europe", "high-performance")
TAG_RULES = (
    *PRICE_TIER_RULES,
    HIGH_MEMORY_8GB,
    HIGH_BANDWIDTH_2TB,
    Rule(kind_in("maxiops"), ("nvme-storage",)),
)


class UpCloudSource(BaseSource):
    name = "upcloud"
    display_name = "UpCloud"
    website = "https://upcloud.com"

    def __init__(self, username: Optional[str], password: Optional[str], **kwargs: Any):
        self.username = username
        self.password = password
        super().__init__(**kwargs)

    def missing_credentials(self) -> List[str]:
        if self.username and self.password:
            return []
        return ["UPCLOUD_USERNAME", "UPCLOUD_PASSWORD"]

    def client_options(self) -> Dict[str, Any]:
        return {
            "auth": httpx.BasicAuth(self.username, self.password),
            "headers": {"Content-Type": "application/json"},
        }

    async def _collect(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        payloads = await self._get_all(
            client,
            {
                "plans": f"{API_BASE_URL}/plan",
                "pricing": f"{API_BASE_URL}/price",
                "zones": f"{API_BASE_URL}/zone",
            },
        )
        plans = self._parse(UpCloudPlansResponse, payloads["plans"], "plans").plans.plan
        pricing = self._parse(UpCloudPricingResponse, payloads["pricing"], "pricing").prices
        zones = self._parse(UpCloudZonesResponse, payloads["zones"], "zones").zones.zone
        locations = cap_locations(zone.description for zone in zones)

        return [self._to_candidate(plan, pricing, locations) for plan in plans]

    def _monthly_price(self, plan: UpCloudPlan, pricing: UpCloudPriceZones) -> float:
        price_zone = next(iter(pricing.zone), None)
        hourly = pricing.hourly_price(price_zone, plan.name) if price_zone else None
        if hourly is None:
            # Left at zero: the schema rejects the plan instead of showing a made-up price
            self.log.debug(f"No hourly price for UpCloud plan {plan.name} in zone {price_zone}")
            return 0.0
        return monthly_from_hourly(hourly)

    def _to_candidate(
        self, plan: UpCloudPlan, pricing: UpCloudPriceZones, locations: List[str]
    ) -> Dict[str, Any]:
        monthly = self._monthly_price(plan, pricing)
        ram_amount, ram_unit = scale_unit(plan.memory_amount, "MB", "GB")
        traffic_amount, traffic_unit = scale_unit(plan.public_traffic_out, "GB", "TB")
        facts = PlanFacts(
            monthly_price=monthly,
            cores=plan.core_number,
            memory_mb=plan.memory_amount,
            kind=plan.storage_tier,
            bandwidth_gb=plan.public_traffic_out,
        )

        return {
            "id": self.plan_id(plan.name),
            "provider": self.display_name,
            "name": plan.name,
            "price": {"monthly": monthly, "currency": "USD"},
            "specs": {
                "cpu": {"cores": plan.core_number, "type": "vCPU"},
                "ram": {"amount": ram_amount, "unit": ram_unit},
                "storage": {
                    "amount": plan.storage_size,
                    "unit": "GB",
                    "type": "NVMe" if plan.storage_tier == "maxiops" else "SSD",
                },
                "bandwidth": {"amount": traffic_amount, "unit": traffic_unit, "unlimited": False},
            },
            "features": apply_rules(BASE_FEATURES, FEATURE_RULES, facts),
            "locations": list(locations),
            "uptime": {"percentage": 100, "sla": True},
            "support": "24/7 Support",
            "website": self.website,
            "tags": apply_rules(BASE_TAGS, TAG_RULES, facts),
            "featured": plan.name in FEATURED_PLANS,
        }
