"""Scaleway Instances server types (fr-par-1 catalog)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from vps_catalog.schemas.raw import ScalewayServersResponse, ScalewayServerType
from vps_catalog.transform.pricing import estimate_monthly_price
from vps_catalog.transform.rules import (
    HIGH_MEMORY_8GB,
    PRICE_TIER_RULES,
    PlanFacts,
    Rule,
    apply_rules,
    name_contains,
)
from vps_catalog.transform.units import bytes_to_gb, bytes_to_mb, cap_locations, scale_unit
from .base import BaseSource

API_BASE_URL = "https://api.scaleway.com/instance/v1"
CATALOG_ZONE = "fr-par-1"

# The products endpoint is per zone; these are the regions Instances are sold in
LOCATIONS = ["Paris, France", "Amsterdam, Netherlands", "Warsaw, Poland"]

UNMETERED_BANDWIDTH_TB = 100

FEATURED_TYPES = {"DEV1-S", "DEV1-M", "GP1-S"}

is_nvme = name_contains("GP1", "PRO")

BASE_FEATURES = (
    "Full Root Access",
    "Fast Local Storage",
    "Private Networks",
    "Security Groups",
    "IPv6 Support",
    "Block Storage Compatible",
)
FEATURE_RULES = (Rule(is_nvme, ("NVMe Storage",)),)

BASE_TAGS = ("europe",)
TAG_RULES = (
    *PRICE_TIER_RULES,
    Rule(name_contains("DEV1", "PLAY2"), ("development",)),
    Rule(is_nvme, ("high-performance",)),
    HIGH_MEMORY_8GB,
)


class ScalewaySource(BaseSource):
    """Scaleway virtual instances; prices are estimated from cores and RAM."""

    name = "scaleway"
    display_name = "Scaleway"
    website = "https://www.scaleway.com"

    def __init__(self, api_key: Optional[str], **kwargs: Any):
        self.api_key = api_key
        super().__init__(**kwargs)

    def missing_credentials(self) -> List[str]:
        return [] if self.api_key else ["SCALEWAY_API_KEY"]

    def client_options(self) -> Dict[str, Any]:
        return {
            "headers": {
                "X-Auth-Token": self.api_key,
                "Content-Type": "application/json",
            }
        }

    async def _collect(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        payloads = await self._get_all(
            client,
            {"servers": f"{API_BASE_URL}/zones/{CATALOG_ZONE}/products/servers?per_page=100"},
        )
        servers = self._parse(ScalewayServersResponse, payloads["servers"], "servers").servers

        return [
            self._to_candidate(name, server)
            for name, server in servers.items()
            if not server.baremetal and not server.gpu
        ]

    def _to_candidate(self, name: str, server: ScalewayServerType) -> Dict[str, Any]:
        ram_mb = bytes_to_mb(server.ram)
        ram_amount, ram_unit = scale_unit(ram_mb, "MB", "GB")
        # TODO: switch to server.monthly_price from this payload once the estimate is retired
        monthly = estimate_monthly_price(server.ncpus, ram_mb / 1024)
        facts = PlanFacts(
            monthly_price=monthly,
            cores=server.ncpus,
            memory_mb=ram_mb,
            name=name,
            architecture=server.arch,
        )

        return {
            "id": self.plan_id(name),
            "provider": self.display_name,
            "name": name,
            "price": {"monthly": monthly, "currency": "EUR"},
            "specs": {
                "cpu": {"cores": server.ncpus, "type": "vCPU"},
                "ram": {"amount": ram_amount, "unit": ram_unit},
                "storage": {
                    "amount": round(bytes_to_gb(server.volumes_constraint.max_size)),
                    "unit": "GB",
                    "type": "NVMe" if is_nvme(facts) else "SSD",
                },
                "bandwidth": {"amount": UNMETERED_BANDWIDTH_TB, "unit": "TB", "unlimited": True},
            },
            "features": apply_rules(BASE_FEATURES, FEATURE_RULES, facts),
            "locations": cap_locations(LOCATIONS),
            "uptime": {"percentage": 99.9, "sla": True},
            "support": "24/7 Support",
            "website": self.website,
            "tags": apply_rules(BASE_TAGS, TAG_RULES, facts),
            "featured": name in FEATURED_TYPES,
        }
