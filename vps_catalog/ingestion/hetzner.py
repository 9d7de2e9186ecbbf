"""Hetzner Cloud server types."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from vps_catalog.schemas.raw import (
    HetznerLocationsResponse,
    HetznerServerType,
    HetznerServerTypesResponse,
)
from vps_catalog.transform.pricing import cheapest
from vps_catalog.transform.rules import PlanFacts, Rule, apply_rules
from vps_catalog.transform.units import cap_locations, format_location, scale_unit
from .base import BaseSource

API_BASE_URL = "https://api.hetzner.cloud/v1"

INCLUDED_TRAFFIC_TB = 20

FEATURED_TYPES = {"cx11", "cx21", "cx31"}

FEATURES = [
    "SSD Storage",
    "IPv6",
    "Private Networking",
    "Snapshots",
    "Backups",
    "Load Balancers",
    "Floating IPs",
    "DDoS Protection",
]

BASE_TAGS = ("europe", "budget", "high-bandwidth")
TAG_RULES = (
    Rule(lambda f: f.monthly_price <= 5, ("ultra-budget",)),
    Rule(lambda f: f.cores >= 4, ("high-performance",)),
    Rule(lambda f: f.memory_mb >= 16 * 1024, ("high-memory",)),
    Rule(lambda f: f.architecture == "arm64", ("arm", "energy-efficient")),
)


class HetznerSource(BaseSource):
    """Hetzner server types priced at the cheapest location."""

    name = "hetzner"
    display_name = "Hetzner"
    website = "https://hetzner.com"

    def __init__(self, api_key: Optional[str], include_arm: bool = False, **kwargs: Any):
        self.api_key = api_key
        self.include_arm = include_arm
        super().__init__(**kwargs)

    def missing_credentials(self) -> List[str]:
        return [] if self.api_key else ["HETZNER_API_KEY"]

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
                "server_types": f"{API_BASE_URL}/server_types?per_page=50",
                "locations": f"{API_BASE_URL}/locations",
            },
        )
        server_types = self._parse(
            HetznerServerTypesResponse, payloads["server_types"], "server_types"
        ).server_types
        locations = cap_locations(
            format_location(loc.city, loc.country)
            for loc in self._parse(HetznerLocationsResponse, payloads["locations"], "locations").locations
        )

        return [
            self._to_candidate(server_type, locations)
            for server_type in server_types
            if self._is_listed(server_type)
        ]

    def _is_listed(self, server_type: HetznerServerType) -> bool:
        if server_type.deprecated:
            return False
        return server_type.architecture == "x86" or self.include_arm

    def _to_candidate(self, server_type: HetznerServerType, locations: List[str]) -> Dict[str, Any]:
        monthly = cheapest(server_type.prices, lambda price: price.price_monthly.gross).price_monthly.gross
        memory_mb = server_type.memory * 1024
        ram_amount, ram_unit = scale_unit(memory_mb, "MB", "GB")
        facts = PlanFacts(
            monthly_price=monthly,
            cores=server_type.cores,
            memory_mb=memory_mb,
            architecture=server_type.architecture,
        )

        return {
            "id": self.plan_id(server_type.name),
            "provider": self.display_name,
            "name": server_type.name,
            "description": server_type.description,
            "price": {"monthly": monthly, "currency": "EUR"},
            "specs": {
                "cpu": {
                    "cores": server_type.cores,
                    "type": "vCPU" if server_type.cpu_type == "shared" else "CPU",
                },
                "ram": {"amount": ram_amount, "unit": ram_unit},
                "storage": {
                    "amount": server_type.disk,
                    "unit": "GB",
                    "type": "SSD" if server_type.storage_type == "local" else "NVMe",
                },
                "bandwidth": {"amount": INCLUDED_TRAFFIC_TB, "unit": "TB", "unlimited": False},
            },
            "features": list(FEATURES),
            "locations": list(locations),
            "uptime": {"percentage": 99.9, "sla": False},
            "support": "Business Hours Support",
            "website": self.website,
            "featured": server_type.name.lower() in FEATURED_TYPES,
            "tags": apply_rules(BASE_TAGS, TAG_RULES, facts),
        }
