"""DigitalOcean Droplet sizes."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from vps_catalog.schemas.raw import DORegion, DORegionsResponse, DOSize, DOSizesResponse
from vps_catalog.transform.rules import PlanFacts, Rule, apply_rules
from vps_catalog.transform.units import cap_locations, scale_unit
from .base import BaseSource

API_BASE_URL = "https://api.digitalocean.com/v2"

MIN_MEMORY_MB = 512

FEATURED_SIZES = {"s-1vcpu-1gb", "s-2vcpu-2gb"}

FEATURES = [
    "SSD Storage",
    "IPv6",
    "Monitoring",
    "Firewalls",
    "Private Networking",
    "Load Balancers",
    "Snapshots",
    "Backups",
]

BASE_TAGS = ("cloud", "scalable", "developer-friendly", "popular")
TAG_RULES = (
    Rule(lambda f: f.monthly_price <= 10, ("budget",)),
    Rule(lambda f: f.cores >= 4, ("high-performance",)),
    Rule(lambda f: f.memory_mb >= 8192, ("high-memory",)),
)


class DigitalOceanSource(BaseSource):
    """Droplet sizes, restricted to the regions that currently sell them."""

    name = "digitalocean"
    display_name = "DigitalOcean"
    website = "https://digitalocean.com"

    def __init__(self, api_key: Optional[str], **kwargs: Any):
        self.api_key = api_key
        super().__init__(**kwargs)

    def missing_credentials(self) -> List[str]:
        return [] if self.api_key else ["DIGITALOCEAN_API_KEY"]

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
                "sizes": f"{API_BASE_URL}/sizes?per_page=200",
                "regions": f"{API_BASE_URL}/regions?per_page=200",
            },
        )
        sizes = self._parse(DOSizesResponse, payloads["sizes"], "sizes").sizes
        regions = self._parse(DORegionsResponse, payloads["regions"], "regions").regions

        return [
            self._to_candidate(size, regions)
            for size in sizes
            if size.available and size.memory >= MIN_MEMORY_MB
        ]

    def _to_candidate(self, size: DOSize, regions: List[DORegion]) -> Dict[str, Any]:
        offered = set(size.regions)
        locations = [region.name for region in regions if region.available and region.slug in offered]
        ram_amount, ram_unit = scale_unit(size.memory, "MB", "GB")
        facts = PlanFacts(monthly_price=size.price_monthly, cores=size.vcpus, memory_mb=size.memory)

        return {
            "id": self.plan_id(size.slug),
            "provider": self.display_name,
            "name": size.description or f"{size.memory}MB / {size.vcpus} vCPU",
            "price": {"monthly": size.price_monthly, "currency": "USD"},
            "specs": {
                "cpu": {"cores": size.vcpus, "type": "vCPU"},
                "ram": {"amount": ram_amount, "unit": ram_unit},
                "storage": {"amount": size.disk, "unit": "GB", "type": "SSD"},
                "bandwidth": {"amount": size.transfer, "unit": "TB", "unlimited": False},
            },
            "features": list(FEATURES),
            "locations": cap_locations(locations),
            "uptime": {"percentage": 99.99, "sla": False},
            "support": "24/7 Community & Ticket Support",
            "website": self.website,
            "featured": size.slug in FEATURED_SIZES,
            "tags": apply_rules(BASE_TAGS, TAG_RULES, facts),
        }
