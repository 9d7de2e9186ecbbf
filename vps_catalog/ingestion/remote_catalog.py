"""Pre-normalized plan feed served by an external JSON API."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from vps_catalog.core.errors import ProviderParseError
from vps_catalog.transform.units import cap_locations
from .base import BaseSource

_items_adapter = TypeAdapter(List[Dict[str, Any]])

_UPTIME_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%\s*$")

DEFAULT_UPTIME = {"percentage": 99.9, "sla": False}
DEFAULT_SUPPORT = "24/7 Support"


class RemoteCatalogSource(BaseSource):
    """Reads plans that are already close to the canonical shape.

    Items are mapped leniently (``monthlyPrice`` vs ``price.monthly``, top-level
    ``cpu`` vs ``specs.cpu``...) and left for the schema validator to judge.
    """

    name = "remote"
    display_name = "remote catalog"
    website = ""

    def __init__(self, api_url: Optional[str], api_key: Optional[str] = None, **kwargs: Any):
        self.api_url = api_url
        self.api_key = api_key
        super().__init__(**kwargs)

    def missing_credentials(self) -> List[str]:
        return [] if self.api_url else ["VPS_CATALOG_API_URL"]

    def client_options(self) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return {"headers": headers}

    async def _collect(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        payloads = await self._get_all(client, {"plans": self.api_url})
        items = self._parse_items(payloads["plans"])
        fetched_at = datetime.now(timezone.utc)
        return [self._to_candidate(index, item, fetched_at) for index, item in enumerate(items)]

    def _parse_items(self, payload: Any) -> List[Dict[str, Any]]:
        try:
            return _items_adapter.validate_python(payload)
        except ValidationError as exc:
            raise ProviderParseError(self.display_name, "plans", str(exc)) from exc

    @staticmethod
    def _parse_uptime(value: Any) -> Any:
        if value is None:
            return dict(DEFAULT_UPTIME)
        if isinstance(value, str):
            match = _UPTIME_RE.match(value)
            if match:
                return {"percentage": float(match.group(1)), "sla": False}
        return value

    @staticmethod
    def _cap_locations(value: Any) -> Any:
        if value is None:
            return []
        # anything but a list is handed to the validator untouched
        if not isinstance(value, list):
            return value
        return cap_locations(value)

    def _to_candidate(self, index: int, item: Dict[str, Any], fetched_at: datetime) -> Dict[str, Any]:
        price = item.get("price") if isinstance(item.get("price"), dict) else {}
        specs = item.get("specs") if isinstance(item.get("specs"), dict) else {}

        candidate: Dict[str, Any] = {
            "id": item.get("id") or f"vps-{index}",
            "provider": item.get("provider"),
            "name": item.get("name"),
            "price": {
                "monthly": price.get("monthly") or item.get("monthlyPrice"),
                "yearly": price.get("yearly") or item.get("yearlyPrice"),
                "currency": price.get("currency") or item.get("currency") or "USD",
            },
            "specs": {
                "cpu": specs.get("cpu") or item.get("cpu"),
                "ram": specs.get("ram") or item.get("ram"),
                "storage": specs.get("storage") or item.get("storage"),
                "bandwidth": specs.get("bandwidth") or item.get("bandwidth"),
            },
            "features": item.get("features") or [],
            "locations": self._cap_locations(item.get("locations")),
            "uptime": self._parse_uptime(item.get("uptime")),
            "support": item.get("support") or DEFAULT_SUPPORT,
            "website": item.get("website") or item.get("url"),
            "tags": item.get("tags") or [],
            "description": item.get("description"),
            "featured": item.get("featured") or False,
            "createdAt": item.get("createdAt") or fetched_at,
            "updatedAt": item.get("updatedAt") or fetched_at,
        }
        if candidate["price"]["yearly"] is None:
            del candidate["price"]["yearly"]
        return candidate
