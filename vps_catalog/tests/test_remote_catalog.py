"""Remote catalog feed tests"""

import pytest

from vps_catalog.ingestion.remote_catalog import RemoteCatalogSource
from vps_catalog.schemas.normalized import NormalizedPlan
from vps_catalog.services.validation_service import ValidationErrorSet, validate_plan

FEED_URL = "https://catalog.example.com/plans"
FEED_ROUTE = "catalog.example.com/plans"

CANONICAL_ITEM = {
    "id": "acme-small",
    "provider": "Acme Hosting",
    "name": "Small",
    "price": {"monthly": 4.5, "yearly": 45.0, "currency": "GBP"},
    "specs": {
        "cpu": {"cores": 1},
        "ram": {"amount": 1},
        "storage": {"amount": 20},
        "bandwidth": {"unlimited": True},
    },
    "features": ["SSD Storage"],
    "locations": ["London, UK"],
    "uptime": {"percentage": 99.95, "sla": True},
    "support": "Email Support",
    "website": "https://acme.example.com",
    "createdAt": "2024-01-15T10:00:00Z",
}

FLAT_ITEM = {
    "provider": "Flat Host",
    "name": "Flat 2",
    "monthlyPrice": 8,
    "cpu": {"cores": 2, "type": "Core"},
    "ram": {"amount": 2, "unit": "GB"},
    "storage": {"amount": 40, "type": "NVMe"},
    "bandwidth": {"amount": 2, "unit": "TB"},
    "features": ["NVMe"],
    "locations": [f"Site {i}" for i in range(15)],
    "uptime": "99.5%",
    "url": "https://flat.example.com/plans",
}


class TestRemoteCatalogSource:
    """Test lenient mapping of the external plan feed"""

    @pytest.mark.asyncio
    async def test_canonical_item_passes_through(self, fake_api):
        api = fake_api({FEED_ROUTE: (200, [CANONICAL_ITEM])})
        plans = await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()

        plan = plans[0]
        assert plan["id"] == "acme-small"
        assert plan["price"] == {"monthly": 4.5, "yearly": 45.0, "currency": "GBP"}
        assert plan["uptime"] == {"percentage": 99.95, "sla": True}
        assert plan["createdAt"] == "2024-01-15T10:00:00Z"

        validated = validate_plan(plan)
        assert isinstance(validated, NormalizedPlan)
        assert validated.specs.cpu.type == "vCPU"
        assert validated.specs.bandwidth.unit == "TB"

    @pytest.mark.asyncio
    async def test_flat_item_is_mapped(self, fake_api):
        api = fake_api({FEED_ROUTE: (200, [FLAT_ITEM])})
        plans = await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()

        plan = plans[0]
        assert plan["id"] == "vps-0"
        assert plan["price"] == {"monthly": 8, "currency": "USD"}
        assert plan["specs"]["cpu"] == {"cores": 2, "type": "Core"}
        assert plan["uptime"] == {"percentage": 99.5, "sla": False}
        assert plan["support"] == "24/7 Support"
        assert plan["website"] == "https://flat.example.com/plans"
        assert len(plan["locations"]) == 10
        assert plan["createdAt"] == plan["updatedAt"]
        assert isinstance(validate_plan(plan), NormalizedPlan)

    @pytest.mark.asyncio
    async def test_missing_uptime_gets_default(self, fake_api):
        item = {key: value for key, value in CANONICAL_ITEM.items() if key != "uptime"}
        api = fake_api({FEED_ROUTE: (200, [item])})
        plans = await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()

        assert plans[0]["uptime"] == {"percentage": 99.9, "sla": False}

    @pytest.mark.asyncio
    async def test_incomplete_item_is_left_for_the_validator(self, fake_api):
        api = fake_api({FEED_ROUTE: (200, [{"provider": "Broken", "name": "No price"}])})
        plans = await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()

        result = validate_plan(plans[0])
        assert isinstance(result, ValidationErrorSet)
        paths = {error.path for error in result.errors}
        assert {"price.monthly", "features", "locations", "website"} <= paths

    @pytest.mark.asyncio
    async def test_bearer_token_only_when_configured(self, fake_api):
        api = fake_api({FEED_ROUTE: (200, [])})
        await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()
        await RemoteCatalogSource(api_url=FEED_URL, api_key="feed-key", transport=api.transport).fetch_plans()

        assert "Authorization" not in api.requests[0].headers
        assert api.requests[1].headers["Authorization"] == "Bearer feed-key"

    @pytest.mark.asyncio
    async def test_non_list_payload_is_rejected(self, fake_api, captured_logs):
        api = fake_api({FEED_ROUTE: (200, {"plans": []})})
        plans = await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()

        assert plans == []
        errors = captured_logs.messages("ERROR")
        assert len(errors) == 1
        assert "unexpected plans payload" in errors[0]

    @pytest.mark.asyncio
    async def test_string_locations_are_rejected_not_split(self, fake_api):
        api = fake_api({FEED_ROUTE: (200, [dict(CANONICAL_ITEM, locations="Paris")])})
        plans = await RemoteCatalogSource(api_url=FEED_URL, transport=api.transport).fetch_plans()

        assert plans[0]["locations"] == "Paris"
        result = validate_plan(plans[0])
        assert isinstance(result, ValidationErrorSet)
        assert "locations" in {error.path for error in result.errors}
