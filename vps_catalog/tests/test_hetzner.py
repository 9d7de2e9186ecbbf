"""Hetzner source tests"""

import pytest

from vps_catalog.ingestion.hetzner import HetznerSource
from vps_catalog.schemas.normalized import NormalizedPlan
from vps_catalog.services.validation_service import validate_plan

SERVER_TYPES_URL = "api.hetzner.cloud/v1/server_types"
LOCATIONS_URL = "api.hetzner.cloud/v1/locations"

LOCATIONS = {
    "locations": [
        {"name": "fsn1", "city": "Falkenstein", "country": "DE"},
        {"name": "nbg1", "city": "Nuremberg", "country": "DE"},
        {"name": "hel1", "city": "Helsinki", "country": "FI"},
    ]
}


def price(gross):
    return {"location": "fsn1", "price_monthly": {"net": gross, "gross": gross}}


def make_server_type(name="cx11", **overrides):
    server_type = {
        "name": name,
        "description": "CX11",
        "cores": 1,
        "memory": 2.0,
        "disk": 20,
        "deprecated": False,
        "architecture": "x86",
        "cpu_type": "shared",
        "storage_type": "local",
        "prices": [price("5.00"), price("4.15"), price("4.50")],
    }
    server_type.update(overrides)
    return server_type


def make_api(fake_api, *server_types):
    return fake_api(
        {
            SERVER_TYPES_URL: (200, {"server_types": list(server_types)}),
            LOCATIONS_URL: (200, LOCATIONS),
        }
    )


class TestHetznerSource:
    """Test Hetzner server type mapping"""

    @pytest.mark.asyncio
    async def test_monthly_price_is_cheapest_location(self, fake_api):
        api = make_api(fake_api, make_server_type())
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        assert plans[0]["price"] == {"monthly": 4.15, "currency": "EUR"}

    @pytest.mark.asyncio
    async def test_maps_server_type_to_plan(self, fake_api):
        api = make_api(fake_api, make_server_type())
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        plan = plans[0]
        assert plan["id"] == "hetzner-cx11"
        assert plan["name"] == "cx11"
        assert plan["description"] == "CX11"
        assert plan["specs"]["cpu"] == {"cores": 1, "type": "vCPU"}
        assert plan["specs"]["ram"] == {"amount": 2.0, "unit": "GB"}
        assert plan["specs"]["storage"]["type"] == "SSD"
        assert plan["specs"]["bandwidth"] == {"amount": 20, "unit": "TB", "unlimited": False}
        assert plan["locations"] == ["Falkenstein, DE", "Nuremberg, DE", "Helsinki, FI"]
        assert plan["uptime"] == {"percentage": 99.9, "sla": False}
        assert plan["featured"] is True
        assert plan["tags"] == ["europe", "budget", "high-bandwidth", "ultra-budget"]

    @pytest.mark.asyncio
    async def test_dedicated_cpu_and_network_storage(self, fake_api):
        api = make_api(
            fake_api,
            make_server_type(
                "ccx23",
                cores=4,
                memory=16.0,
                cpu_type="dedicated",
                storage_type="network",
                prices=[price("24.49")],
            ),
        )
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        plan = plans[0]
        assert plan["specs"]["cpu"]["type"] == "CPU"
        assert plan["specs"]["storage"]["type"] == "NVMe"
        assert plan["featured"] is False
        assert plan["tags"] == ["europe", "budget", "high-bandwidth", "high-performance", "high-memory"]

    @pytest.mark.asyncio
    async def test_skips_deprecated_and_arm_by_default(self, fake_api):
        api = make_api(
            fake_api,
            make_server_type("cx11", deprecated=True),
            make_server_type("cax11", architecture="arm64"),
            make_server_type("cx22"),
        )
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        assert [plan["id"] for plan in plans] == ["hetzner-cx22"]

    @pytest.mark.asyncio
    async def test_includes_arm_when_enabled(self, fake_api):
        api = make_api(
            fake_api,
            make_server_type("cax11", architecture="arm64", prices=[price("3.79")]),
        )
        plans = await HetznerSource(api_key="k", include_arm=True, transport=api.transport).fetch_plans()

        assert plans[0]["id"] == "hetzner-cax11"
        assert plans[0]["tags"][-2:] == ["arm", "energy-efficient"]

    @pytest.mark.asyncio
    async def test_server_type_without_prices_fails_the_fetch(self, fake_api, captured_logs):
        api = make_api(fake_api, make_server_type(prices=[]))
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        assert plans == []
        errors = captured_logs.messages("ERROR")
        assert len(errors) == 1
        assert "server_types" in errors[0]

    @pytest.mark.asyncio
    async def test_locations_capped_at_ten(self, fake_api):
        many = {"locations": [{"city": f"City {i}", "country": "DE"} for i in range(12)]}
        api = fake_api(
            {
                SERVER_TYPES_URL: (200, {"server_types": [make_server_type()]}),
                LOCATIONS_URL: (200, many),
            }
        )
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        assert len(plans[0]["locations"]) == 10
        assert plans[0]["locations"][0] == "City 0, DE"

    @pytest.mark.asyncio
    async def test_small_memory_is_reported_in_mb(self, fake_api):
        api = make_api(fake_api, make_server_type("cx-small", memory=0.5), make_server_type("cx22", memory=4.0))
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        assert plans[0]["specs"]["ram"] == {"amount": 512.0, "unit": "MB"}
        assert plans[1]["specs"]["ram"] == {"amount": 4.0, "unit": "GB"}

    @pytest.mark.asyncio
    async def test_plans_pass_schema_validation(self, fake_api):
        api = make_api(fake_api, make_server_type(), make_server_type("ccx23", cpu_type="dedicated", memory=16.0))
        plans = await HetznerSource(api_key="k", transport=api.transport).fetch_plans()

        assert len(plans) == 2
        assert all(isinstance(validate_plan(plan), NormalizedPlan) for plan in plans)

    @pytest.mark.asyncio
    async def test_repeated_fetch_is_identical(self, fake_api):
        source = HetznerSource(api_key="k", transport=make_api(fake_api, make_server_type()).transport)

        assert await source.fetch_plans() == await source.fetch_plans()
