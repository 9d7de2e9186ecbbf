"""Typed views of the upstream provider payloads.

Every adapter converts decoded JSON into these models before any filtering
or mapping happens, so a provider changing its response shape surfaces as a
parse error instead of a ``KeyError`` deep inside a transform.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# DigitalOcean (https://api.digitalocean.com/v2)
# ---------------------------------------------------------------------------
class DOSize(RawModel):
    slug: str
    available: bool = True
    memory: int  # MB
    vcpus: int
    disk: float  # GB
    transfer: float  # TB
    price_monthly: float
    regions: List[str] = Field(default_factory=list)
    description: Optional[str] = None


class DORegion(RawModel):
    slug: str
    name: str
    available: bool = True


class DOSizesResponse(RawModel):
    sizes: List[DOSize] = Field(default_factory=list)


class DORegionsResponse(RawModel):
    regions: List[DORegion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Hetzner Cloud (https://api.hetzner.cloud/v1)
# ---------------------------------------------------------------------------
class HetznerAmount(RawModel):
    gross: float  # published as a decimal string


class HetznerPrice(RawModel):
    location: Optional[str] = None
    price_monthly: HetznerAmount


class HetznerServerType(RawModel):
    name: str
    description: Optional[str] = None
    cores: int
    memory: float  # GB
    disk: float  # GB
    deprecated: Optional[bool] = False
    architecture: str = "x86"
    cpu_type: str = "shared"
    storage_type: str = "local"
    prices: List[HetznerPrice] = Field(min_length=1)


class HetznerLocation(RawModel):
    name: Optional[str] = None
    city: str
    country: str


class HetznerServerTypesResponse(RawModel):
    server_types: List[HetznerServerType] = Field(default_factory=list)


class HetznerLocationsResponse(RawModel):
    locations: List[HetznerLocation] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Linode / Akamai (https://api.linode.com/v4)
# ---------------------------------------------------------------------------
class LinodePrice(RawModel):
    monthly: float
    hourly: Optional[float] = None


class LinodeType(RawModel):
    id: str
    label: str
    plan_class: str = Field(alias="class")
    vcpus: int
    memory: int  # MB
    disk: int  # MB
    transfer: int  # GB
    price: LinodePrice


class LinodeRegion(RawModel):
    id: Optional[str] = None
    label: str
    status: str


class LinodeTypesResponse(RawModel):
    data: List[LinodeType] = Field(default_factory=list)


class LinodeRegionsResponse(RawModel):
    data: List[LinodeRegion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Vultr (https://api.vultr.com/v2)
# ---------------------------------------------------------------------------
class VultrPlan(RawModel):
    id: str
    vcpu_count: int
    ram: int  # MB
    disk: float  # GB
    bandwidth: float  # GB
    monthly_cost: float
    type: str
    locations: List[str] = Field(default_factory=list)


class VultrRegion(RawModel):
    id: str
    city: str
    country: str
    continent: Optional[str] = None
    options: List[str] = Field(default_factory=list)


class VultrPlansResponse(RawModel):
    plans: List[VultrPlan] = Field(default_factory=list)


class VultrRegionsResponse(RawModel):
    regions: List[VultrRegion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# UpCloud (https://api.upcloud.com/1.3)
# ---------------------------------------------------------------------------
class UpCloudPlan(RawModel):
    name: str
    core_number: int
    memory_amount: int  # MB
    storage_size: float  # GB
    storage_tier: str = "maxiops"
    public_traffic_out: float  # GB


class UpCloudPlanList(RawModel):
    plan: List[UpCloudPlan] = Field(default_factory=list)


class UpCloudPlansResponse(RawModel):
    plans: UpCloudPlanList


class UpCloudPriceZones(RawModel):
    zone: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _index_zone_list(cls, data: Any) -> Any:
        # The live API lists zones as [{"name": "fi-hel1", ...}]; keyed form is kept as-is
        if isinstance(data, dict) and isinstance(data.get("zone"), list):
            indexed = {}
            for entry in data["zone"]:
                if isinstance(entry, dict) and entry.get("name"):
                    indexed[entry["name"]] = entry
            return {**data, "zone": indexed}
        return data

    def hourly_price(self, zone_id: str, plan_name: str) -> Optional[float]:
        entry = self.zone.get(zone_id, {}).get(f"server_plan_{plan_name}")
        if not isinstance(entry, dict) or entry.get("price") in (None, ""):
            return None
        return float(entry["price"])


class UpCloudPricingResponse(RawModel):
    prices: UpCloudPriceZones


class UpCloudZone(RawModel):
    id: str
    description: str


class UpCloudZoneList(RawModel):
    zone: List[UpCloudZone] = Field(default_factory=list)


class UpCloudZonesResponse(RawModel):
    zones: UpCloudZoneList


# ---------------------------------------------------------------------------
# Scaleway Instances (https://api.scaleway.com/instance/v1)
# ---------------------------------------------------------------------------
class ScalewayVolumeConstraint(RawModel):
    min_size: int = 0  # bytes
    max_size: int  # bytes


class ScalewayServerType(RawModel):
    arch: str = "x86_64"
    ncpus: int
    ram: int  # bytes
    volumes_constraint: ScalewayVolumeConstraint
    monthly_price: Optional[float] = None
    hourly_price: Optional[float] = None
    baremetal: bool = False
    gpu: Optional[int] = 0


class ScalewayServersResponse(RawModel):
    servers: Dict[str, ScalewayServerType] = Field(default_factory=dict)
