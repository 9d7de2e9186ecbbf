"""Canonical VPS plan schema shared by every provider."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

Currency = Literal["USD", "EUR", "GBP"]
CpuType = Literal["vCPU", "CPU", "Core"]
RamUnit = Literal["MB", "GB", "TB"]
StorageUnit = Literal["GB", "TB"]
StorageType = Literal["SSD", "NVMe", "HDD", "EBS"]
BandwidthUnit = Literal["GB", "TB"]

_url_adapter = TypeAdapter(AnyUrl)


class PlanModel(BaseModel):
    """Immutable base: plans are never mutated once validated."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Price(PlanModel):
    monthly: float = Field(gt=0, strict=True)
    yearly: Optional[float] = Field(default=None, gt=0, strict=True)
    currency: Currency


class CPUSpec(PlanModel):
    cores: int = Field(gt=0, strict=True)
    type: CpuType = "vCPU"


class RAMSpec(PlanModel):
    amount: float = Field(gt=0, strict=True)
    unit: RamUnit = "GB"


class StorageSpec(PlanModel):
    amount: float = Field(gt=0, strict=True)
    unit: StorageUnit = "GB"
    type: StorageType = "SSD"


class BandwidthSpec(PlanModel):
    # Absent when the provider does not meter traffic
    amount: Optional[float] = Field(default=None, ge=0, strict=True)
    unit: BandwidthUnit = "TB"
    unlimited: bool = Field(default=False, strict=True)


class Specs(PlanModel):
    cpu: CPUSpec
    ram: RAMSpec
    storage: StorageSpec
    bandwidth: BandwidthSpec


class Uptime(PlanModel):
    percentage: float = Field(ge=0, le=100, strict=True)
    sla: bool = Field(default=False, strict=True)


class NormalizedPlan(PlanModel):
    """A validated plan, identified by ``<provider-slug>-<plan-id>``."""

    id: str = Field(min_length=1, strict=True)
    provider: str = Field(min_length=1, strict=True)
    name: str = Field(min_length=1, strict=True)
    price: Price
    specs: Specs
    features: List[str] = Field(min_length=1)
    locations: List[str] = Field(min_length=1)
    uptime: Uptime
    support: str = Field(min_length=1, strict=True)
    website: str

    tags: Optional[List[str]] = None
    description: Optional[str] = None
    featured: bool = Field(default=False, strict=True)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("website")
    @classmethod
    def _website_is_url(cls, value: str) -> str:
        try:
            _url_adapter.validate_python(value)
        except ValidationError as exc:
            raise ValueError("Website must be a valid URL") from exc
        # keep the original string; AnyUrl would append a trailing slash
        return value

    def to_record(self) -> dict:
        """Serialize with the public (camelCase) field names, omitting absent optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
