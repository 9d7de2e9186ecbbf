from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderSummary(BaseModel):
    """Plans grouped under the provider that sells them."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    logo: Optional[str] = None
    website: str
    plan_count: int = Field(alias="planCount")
    plans: list[str] = Field(min_length=1)  # plan ids, collection order


class CatalogSnapshot(BaseModel):
    """JSON document handed to the static site build."""

    model_config = ConfigDict(populate_by_name=True)

    generated_at: datetime = Field(alias="generatedAt")
    total: int
    providers: list[ProviderSummary]
    plans: list[dict]
