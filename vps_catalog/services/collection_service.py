"""Collection loading: aggregate, validate and publish the plan catalog."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from vps_catalog.core.config import Settings, settings
from vps_catalog.core.errors import CollectionLoadError
from vps_catalog.core.logging import get_logger
from vps_catalog.ingestion.registry import build_sources
from vps_catalog.ingestion.runner import IngestionRunner
from vps_catalog.schemas.normalized import NormalizedPlan
from vps_catalog.schemas.snapshot import CatalogSnapshot, ProviderSummary
from vps_catalog.services.validation_service import ValidationErrorSet, validate_plan

log = get_logger("collection_service")


def summarize_providers(plans: List[NormalizedPlan]) -> List[ProviderSummary]:
    """Group plans by provider, in the order providers first appear."""
    grouped: Dict[str, List[NormalizedPlan]] = {}
    for plan in plans:
        grouped.setdefault(plan.provider, []).append(plan)

    return [
        ProviderSummary(
            name=name,
            website=provider_plans[0].website,
            plan_count=len(provider_plans),
            plans=[plan.id for plan in provider_plans],
        )
        for name, provider_plans in grouped.items()
    ]


class CollectionLoader:
    """Runs the aggregation and keeps the records that pass the schema.

    Responsibilities:
    - Fan out to every configured source through :class:`IngestionRunner`
    - Validate each candidate; invalid ones are logged and dropped, or abort
      the load when ``strict`` is set
    - Keep ids unique (first occurrence wins)
    - Write the JSON snapshot the static site reads
    """

    def __init__(
        self,
        runner: Optional[IngestionRunner] = None,
        *,
        strict: Optional[bool] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or settings
        self.runner = runner or IngestionRunner(build_sources(self.config))
        self.strict = self.config.STRICT_VALIDATION if strict is None else strict

    async def load(self) -> List[NormalizedPlan]:
        try:
            candidates = await self.runner.aggregate_all_plans()
        except Exception as exc:  # noqa: BLE001
            raise CollectionLoadError(f"Plan aggregation failed: {exc}") from exc

        plans: List[NormalizedPlan] = []
        failures: List[ValidationErrorSet] = []
        seen_ids = set()

        for candidate in candidates:
            result = validate_plan(candidate)
            if isinstance(result, ValidationErrorSet):
                failures.append(result)
                continue
            if result.id in seen_ids:
                log.warning(f"Duplicate plan id {result.id} from {result.provider}; keeping the first one")
                continue
            seen_ids.add(result.id)
            plans.append(result)

        if failures:
            if self.strict:
                raise CollectionLoadError(
                    f"{len(failures)} plan(s) failed schema validation",
                    failures=[str(failure) for failure in failures],
                )
            for failure in failures:
                log.warning(f"Rejected invalid plan {failure}")

        log.info(f"Loaded {len(plans)} valid plans ({len(failures)} rejected)")
        return plans

    async def build_snapshot(self) -> CatalogSnapshot:
        plans = await self.load()
        return CatalogSnapshot(
            generated_at=datetime.now(timezone.utc),
            total=len(plans),
            providers=summarize_providers(plans),
            plans=[plan.to_record() for plan in plans],
        )

    async def write_snapshot(self, path: Optional[Union[str, Path]] = None) -> CatalogSnapshot:
        """Load the collection and write it as JSON for the site build."""
        snapshot = await self.build_snapshot()
        output = Path(path or self.config.OUTPUT_PATH)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            snapshot.model_dump_json(indent=2, by_alias=True, exclude_none=True),
            encoding="utf-8",
        )
        log.info(f"Wrote {snapshot.total} plans to {output}")
        return snapshot
