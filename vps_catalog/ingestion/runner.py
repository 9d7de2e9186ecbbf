"""Fan-out over every plan source."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from vps_catalog.core.logging import get_logger
from .base import BaseSource

log = get_logger("ingestion.runner")


class IngestionRunner:
    """Runs all sources concurrently and joins their plans in registration order."""

    def __init__(self, sources: List[BaseSource]):
        self.sources = sources

    async def run(self) -> Dict[str, List[Dict[str, Any]]]:
        results = await asyncio.gather(
            *(source.fetch_plans() for source in self.sources),
            return_exceptions=True,
        )

        aggregated: Dict[str, List[Dict[str, Any]]] = {}
        for source, result in zip(self.sources, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                # fetch_plans is meant to swallow everything; never let one source sink the rest
                log.opt(exception=result).error(
                    f"Source={source.name} escaped its error boundary: {result!r}"
                )
                result = []
            aggregated[source.name] = result

        total = sum(len(plans) for plans in aggregated.values())
        log.info(f"Fetched {total} VPS plans total")
        for name, plans in aggregated.items():
            log.info(f"Source={name} plans={len(plans)}")
        return aggregated

    async def aggregate_all_plans(self) -> List[Dict[str, Any]]:
        aggregated = await self.run()
        return [plan for plans in aggregated.values() for plan in plans]
