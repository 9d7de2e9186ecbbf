"""ETL entrypoint - builds the plan catalog snapshot for the static site.

Usage:
    python -m vps_catalog.etl_entrypoint                     # All configured sources
    python -m vps_catalog.etl_entrypoint hetzner linode      # Only these sources
"""

import asyncio
import sys
from typing import List, Optional

from vps_catalog.core.config import settings
from vps_catalog.core.errors import CollectionLoadError
from vps_catalog.core.logging import get_logger
from vps_catalog.ingestion.base import BaseSource
from vps_catalog.ingestion.registry import build_sources
from vps_catalog.ingestion.runner import IngestionRunner
from vps_catalog.schemas.snapshot import CatalogSnapshot
from vps_catalog.services.collection_service import CollectionLoader

logger = get_logger("etl_entrypoint")


async def run_catalog_build(sources: List[BaseSource]) -> CatalogSnapshot:
    """Fetch, validate and write the catalog."""
    logger.info(f"Fetching VPS plans from {len(sources)} source(s): {', '.join(s.name for s in sources)}")
    loader = CollectionLoader(IngestionRunner(sources), config=settings)
    return await loader.write_snapshot(settings.OUTPUT_PATH)


def main(argv: Optional[List[str]] = None) -> CatalogSnapshot:
    """Main entry point for the catalog build."""
    args = sys.argv[1:] if argv is None else argv
    logger.info("Catalog build starting...")

    try:
        sources = build_sources(settings, only=args or None)
    except ValueError as exc:
        logger.error(str(exc))
        sys.exit(2)

    try:
        snapshot = asyncio.run(run_catalog_build(sources))
    except CollectionLoadError as exc:
        logger.error(f"Catalog build failed: {exc}")
        for failure in exc.failures:
            logger.error(failure)
        sys.exit(1)

    for provider in snapshot.providers:
        logger.info(f"  - {provider.name}: {provider.plan_count} plans")
    logger.info(f"Catalog build completed: {snapshot.total} plans")
    return snapshot


if __name__ == "__main__":
    main()
