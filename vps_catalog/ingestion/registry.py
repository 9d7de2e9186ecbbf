"""Builds the ordered list of plan sources from explicit settings."""

from __future__ import annotations

from typing import List, Optional, Sequence

import httpx

from vps_catalog.core.config import Settings
from .base import BaseSource
from .digitalocean import DigitalOceanSource
from .hetzner import HetznerSource
from .linode import LinodeSource
from .remote_catalog import RemoteCatalogSource
from .scaleway import ScalewaySource
from .upcloud import UpCloudSource
from .vultr import VultrSource

# Registration order is the order plans appear in the collection
PROVIDER_SOURCES = ("digitalocean", "hetzner", "linode", "vultr", "upcloud", "scaleway")


def build_sources(
    config: Settings,
    only: Optional[Sequence[str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[BaseSource]:
    """Instantiate every source, optionally restricted to the names in ``only``."""
    common = {"timeout": config.HTTP_TIMEOUT_SECONDS, "transport": transport}

    sources: List[BaseSource] = [
        DigitalOceanSource(api_key=config.DIGITALOCEAN_API_KEY, **common),
        HetznerSource(
            api_key=config.HETZNER_API_KEY,
            include_arm=config.hetzner_include_arm,
            **common,
        ),
        LinodeSource(**common),
        VultrSource(api_key=config.VULTR_API_KEY, **common),
        UpCloudSource(
            username=config.UPCLOUD_USERNAME,
            password=config.UPCLOUD_PASSWORD,
            **common,
        ),
        ScalewaySource(api_key=config.SCALEWAY_API_KEY, **common),
    ]
    # The external feed is opt-in, so an unset URL is not worth a warning
    if config.VPS_CATALOG_API_URL:
        sources.append(
            RemoteCatalogSource(
                api_url=config.VPS_CATALOG_API_URL,
                api_key=config.VPS_CATALOG_API_KEY,
                **common,
            )
        )

    if only:
        unknown = set(only) - {source.name for source in sources}
        if unknown:
            raise ValueError(f"Unknown source(s): {', '.join(sorted(unknown))}")
        sources = [source for source in sources if source.name in only]
    return sources
