# Ingestion package
from vps_catalog.ingestion.base import BaseSource
from vps_catalog.ingestion.digitalocean import DigitalOceanSource
from vps_catalog.ingestion.hetzner import HetznerSource
from vps_catalog.ingestion.linode import LinodeSource
from vps_catalog.ingestion.registry import PROVIDER_SOURCES, build_sources
from vps_catalog.ingestion.remote_catalog import RemoteCatalogSource
from vps_catalog.ingestion.runner import IngestionRunner
from vps_catalog.ingestion.scaleway import ScalewaySource
from vps_catalog.ingestion.upcloud import UpCloudSource
from vps_catalog.ingestion.vultr import VultrSource

__all__ = [
    "BaseSource",
    "DigitalOceanSource",
    "HetznerSource",
    "LinodeSource",
    "VultrSource",
    "UpCloudSource",
    "ScalewaySource",
    "RemoteCatalogSource",
    "IngestionRunner",
    "PROVIDER_SOURCES",
    "build_sources",
]
