"""Abstract source interface for provider ingestion."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from vps_catalog.core.errors import (
    ProviderError,
    ProviderHTTPError,
    ProviderParseError,
    ProviderTransportError,
)
from vps_catalog.core.logging import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_TIMEOUT_SECONDS = 15.0


class BaseSource(ABC):
    """Abstract base class for plan sources.

    Subclasses implement :meth:`_collect`; :meth:`fetch_plans` wraps it with the
    credential check and the all-or-nothing error boundary, so callers only
    ever see "zero or more plans".
    """

    name: str
    display_name: str
    website: str

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self.log = get_logger(f"ingestion.{self.name}")

    def missing_credentials(self) -> List[str]:
        """Names of required settings that are not configured."""
        return []

    def client_options(self) -> Dict[str, Any]:
        """Extra ``httpx.AsyncClient`` arguments (auth, headers)."""
        return {}

    @abstractmethod
    async def _collect(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        """Fetch, filter and map the provider's plans into candidate records."""

    async def fetch_plans(self) -> List[Dict[str, Any]]:
        missing = self.missing_credentials()
        if missing:
            self.log.warning(f"{' or '.join(missing)} not set, skipping {self.display_name} plans")
            return []

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport, **self.client_options()
            ) as client:
                plans = await self._collect(client)
        except ProviderError as exc:
            self.log.error(f"Failed to fetch {self.display_name} plans: {exc}")
            return []
        except Exception as exc:  # noqa: BLE001
            # A bug, not an upstream problem: keep the traceback
            self.log.exception(f"Unexpected error while mapping {self.display_name} plans: {exc!r}")
            return []

        self.log.info(f"Fetched {len(plans)} plans from {self.display_name}")
        return plans

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------
    async def _get_json(
        self,
        client: httpx.AsyncClient,
        resource: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            resp = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ProviderTransportError(self.display_name, resource, exc) from exc

        if not resp.is_success:
            raise ProviderHTTPError(self.display_name, resource, resp.status_code, resp.reason_phrase)

        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderParseError(self.display_name, resource, f"invalid JSON ({exc})") from exc

    async def _get_all(self, client: httpx.AsyncClient, urls: Dict[str, str]) -> Dict[str, Any]:
        """Fetch every resource concurrently; the first failure in listing order wins."""
        names = list(urls)
        results = await asyncio.gather(
            *(self._get_json(client, name, urls[name]) for name in names),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return dict(zip(names, results))

    def _parse(self, model: Type[ModelT], payload: Any, resource: str) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ProviderParseError(self.display_name, resource, str(exc)) from exc

    def plan_id(self, provider_plan_id: str) -> str:
        return f"{self.name}-{provider_plan_id.lower()}"
