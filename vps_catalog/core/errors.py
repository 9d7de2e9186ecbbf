"""Exception hierarchy for the catalog build."""

from __future__ import annotations

from typing import List, Optional


class CatalogError(Exception):
    """Base exception for every catalog failure."""


class ProviderError(CatalogError):
    """Expected upstream failure; the adapter degrades to an empty plan list."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(message)


class ProviderHTTPError(ProviderError):
    """A provider resource answered with a non-2xx status."""

    def __init__(self, provider: str, resource: str, status_code: int, reason: str = ""):
        self.resource = resource
        self.status_code = status_code
        self.reason = reason
        detail = f"{status_code} {reason}".strip()
        super().__init__(provider, f"{resource} request returned {detail}")


class ProviderTransportError(ProviderError):
    """The request never produced a response (DNS, connect, timeout...)."""

    def __init__(self, provider: str, resource: str, cause: Exception):
        self.resource = resource
        self.cause = cause
        super().__init__(provider, f"{resource} request failed: {cause!r}")


class ProviderParseError(ProviderError):
    """A response body was not JSON or did not have the expected shape."""

    def __init__(self, provider: str, resource: str, detail: str):
        self.resource = resource
        super().__init__(provider, f"unexpected {resource} payload: {detail}")


class CollectionLoadError(CatalogError):
    """Systemic failure that aborts the whole collection load."""

    def __init__(self, message: str, failures: Optional[List[str]] = None):
        self.failures = failures or []
        super().__init__(message)
