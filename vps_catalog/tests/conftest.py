"""Shared fixtures: a fake provider API on httpx.MockTransport and log capture."""

import os

# No file sink during tests; must be set before vps_catalog.core.logging is imported
os.environ["LOG_FILE"] = ""

from typing import Any, Dict, List  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from loguru import logger  # noqa: E402


class FakeProviderAPI:
    """Routes ``host/path`` to canned responses and records every request.

    A route value is ``(status, body)``; a ``str`` body is sent as text, an
    exception instance is raised as a transport failure.
    """

    def __init__(self, routes: Dict[str, Any]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.url.host}{request.url.path}")
        if route is None:
            return httpx.Response(404, json={"error": "not_found"})
        if isinstance(route, Exception):
            raise route
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class LogCapture:
    def __init__(self):
        self.records: List[dict] = []

    def sink(self, message) -> None:
        self.records.append(message.record)

    def messages(self, level: str) -> List[str]:
        return [record["message"] for record in self.records if record["level"].name == level]


@pytest.fixture
def fake_api():
    """Factory for a FakeProviderAPI."""
    return FakeProviderAPI


@pytest.fixture
def captured_logs():
    capture = LogCapture()
    handler_id = logger.add(capture.sink, level="DEBUG", format="{message}")
    yield capture
    logger.remove(handler_id)
