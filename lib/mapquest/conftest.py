"""
Pytest fixtures for MapQuest client tests.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from lib.mapquest import MapQuestClient
from lib.mapquest.test_helpers import FakeService, makePng


@pytest.fixture
def jsonService() -> Callable[..., FakeService]:
    """Factory for a fake service answering with a JSON document."""

    def factory(payload: Any, statusCode: int = 200) -> FakeService:
        return FakeService(content=json.dumps(payload).encode(), statusCode=statusCode)

    return factory


@pytest.fixture
def pngService() -> Callable[[int, int], FakeService]:
    """Factory for a fake service answering with a PNG image."""

    def factory(width: int, height: int) -> FakeService:
        return FakeService(content=makePng(width, height), contentType="image/png")

    return factory


@pytest.fixture
def clientFor() -> Callable[[FakeService], MapQuestClient]:
    """Factory for a MapQuestClient talking to a fake service, dood!"""

    def factory(service: FakeService) -> MapQuestClient:
        return MapQuestClient(
            apiKey="test_key",
            httpClient=httpx.AsyncClient(transport=httpx.MockTransport(service)),
        )

    return factory
