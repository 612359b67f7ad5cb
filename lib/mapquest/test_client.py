"""
Unit tests for MapQuest API Client

Tests the shared GET round trip: headers, key handling, transport and
status errors, per-call sessions and logging.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from lib.mapquest import MapQuestClient, MapQuestConfig
from lib.mapquest.client import apiUrl, buildUrl, decodeJson, maskParams
from lib.mapquest.constants import USER_AGENT
from lib.mapquest.exceptions import ApiStatusError, ConfigurationError, DecodeError, MapQuestError, TransportError
from lib.mapquest.test_helpers import FakeService


def test_empty_api_key():
    """Test client refuses an empty API key, dood!"""
    with pytest.raises(ConfigurationError):
        MapQuestClient(apiKey="")
    with pytest.raises(ConfigurationError):
        MapQuestClient(apiKey="   ")


def test_from_config():
    """Test client picks up host and timeout from configuration."""
    client = MapQuestClient.fromConfig(MapQuestConfig(apiKey="cfg_key", host="example.test", requestTimeout=3))

    assert client.apiKey == "cfg_key"
    assert client.host == "example.test"
    assert client.requestTimeout == 3
    assert client.httpClient is None


def test_url_helpers():
    """Test endpoint URL and query string rendering."""
    url = apiUrl("open.mapquestapi.com", "geocoding", "v1", "address")

    assert url == "https://open.mapquestapi.com/geocoding/v1/address"
    rendered = httpx.URL(buildUrl(url, {"location": "Munich, DE", "key": "k"}))
    assert rendered.path == "/geocoding/v1/address"
    assert dict(rendered.params) == {"location": "Munich, DE", "key": "k"}


def test_mask_params():
    """Test the API key is masked for logging."""
    params = {"location": "Munich", "key": "secret"}

    assert maskParams(params) == {"location": "Munich", "key": "***MASKED***"}
    assert params["key"] == "secret"


@pytest.mark.parametrize("content", [b"", b"{not json", b"\xff\xfe"])
def test_decode_json_failures(content):
    """Test undecodable bodies raise DecodeError."""
    with pytest.raises(DecodeError):
        decodeJson(content)


@pytest.mark.asyncio
async def test_request_headers_and_key(clientFor):
    """Test every request carries the User-Agent header and the key param."""
    service = FakeService(content=b"{}")
    client = clientFor(service)

    await client.fetchJson(("geocoding", "v1", "address"), {"location": "Munich", "key": client.apiKey})

    request = service.requests[0]
    assert request.headers["User-Agent"] == USER_AGENT
    assert request.url.host == "open.mapquestapi.com"
    assert request.url.scheme == "https"
    assert request.url.params["key"] == "test_key"


@pytest.mark.asyncio
async def test_transport_error(clientFor):
    """Test connection failures surface as TransportError with the cause kept, dood!"""
    cause = httpx.ConnectError("connection refused")
    client = clientFor(FakeService(error=cause))

    with pytest.raises(TransportError) as excInfo:
        await client.geocoding().simpleAddress("Munich")

    assert excInfo.value.cause is cause
    assert excInfo.value.__cause__ is cause
    assert isinstance(excInfo.value, MapQuestError)


@pytest.mark.asyncio
async def test_timeout_is_transport_error(clientFor):
    """Test timeouts are classified as transport errors."""
    client = clientFor(FakeService(error=httpx.ReadTimeout("timed out")))

    with pytest.raises(TransportError):
        await client.nominatim().simpleSearch("Munich")


@pytest.mark.asyncio
@pytest.mark.parametrize("statusCode", [400, 403, 500, 503])
async def test_non_success_status(clientFor, statusCode):
    """Test non-2xx answers raise ApiStatusError and release the body."""
    service = FakeService(content=b"The AppKey submitted with this request is invalid.", statusCode=statusCode)
    client = clientFor(service)

    with pytest.raises(ApiStatusError) as excInfo:
        await client.geocoding().simpleAddress("Munich")

    assert excInfo.value.statusCode == statusCode
    assert excInfo.value.code == str(statusCode)
    assert excInfo.value.body == b"The AppKey submitted with this request is invalid."
    assert service.streams[0].closed


@pytest.mark.asyncio
async def test_per_call_session():
    """Test each call without injected client opens and closes its own session."""
    service = FakeService(content=b"[]")
    realAsyncClient = httpx.AsyncClient
    created = []

    def makeSession(**kwargs):
        session = realAsyncClient(transport=httpx.MockTransport(service), **kwargs)
        created.append((kwargs, session))
        return session

    client = MapQuestClient(apiKey="test_key", requestTimeout=7)

    with patch("httpx.AsyncClient", side_effect=makeSession):
        await client.nominatim().simpleSearch("Munich")
        await client.nominatim().simpleSearch("Berlin")

    assert len(created) == 2
    for kwargs, session in created:
        assert kwargs == {"timeout": 7}
        assert session.is_closed
    assert client.httpClient is None


@pytest.mark.asyncio
async def test_injected_session_stays_open(clientFor):
    """Test an injected HTTP client is reused and not closed by the client."""
    service = FakeService(content=b"[]")
    client = clientFor(service)

    await client.nominatim().simpleSearch("Munich")
    await client.nominatim().simpleSearch("Berlin")

    assert len(service.requests) == 2
    assert client.httpClient is not None
    assert not client.httpClient.is_closed


@pytest.mark.asyncio
async def test_injected_logger():
    """Test requests are logged through the injected logger with the key masked."""
    logger = MagicMock()
    service = FakeService(content=b"[]")
    client = MapQuestClient(
        apiKey="very_secret",
        httpClient=httpx.AsyncClient(transport=httpx.MockTransport(service)),
        logger=logger,
    )

    await client.nominatim().simpleSearch("Munich")

    messages = [str(call.args[0]) for call in logger.debug.call_args_list]
    assert any("***MASKED***" in message for message in messages)
    assert not any("very_secret" in message for message in messages)


@pytest.mark.asyncio
async def test_status_error_logged_as_warning():
    """Test failed statuses are reported through the logger."""
    logger = MagicMock()
    client = MapQuestClient(
        apiKey="test_key",
        httpClient=httpx.AsyncClient(transport=httpx.MockTransport(FakeService(statusCode=500))),
        logger=logger,
    )

    with pytest.raises(ApiStatusError):
        await client.geocoding().simpleAddress("Munich")

    logger.warning.assert_called_once()
