"""
MapQuest API Async Client

This module provides the MapQuestClient class: it holds the API key, the
injected HTTP client and the logger, performs the single GET round trip of
every API call and hands out the per-endpoint accessor objects.
"""

import json
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from .config import MapQuestConfig
from .constants import API_HOST, API_SCHEME, DEFAULT_TIMEOUT, KEY_PARAM, USER_AGENT
from .encoders import Params
from .exceptions import ApiStatusError, ConfigurationError, DecodeError, TransportError
from .geocoding import GeocodingAPI
from .nominatim import NominatimAPI
from .static_map import StaticMapAPI

logger = logging.getLogger(__name__)


def apiUrl(host: str, *path: str) -> str:
    """Build an endpoint URL, e.g. ``apiUrl(host, "geocoding", "v1", "address")``."""
    return f"{API_SCHEME}://{host}/" + "/".join(path)


def buildUrl(url: str, params: Params) -> str:
    """Render the complete request URL including the query string."""
    return str(httpx.URL(url, params=params))


def maskParams(params: Params) -> Dict[str, str]:
    """Copy params with the API key masked, for logging."""
    return {k: ("***MASKED***" if k == KEY_PARAM else v) for k, v in params.items()}


def decodeJson(content: bytes) -> Any:
    """Parse a JSON response body.

    Raises:
        DecodeError: If the body is not valid UTF-8 JSON
    """
    try:
        return json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"Failed to parse JSON response: {e}")
        raise DecodeError(f"Failed to parse JSON response: {e}", response=content[:256]) from e


class MapQuestClient:
    """Async client for the MapQuest Open Data API, dood!

    The HTTP client is injected at construction and never replaced
    afterwards. Without one, every call opens (and closes) its own
    ``httpx.AsyncClient`` with ``requestTimeout``.

    Example:
        >>> from lib.mapquest import MapQuestClient, StaticMapRequest, Size
        >>>
        >>> client = MapQuestClient(apiKey="your_api_key")
        >>>
        >>> # Forward geocoding
        >>> response = await client.geocoding().simpleAddress("Munich, Germany", 5)
        >>>
        >>> # Static map
        >>> image = await client.staticMap().map(
        ...     StaticMapRequest(center="48.151313,11.54165", zoom=9, size=Size(500, 300))
        ... )

    Attributes:
        apiKey: MapQuest API key, sent as ``key`` query parameter on every call
        httpClient: Injected httpx.AsyncClient or None
        logger: Logger for request/response debugging
        host: API host (default: open.mapquestapi.com)
        requestTimeout: Timeout for per-call sessions in seconds (default: 10)
    """

    def __init__(
        self,
        apiKey: str,
        httpClient: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        host: str = API_HOST,
        requestTimeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize MapQuest client.

        Args:
            apiKey: MapQuest API key (required)
            httpClient: HTTP client to send requests through (default: per-call session)
            logger: Logger to use (default: module logger)
            host: API host (default: open.mapquestapi.com)
            requestTimeout: HTTP timeout in seconds for per-call sessions (default: 10)

        Raises:
            ConfigurationError: If apiKey is empty
        """
        if not apiKey or not apiKey.strip():
            raise ConfigurationError("API key cannot be empty")

        self.apiKey = apiKey.strip()
        self.httpClient = httpClient
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.host = host
        self.requestTimeout = requestTimeout

    @classmethod
    def fromConfig(
        cls,
        config: MapQuestConfig,
        httpClient: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "MapQuestClient":
        """Create client from loaded configuration."""
        return cls(
            apiKey=config.apiKey,
            httpClient=httpClient,
            logger=logger,
            host=config.host,
            requestTimeout=config.requestTimeout,
        )

    def geocoding(self) -> GeocodingAPI:
        """Access the geocoding API (/geocoding/v1)."""
        return GeocodingAPI(self)

    def nominatim(self) -> NominatimAPI:
        """Access the nominatim search API (/nominatim/v1)."""
        return NominatimAPI(self)

    def staticMap(self) -> StaticMapAPI:
        """Access the static map API (/staticmap/v5)."""
        return StaticMapAPI(self)

    @asynccontextmanager
    async def openStream(self, path: tuple[str, ...], params: Params) -> AsyncIterator[httpx.Response]:
        """Send a GET request and yield the streaming response, dood!

        The response body is released when the context exits, whatever the
        exit path.

        Args:
            path: Endpoint path segments (e.g. ("staticmap", "v5", "map"))
            params: Fully built query parameters (including the key)

        Yields:
            httpx.Response with an unread body

        Raises:
            TransportError: On connection errors, timeouts and other transport failures
            ApiStatusError: If the service answers with a non-2xx status
        """
        url = apiUrl(self.host, *path)
        headers = {"User-Agent": USER_AGENT}

        self.logger.debug(f"Making request to {url} with params: {maskParams(params)}")

        try:
            async with AsyncExitStack() as stack:
                session = self.httpClient
                if session is None:
                    session = await stack.enter_async_context(httpx.AsyncClient(timeout=self.requestTimeout))

                response = await stack.enter_async_context(
                    session.stream("GET", url, params=params, headers=headers)
                )
                self.logger.debug(f"API response status: {response.status_code}")

                if not response.is_success:
                    body = await response.aread()
                    self.logger.warning(f"API request to {url} failed: {response.status_code}")
                    raise ApiStatusError(response.status_code, body)

                yield response

        except httpx.RequestError as e:
            self.logger.error(f"Network error during request to {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e}", cause=e) from e

    async def fetch(self, path: tuple[str, ...], params: Params) -> bytes:
        """Send a GET request and return the whole response body."""
        async with self.openStream(path, params) as response:
            return await response.aread()

    async def fetchJson(self, path: tuple[str, ...], params: Params) -> Any:
        """Send a GET request and parse the response body as JSON."""
        return decodeJson(await self.fetch(path, params))
