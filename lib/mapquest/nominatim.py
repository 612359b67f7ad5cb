"""
MapQuest Nominatim API

OpenStreetMap-backed place search and reverse lookup via /nominatim/v1.
"""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from .constants import KEY_PARAM, NOMINATIM_FORMAT_PARAM, NOMINATIM_PREFIX, NOMINATIM_VERSION, OUTPUT_FORMAT_JSON
from .encoders import Params, clampLimit, encodeFields
from .models import (
    NOMINATIM_ADDRESS_FIELDS,
    NominatimPlace,
    NominatimReverseRequest,
    NominatimSearchRequest,
    NominatimSearchResponse,
)

if TYPE_CHECKING:
    from .client import MapQuestClient

logger = logging.getLogger(__name__)


def _withAuth(params: Params, apiKey: str) -> Params:
    params[KEY_PARAM] = apiKey
    params[NOMINATIM_FORMAT_PARAM] = OUTPUT_FORMAT_JSON
    return params


def buildSearchParams(request: NominatimSearchRequest, apiKey: str) -> Params:
    """Build query params for /nominatim/v1/search.php, dood!

    A free-text ``query`` takes precedence: the structured address fields
    are cleared, so both addressing modes never end up in one request.
    """
    if request.query:
        cleared = {name: None for name in NOMINATIM_ADDRESS_FIELDS if getattr(request, name) is not None}
        if cleared:
            logger.debug(f"Free-text query set, dropping address fields: {sorted(cleared)}")
            request = replace(request, **cleared)

    if request.limit < 0:
        request = replace(request, limit=clampLimit(request.limit))

    return _withAuth(encodeFields(request, NominatimSearchRequest.FIELDS), apiKey)


def buildReverseParams(request: NominatimReverseRequest, apiKey: str) -> Params:
    """Build query params for /nominatim/v1/reverse.php."""
    return _withAuth(encodeFields(request, NominatimReverseRequest.FIELDS), apiKey)


class NominatimAPI:
    """Accessor for the MapQuest nominatim endpoints.

    Obtained via ``MapQuestClient.nominatim()``.
    """

    def __init__(self, client: "MapQuestClient") -> None:
        self.client = client

    async def simpleSearch(self, query: str, limit: int = 0) -> NominatimSearchResponse:
        """Search places by free-text query with at most ``limit`` results."""
        return await self.search(NominatimSearchRequest(query=query, limit=clampLimit(limit)))

    async def search(self, request: NominatimSearchRequest) -> NominatimSearchResponse:
        """Search places, dood!

        Args:
            request: Nominatim search request

        Returns:
            Search results in service order

        Raises:
            EncodingError: If the request cannot be encoded
            TransportError, ApiStatusError: If the HTTP call fails
            DecodeError: If the response body is malformed
        """
        params = buildSearchParams(request, self.client.apiKey)
        data = await self.client.fetchJson((NOMINATIM_PREFIX, NOMINATIM_VERSION, "search.php"), params)
        return NominatimSearchResponse.from_list(data)

    async def simpleReverse(self, lat: float, lon: float) -> NominatimPlace:
        """Look up the place nearest to a coordinate pair."""
        return await self.reverse(NominatimReverseRequest(lat=lat, lon=lon))

    async def reverse(self, request: NominatimReverseRequest) -> NominatimPlace:
        """Reverse lookup by coordinates (or OSM object).

        Raises:
            DecodeError: If the body is malformed or reports a service error
        """
        params = buildReverseParams(request, self.client.apiKey)
        data = await self.client.fetchJson((NOMINATIM_PREFIX, NOMINATIM_VERSION, "reverse.php"), params)
        return NominatimPlace.from_dict(data)
