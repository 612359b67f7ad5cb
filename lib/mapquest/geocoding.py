"""
MapQuest Geocoding API

Forward (address) and reverse geocoding via /geocoding/v1. Batch requests
and 5-point queries are not supported.
"""

from dataclasses import replace
from typing import TYPE_CHECKING

from .constants import GEOCODING_FORMAT_PARAM, GEOCODING_PREFIX, GEOCODING_VERSION, KEY_PARAM, OUTPUT_FORMAT_JSON
from .encoders import GeoPoint, Params, clampLimit, encodeFields
from .models import GeocodeAddressRequest, GeocodeAddressResponse, GeocodeReverseRequest

if TYPE_CHECKING:
    from .client import MapQuestClient


def _withAuth(params: Params, apiKey: str) -> Params:
    params[KEY_PARAM] = apiKey
    params[GEOCODING_FORMAT_PARAM] = OUTPUT_FORMAT_JSON
    return params


def buildAddressParams(request: GeocodeAddressRequest, apiKey: str) -> Params:
    """Build query params for /geocoding/v1/address, dood!

    Negative limits are clamped to 0, which leaves ``maxResults`` out and
    lets the service apply its default.
    """
    if request.limit < 0:
        request = replace(request, limit=clampLimit(request.limit))
    return _withAuth(encodeFields(request, GeocodeAddressRequest.FIELDS), apiKey)


def buildReverseParams(request: GeocodeReverseRequest, apiKey: str) -> Params:
    """Build query params for /geocoding/v1/reverse."""
    return _withAuth(encodeFields(request, GeocodeReverseRequest.FIELDS), apiKey)


class GeocodingAPI:
    """Accessor for the MapQuest geocoding endpoints.

    Obtained via ``MapQuestClient.geocoding()``.
    """

    def __init__(self, client: "MapQuestClient") -> None:
        self.client = client

    async def simpleAddress(self, location: str, limit: int = 0) -> GeocodeAddressResponse:
        """Geocode a free-text address with at most ``limit`` results."""
        return await self.address(GeocodeAddressRequest(location=location, limit=clampLimit(limit)))

    async def address(self, request: GeocodeAddressRequest) -> GeocodeAddressResponse:
        """Forward geocoding: convert address to coordinates, dood!

        Args:
            request: Geocode address request

        Returns:
            Decoded geocoding response

        Raises:
            InvalidInputError, EncodingError: If the request cannot be encoded
            TransportError, ApiStatusError: If the HTTP call fails
            DecodeError: If the response body is malformed
        """
        params = buildAddressParams(request, self.client.apiKey)
        data = await self.client.fetchJson((GEOCODING_PREFIX, GEOCODING_VERSION, "address"), params)
        response = GeocodeAddressResponse.from_dict(data)
        if response.info is not None and response.info.statuscode:
            self.client.logger.warning(
                f"Geocoding returned status {response.info.statuscode}: {response.info.messages}"
            )
        return response

    async def simpleReverse(self, lat: float, lng: float) -> GeocodeAddressResponse:
        """Reverse geocode a coordinate pair."""
        return await self.reverse(GeocodeReverseRequest(location=GeoPoint(lat=lat, lng=lng)))

    async def reverse(self, request: GeocodeReverseRequest) -> GeocodeAddressResponse:
        """Reverse geocoding: convert coordinates to address.

        The response has the same shape as the forward geocoding one.
        """
        params = buildReverseParams(request, self.client.apiKey)
        data = await self.client.fetchJson((GEOCODING_PREFIX, GEOCODING_VERSION, "reverse"), params)
        response = GeocodeAddressResponse.from_dict(data)
        if response.info is not None and response.info.statuscode:
            self.client.logger.warning(
                f"Reverse geocoding returned status {response.info.statuscode}: {response.info.messages}"
            )
        return response
