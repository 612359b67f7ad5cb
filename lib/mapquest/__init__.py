"""
MapQuest Open Data API Client Library

This module provides a Python async client library for the MapQuest Open Data
API (open.mapquestapi.com): geocoding, nominatim place search and static map
images, with typed requests and responses.

Example usage:
    from lib.mapquest import MapQuestClient, StaticMapRequest, Size

    client = MapQuestClient(apiKey="your_api_key")

    # Forward geocoding
    response = await client.geocoding().simpleAddress("Munich, Germany", 5)

    # Nominatim search
    places = await client.nominatim().simpleSearch("Marienplatz", 3)

    # Static map
    image = await client.staticMap().map(
        StaticMapRequest(center="48.151313,11.54165", zoom=9, size=Size(500, 300))
    )
"""

from lib.mapquest.client import MapQuestClient, buildUrl
from lib.mapquest.config import MapQuestConfig, loadConfig
from lib.mapquest.encoders import (
    Banner,
    BannerSize,
    BoundingBox,
    Color,
    GeoPoint,
    Location,
    Scalebar,
    Size,
    ViewBox,
)
from lib.mapquest.exceptions import (
    ApiStatusError,
    ConfigurationError,
    DecodeError,
    DimensionTooLargeError,
    EncodingError,
    ImageCodecError,
    InvalidInputError,
    MapQuestError,
    TransportError,
)
from lib.mapquest.geocoding import GeocodingAPI
from lib.mapquest.models import (
    GeocodeAddressRequest,
    GeocodeAddressResponse,
    GeocodeLocation,
    GeocodeResult,
    GeocodeReverseRequest,
    GeocodeType,
    NominatimAddress,
    NominatimPlace,
    NominatimReverseRequest,
    NominatimSearchRequest,
    NominatimSearchResponse,
    OSMType,
    StaticMapFormat,
    StaticMapRequest,
    StaticMapType,
)
from lib.mapquest.nominatim import NominatimAPI
from lib.mapquest.static_map import StaticMapAPI

__all__ = [
    "MapQuestClient",
    "MapQuestConfig",
    "loadConfig",
    "buildUrl",
    "GeocodingAPI",
    "NominatimAPI",
    "StaticMapAPI",
    "GeoPoint",
    "BoundingBox",
    "ViewBox",
    "Size",
    "Location",
    "Color",
    "Banner",
    "BannerSize",
    "Scalebar",
    "GeocodeAddressRequest",
    "GeocodeReverseRequest",
    "GeocodeAddressResponse",
    "GeocodeResult",
    "GeocodeLocation",
    "GeocodeType",
    "NominatimSearchRequest",
    "NominatimReverseRequest",
    "NominatimSearchResponse",
    "NominatimPlace",
    "NominatimAddress",
    "OSMType",
    "StaticMapRequest",
    "StaticMapFormat",
    "StaticMapType",
    "MapQuestError",
    "InvalidInputError",
    "DimensionTooLargeError",
    "EncodingError",
    "TransportError",
    "ApiStatusError",
    "DecodeError",
    "ImageCodecError",
    "ConfigurationError",
]
