"""
MapQuest API Constants

This module contains constants shared by the MapQuest Open Data API client.
"""

from typing import Final

VERSION: Final[str] = "0.1"

# API Configuration
API_HOST: Final[str] = "open.mapquestapi.com"
API_SCHEME: Final[str] = "https"
USER_AGENT: Final[str] = f"MapQuest Open Data API Python Client v{VERSION}"
DEFAULT_TIMEOUT: Final[int] = 10

# Endpoint prefixes and versions
GEOCODING_PREFIX: Final[str] = "geocoding"
GEOCODING_VERSION: Final[str] = "v1"
NOMINATIM_PREFIX: Final[str] = "nominatim"
NOMINATIM_VERSION: Final[str] = "v1"
STATIC_MAP_PREFIX: Final[str] = "staticmap"
STATIC_MAP_VERSION: Final[str] = "v5"

# Query parameters injected on every call
KEY_PARAM: Final[str] = "key"
GEOCODING_FORMAT_PARAM: Final[str] = "outFormat"
NOMINATIM_FORMAT_PARAM: Final[str] = "format"
OUTPUT_FORMAT_JSON: Final[str] = "json"

# Static map limits
MAX_MAP_DIMENSION: Final[int] = 1920

# Pillow format names accepted from the static map endpoint
IMAGE_FORMATS: Final[tuple[str, ...]] = ("PNG", "GIF", "JPEG")
