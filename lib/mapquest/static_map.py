"""
MapQuest Static Map API

Pre-rendered map images via /staticmap/v5/map. The service answers with a
raw PNG, GIF or JPEG body which is decoded with Pillow.
"""

import io
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

import httpx
from PIL import Image, UnidentifiedImageError

from .constants import IMAGE_FORMATS, KEY_PARAM, STATIC_MAP_PREFIX, STATIC_MAP_VERSION
from .encoders import Params, encodeFields
from .exceptions import ImageCodecError
from .models import StaticMapRequest

if TYPE_CHECKING:
    from .client import MapQuestClient

logger = logging.getLogger(__name__)

STATIC_MAP_PATH = (STATIC_MAP_PREFIX, STATIC_MAP_VERSION, "map")


def buildMapParams(request: StaticMapRequest, apiKey: str) -> Params:
    """Build query params for /staticmap/v5/map.

    Raises:
        DimensionTooLargeError: If the requested size exceeds 1920 pixels
    """
    params = encodeFields(request, StaticMapRequest.FIELDS)
    params[KEY_PARAM] = apiKey
    return params


def decodeImage(data: bytes) -> Image.Image:
    """Decode a PNG, GIF or JPEG bitmap, dood!

    The image is fully loaded, so corrupt pixel data fails here and not on
    first use.

    Raises:
        ImageCodecError: If the data is not a supported or intact image
    """
    try:
        image = Image.open(io.BytesIO(data), formats=list(IMAGE_FORMATS))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        logger.debug(f"Failed to decode map image ({len(data)} bytes): {e}")
        raise ImageCodecError(f"Failed to decode map image: {e}") from e
    return image


class StaticMapAPI:
    """Accessor for the MapQuest static map endpoint.

    Obtained via ``MapQuestClient.staticMap()``.
    """

    def __init__(self, client: "MapQuestClient") -> None:
        self.client = client

    async def map(self, request: StaticMapRequest) -> Image.Image:
        """Fetch and decode a static map image.

        Args:
            request: Static map request

        Returns:
            Decoded bitmap

        Raises:
            InvalidInputError, EncodingError: If the request cannot be encoded
            TransportError, ApiStatusError: If the HTTP call fails
            ImageCodecError: If the returned bitmap cannot be decoded
        """
        return decodeImage(await self.mapBytes(request))

    async def mapBytes(self, request: StaticMapRequest) -> bytes:
        """Fetch the raw image body of a static map."""
        params = buildMapParams(request, self.client.apiKey)
        return await self.client.fetch(STATIC_MAP_PATH, params)

    @asynccontextmanager
    async def mapReader(self, request: StaticMapRequest) -> AsyncIterator[httpx.Response]:
        """Open a static map as streaming response, dood!

        The body is released when the context exits.

        Example:
            >>> async with client.staticMap().mapReader(request) as response:
            ...     async for chunk in response.aiter_bytes():
            ...         out.write(chunk)
        """
        params = buildMapParams(request, self.client.apiKey)
        async with self.client.openStream(STATIC_MAP_PATH, params) as response:
            yield response
