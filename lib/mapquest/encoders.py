"""
MapQuest Query Value Encoders

This module renders typed request values into the query-string mini-grammars
the MapQuest API expects: coordinate pairs, bounding boxes, map sizes,
marker lists, colors, banners and scalebars.

Each request model declares its parameters explicitly as a tuple of
``QueryField`` entries, binding an attribute to a query key and an encode
function. ``encodeFields`` walks that tuple and fills a params dict:

    >>> fields = (QueryField("center", "center", encodeValue),)
    >>> encodeFields(request, fields)
    {'center': '48.151313,11.541650'}

Encode functions share the signature ``(key, value, params) -> None`` and
write at most one entry into ``params``.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable, Dict, Optional, Tuple

from .constants import MAX_MAP_DIMENSION
from .exceptions import DimensionTooLargeError, EncodingError, InvalidInputError

Params = Dict[str, str]
Encoder = Callable[[str, Any, Params], None]

DEFAULT_BANNER_TEXT_COLOR = "ffffff"


def formatCoordinate(value: float) -> str:
    """Format a coordinate with exactly six decimal places, dood!

    Raises:
        EncodingError: If value is not a finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EncodingError(f"Coordinate must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise EncodingError(f"Coordinate must be finite, got {value}")
    return f"{value:.6f}"


def formatHexColor(color: int) -> str:
    """Format a packed 0xRRGGBB integer as six lowercase hex digits."""
    if isinstance(color, bool) or not isinstance(color, int):
        raise EncodingError(f"Color must be an integer, got {type(color).__name__}")
    if color < 0 or color > 0xFFFFFF:
        raise InvalidInputError(f"Color 0x{color:x} is out of range 0x000000..0xffffff")
    return f"{color:06x}"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def encode(self) -> str:
        return f"{formatCoordinate(self.lat)},{formatCoordinate(self.lng)}"

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def parse(cls, text: str) -> "GeoPoint":
        """Parse a ``"lat,lng"`` string back into a GeoPoint."""
        parts = text.split(",")
        if len(parts) != 2:
            raise InvalidInputError(f"Expected 'lat,lng', got {text!r}")
        try:
            return cls(lat=float(parts[0]), lng=float(parts[1]))
        except ValueError as e:
            raise InvalidInputError(f"Invalid coordinate pair {text!r}: {e}") from e


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Rectangle given by its top-left and bottom-right corners."""

    topLeft: GeoPoint
    bottomRight: GeoPoint

    def encode(self) -> str:
        return f"{self.topLeft.encode()},{self.bottomRight.encode()}"


@dataclass(frozen=True, slots=True)
class ViewBox:
    """Nominatim viewbox, encoded as ``left,top,right,bottom``."""

    left: float
    top: float
    right: float
    bottom: float

    def encode(self) -> str:
        return ",".join(formatCoordinate(v) for v in (self.left, self.top, self.right, self.bottom))


@dataclass(frozen=True, slots=True)
class Size:
    """Static map size in pixels, dood!

    Width and height are limited to 1920 each. Zero (unset) dimensions
    render as an empty size, ``retina`` appends ``@2``.
    """

    width: int = 0
    height: int = 0
    retina: bool = False

    def encode(self) -> str:
        if self.width > MAX_MAP_DIMENSION:
            raise DimensionTooLargeError(f"Map width {self.width} exceeds {MAX_MAP_DIMENSION}")
        if self.height > MAX_MAP_DIMENSION:
            raise DimensionTooLargeError(f"Map height {self.height} exceeds {MAX_MAP_DIMENSION}")

        size = ""
        if self.width > 0 and self.height > 0:
            size = f"{self.width},{self.height}"
        if self.retina:
            size += "@2"
        return size


@dataclass(frozen=True, slots=True)
class Location:
    """Free-text location with an optional marker descriptor."""

    location: str
    marker: Optional[str] = None

    def encode(self) -> str:
        if self.marker:
            return f"{self.location}|{self.marker}"
        return self.location


@dataclass(frozen=True, slots=True)
class Color:
    """RGBA color, each channel 0-255. Alpha 0 means "not set"."""

    r: int
    g: int
    b: int
    a: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            channel = getattr(self, name)
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise InvalidInputError(f"Color channel {name} must be an integer")
            if channel < 0 or channel > 255:
                raise InvalidInputError(f"Color channel {name}={channel} is out of range 0..255")

    @classmethod
    def fromHex(cls, value: int) -> "Color":
        """Build a color from a packed 0xRRGGBB integer."""
        return cls(r=(value >> 16) & 0xFF, g=(value >> 8) & 0xFF, b=value & 0xFF)

    @classmethod
    def fromHexAlpha(cls, value: int) -> "Color":
        """Build a color from a packed 0xRRGGBBAA integer."""
        rgb = cls.fromHex((value >> 8) & 0xFFFFFF)
        return cls(r=rgb.r, g=rgb.g, b=rgb.b, a=value & 0xFF)

    def encode(self) -> str:
        if self.a == 0:
            return f"{self.r},{self.g},{self.b}"
        return f"{self.r},{self.g},{self.b},{self.a}"


class BannerSize(StrEnum):
    """Banner text size"""

    SMALL = "sm"
    MEDIUM = "md"
    LARGE = "lg"


@dataclass(frozen=True, slots=True)
class Banner:
    """Text banner drawn on a static map, dood!

    Renders as ``text|mod-mod-...``. Modifiers come in a fixed order: size,
    ``top`` (bottom is the unmarked default), text color, background color.
    Colors are packed 0xRRGGBB integers, zero or None meaning "not set".
    A background color without a text color gets a white text color first,
    since the service reads the colors positionally.
    """

    text: str
    size: Optional[BannerSize] = None
    onTop: bool = False
    textColor: Optional[int] = None
    backgroundColor: Optional[int] = None

    def encode(self) -> str:
        modifiers = []

        if self.size:
            modifiers.append(str(self.size))

        if self.onTop:
            modifiers.append("top")

        if self.textColor:
            modifiers.append(formatHexColor(self.textColor))

        if self.backgroundColor:
            if not self.textColor:
                modifiers.append(DEFAULT_BANNER_TEXT_COLOR)
            modifiers.append(formatHexColor(self.backgroundColor))

        if not modifiers:
            return self.text
        return f"{self.text}|{'-'.join(modifiers)}"


@dataclass(frozen=True, slots=True)
class Scalebar:
    """Scalebar toggle with an optional position."""

    enable: bool
    position: Optional[str] = None

    def encode(self) -> str:
        if not self.enable:
            return "false"
        if self.position:
            return f"true|{self.position}"
        return "true"


def encodeString(key: str, value: Any, params: Params) -> None:
    if not isinstance(value, str):
        raise EncodingError(f"Parameter {key} expects a string, got {type(value).__name__}")
    params[key] = str(value)


def encodeInt(key: str, value: Any, params: Params) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"Parameter {key} expects an integer, got {type(value).__name__}")
    params[key] = str(value)


def encodeFloat(key: str, value: Any, params: Params) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise EncodingError(f"Parameter {key} expects a finite number, got {value!r}")
    params[key] = str(value)


def encodeCoordinate(key: str, value: Any, params: Params) -> None:
    params[key] = formatCoordinate(value)


def encodePoint(key: str, value: Any, params: Params) -> None:
    """Encode a free-text location as-is, or a GeoPoint as ``lat,lng``."""
    if isinstance(value, str):
        params[key] = value
    elif isinstance(value, GeoPoint):
        params[key] = value.encode()
    else:
        raise EncodingError(f"Parameter {key} expects a string or GeoPoint, got {type(value).__name__}")


def encodeBool(key: str, value: Any, params: Params) -> None:
    """Encode a boolean as ``true``/``false`` (MapQuest grammar)."""
    if not isinstance(value, bool):
        raise EncodingError(f"Parameter {key} expects a boolean, got {type(value).__name__}")
    params[key] = "true" if value else "false"


def encodeFlag(key: str, value: Any, params: Params) -> None:
    """Encode a boolean as ``1``/``0`` (nominatim grammar)."""
    if not isinstance(value, bool):
        raise EncodingError(f"Parameter {key} expects a boolean, got {type(value).__name__}")
    params[key] = "1" if value else "0"


def encodeCommaList(key: str, value: Any, params: Params) -> None:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise EncodingError(f"Parameter {key} expects a list of strings")
    params[key] = ",".join(str(item) for item in value)


def encodeValue(key: str, value: Any, params: Params) -> None:
    """Encode any value type exposing ``encode()`` (GeoPoint, Size, Banner, ...)."""
    encode = getattr(value, "encode", None)
    if encode is None or isinstance(value, (str, bytes)):
        raise EncodingError(f"Parameter {key} got a value without an encoder: {type(value).__name__}")
    params[key] = encode()


def encodeLocations(key: str, value: Any, params: Params) -> None:
    """Encode a location list, joining entries with ``||``.

    An empty list still sets the key (to an empty string), which clears a
    previously set list on the service side.
    """
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise EncodingError(f"Parameter {key} expects a list of locations")
    parts = []
    for location in value:
        if not isinstance(location, Location):
            raise EncodingError(f"Parameter {key} expects Location entries, got {type(location).__name__}")
        parts.append(location.encode())
    params[key] = "||".join(parts)


@dataclass(frozen=True, slots=True)
class QueryField:
    """Binding of a request attribute to a query key and its encoder.

    ``omitEmpty`` drops empty values ("", 0, False, empty lists). Fields with
    ``omitEmpty=False`` are sent whenever the attribute is not None.
    """

    attr: str
    key: str
    encoder: Encoder
    omitEmpty: bool = True


def isEmpty(value: Any) -> bool:
    if isinstance(value, (str, bytes, list, tuple)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return value == 0
    return False


def encodeFields(request: Any, fields: Tuple[QueryField, ...]) -> Params:
    """Encode every registered field of a request into a params dict."""
    params: Params = {}
    for field in fields:
        value = getattr(request, field.attr)
        if value is None:
            continue
        if field.omitEmpty and isEmpty(value):
            continue
        field.encoder(field.key, value, params)
    return params


def clampLimit(limit: int) -> int:
    """Clamp negative result limits to 0 ("service default")."""
    return limit if limit > 0 else 0
