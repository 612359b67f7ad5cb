"""
MapQuest API Data Models

This module defines the request models (with their explicit query field
registries) and the response models of the MapQuest Open Data API.

Response models are slotted dataclasses built through ``from_dict``. Fields
missing from the payload stay None, so "absent" never collapses into a zero
value. Keys without a typed counterpart are kept in ``api_kwargs``.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

from .encoders import (
    Banner,
    BoundingBox,
    Color,
    GeoPoint,
    Location,
    QueryField,
    Scalebar,
    Size,
    ViewBox,
    encodeBool,
    encodeCommaList,
    encodeCoordinate,
    encodeFlag,
    encodeFloat,
    encodeInt,
    encodeLocations,
    encodePoint,
    encodeString,
    encodeValue,
)
from .exceptions import DecodeError

logger = logging.getLogger(__name__)


class StaticMapFormat(StrEnum):
    """Image format of a static map"""

    PNG = "png"
    GIF = "gif"
    JPEG = "jpeg"
    JPG = "jpg"
    JPG70 = "jpg70"
    JPG80 = "jpg80"
    JPG90 = "jpg90"


class StaticMapType(StrEnum):
    """Map style of a static map"""

    DARK = "dark"
    LIGHT = "light"
    MAP = "map"
    HYBRID = "hyb"
    SATELLITE = "sat"


class OSMType(StrEnum):
    """OSM object type used by nominatim"""

    NODE = "N"
    WAY = "W"
    RELATION = "R"


class GeocodeType(StrEnum):
    """Location type in geocoding results"""

    STOP = "s"
    VIA = "v"


# ============================================================================
# Requests
# ============================================================================


@dataclass(frozen=True, slots=True)
class GeocodeAddressRequest:
    """Forward geocoding request for /geocoding/v1/address, dood!

    ``thumbMaps`` is always sent: the service defaults it to true, so an
    explicit False has to reach the wire.
    """

    location: str = ""
    boundingBox: Optional[BoundingBox] = None
    ignoreLatLngInput: bool = False
    thumbMaps: bool = True
    limit: int = 0

    FIELDS: ClassVar[Tuple[QueryField, ...]] = (
        QueryField("location", "location", encodeString, omitEmpty=False),
        QueryField("boundingBox", "boundingBox", encodeValue),
        QueryField("ignoreLatLngInput", "ignoreLatLngInput", encodeBool),
        QueryField("thumbMaps", "thumbMaps", encodeBool, omitEmpty=False),
        QueryField("limit", "maxResults", encodeInt),
    )


@dataclass(frozen=True, slots=True)
class GeocodeReverseRequest:
    """Reverse geocoding request for /geocoding/v1/reverse"""

    location: Optional[GeoPoint] = None
    thumbMaps: bool = True
    includeNearestIntersection: bool = False
    includeRoadMetadata: bool = False

    FIELDS: ClassVar[Tuple[QueryField, ...]] = (
        QueryField("location", "location", encodeValue),
        QueryField("thumbMaps", "thumbMaps", encodeBool, omitEmpty=False),
        QueryField("includeNearestIntersection", "includeNearestIntersection", encodeBool),
        QueryField("includeRoadMetadata", "includeRoadMetadata", encodeBool),
    )


# Structured address fields, never mixed with a free-text query
NOMINATIM_ADDRESS_FIELDS: Tuple[str, ...] = ("street", "city", "county", "state", "country", "postalcode")


@dataclass(frozen=True, slots=True)
class NominatimSearchRequest:
    """Nominatim search request, either free-text ``query`` or structured address.

    When ``query`` is set, the structured address fields are dropped before
    encoding.
    """

    query: str = ""
    street: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postalcode: Optional[str] = None
    addressDetails: bool = False
    limit: int = 0
    countryCodes: Optional[Sequence[str]] = None
    viewBox: Optional[ViewBox] = None
    excludePlaceIds: Optional[Sequence[str]] = None
    bounded: bool = False
    routeWidth: Optional[float] = None
    osmType: Optional[OSMType] = None
    osmId: Optional[str] = None

    FIELDS: ClassVar[Tuple[QueryField, ...]] = (
        QueryField("query", "q", encodeString),
        QueryField("street", "street", encodeString),
        QueryField("city", "city", encodeString),
        QueryField("county", "county", encodeString),
        QueryField("state", "state", encodeString),
        QueryField("country", "country", encodeString),
        QueryField("postalcode", "postalcode", encodeString),
        QueryField("addressDetails", "addressdetails", encodeFlag),
        QueryField("limit", "limit", encodeInt),
        QueryField("countryCodes", "countrycodes", encodeCommaList),
        QueryField("viewBox", "viewbox", encodeValue),
        QueryField("excludePlaceIds", "exclude_place_ids", encodeCommaList),
        QueryField("bounded", "bounded", encodeFlag),
        QueryField("routeWidth", "routewidth", encodeFloat),
        QueryField("osmType", "osm_type", encodeString),
        QueryField("osmId", "osm_id", encodeString),
    )


@dataclass(frozen=True, slots=True)
class NominatimReverseRequest:
    """Nominatim reverse lookup by coordinates or by OSM object"""

    lat: float
    lon: float
    osmType: Optional[OSMType] = None
    osmId: Optional[str] = None

    FIELDS: ClassVar[Tuple[QueryField, ...]] = (
        QueryField("lat", "lat", encodeCoordinate, omitEmpty=False),
        QueryField("lon", "lon", encodeCoordinate, omitEmpty=False),
        QueryField("osmType", "osm_type", encodeString),
        QueryField("osmId", "osm_id", encodeString),
    )


@dataclass(frozen=True, slots=True)
class StaticMapRequest:
    """Static map request for /staticmap/v5/map, dood!

    ``locations=None`` omits the parameter, ``locations=[]`` sends it empty.
    ``center`` takes either a GeoPoint or a free-text location.
    """

    size: Optional[Size] = None
    center: Optional[Union[str, GeoPoint]] = None
    boundingBox: Optional[BoundingBox] = None
    margin: int = 0
    zoom: int = 0
    format: Optional[StaticMapFormat] = None
    type: Optional[StaticMapType] = None
    scalebar: Optional[Scalebar] = None

    # additional location options
    locations: Optional[Sequence[Location]] = None
    declutter: bool = False
    defaultMarker: Optional[str] = None

    banner: Optional[Banner] = None

    # routes
    start: Optional[Location] = None
    end: Optional[Location] = None
    routeArc: bool = False
    routeWidth: int = 0
    routeColor: Optional[Color] = None

    FIELDS: ClassVar[Tuple[QueryField, ...]] = (
        QueryField("size", "size", encodeValue, omitEmpty=False),
        QueryField("center", "center", encodePoint),
        QueryField("boundingBox", "boundingBox", encodeValue),
        QueryField("margin", "margin", encodeInt),
        QueryField("zoom", "zoom", encodeInt),
        QueryField("format", "format", encodeString),
        QueryField("type", "type", encodeString),
        QueryField("scalebar", "scalebar", encodeValue),
        QueryField("locations", "locations", encodeLocations, omitEmpty=False),
        QueryField("declutter", "declutter", encodeBool),
        QueryField("defaultMarker", "defaultMarker", encodeString),
        QueryField("banner", "banner", encodeValue),
        QueryField("start", "start", encodeValue),
        QueryField("end", "end", encodeValue),
        QueryField("routeArc", "routeArc", encodeBool),
        QueryField("routeWidth", "routeWidth", encodeInt),
        QueryField("routeColor", "routeColor", encodeValue),
    )


# ============================================================================
# Decoding helpers
# ============================================================================


def _expectDict(data: Any, name: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected JSON object for {name}, got {type(data).__name__}")
    return data


def _expectList(data: Any, name: str) -> List[Any]:
    if not isinstance(data, list):
        raise DecodeError(f"Expected JSON array for {name}, got {type(data).__name__}")
    return data


def _toFloat(value: Any, name: str) -> float:
    """Convert a JSON number, or a number sent as a string, to float."""
    if isinstance(value, bool):
        raise DecodeError(f"Expected number for {name}, got boolean")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as e:
            raise DecodeError(f"Invalid numeric string for {name}: {value!r}") from e
    raise DecodeError(f"Expected number for {name}, got {type(value).__name__}")


def _optFloat(data: Dict[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    return _toFloat(value, key)


def _optInt(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise DecodeError(f"Expected integer for {key}, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as e:
        raise DecodeError(f"Invalid integer string for {key}: {value!r}") from e


def _optBool(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise DecodeError(f"Expected boolean for {key}, got {type(value).__name__}")
    return value


def _optStr(data: Dict[str, Any], key: str) -> Optional[str]:
    """Get string field. Numbers are accepted as well (ids come both ways)."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise DecodeError(f"Expected string for {key}, got {type(value).__name__}")
    return str(value)


def _optGeoPoint(data: Dict[str, Any], key: str) -> Optional[GeoPoint]:
    value = data.get(key)
    if value is None:
        return None
    point = _expectDict(value, key)
    if "lat" not in point or "lng" not in point:
        raise DecodeError(f"Incomplete coordinates in {key}: {point!r}")
    return GeoPoint(lat=_toFloat(point["lat"], f"{key}.lat"), lng=_toFloat(point["lng"], f"{key}.lng"))


def _optStrList(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    return [str(item) for item in _expectList(value, key)]


def _extraKwargs(data: Dict[str, Any], known: FrozenSet[str]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


# ============================================================================
# Geocoding responses
# ============================================================================


@dataclass(slots=True)
class Copyright:
    """Copyright notice attached to geocoding responses"""

    text: Optional[str] = None
    imageUrl: Optional[str] = None
    imageAltText: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Copyright":
        data = _expectDict(data, "copyright")
        return cls(
            text=_optStr(data, "text"),
            imageUrl=_optStr(data, "imageUrl"),
            imageAltText=_optStr(data, "imageAltText"),
        )


@dataclass(slots=True)
class GeocodeInfo:
    """Response info block. ``statuscode`` 0 means success, None means absent."""

    statuscode: Optional[int] = None
    copyright: Optional[Copyright] = None
    messages: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeocodeInfo":
        data = _expectDict(data, "info")
        return cls(
            statuscode=_optInt(data, "statuscode"),
            copyright=Copyright.from_dict(data["copyright"]) if data.get("copyright") is not None else None,
            messages=_optStrList(data, "messages"),
        )


@dataclass(slots=True)
class GeocodeOptions:
    """Options echoed back by the geocoding service"""

    maxResults: Optional[int] = None
    thumbMaps: Optional[bool] = None
    ignoreLatLngInput: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeocodeOptions":
        data = _expectDict(data, "options")
        return cls(
            maxResults=_optInt(data, "maxResults"),
            thumbMaps=_optBool(data, "thumbMaps"),
            ignoreLatLngInput=_optBool(data, "ignoreLatLngInput"),
        )


@dataclass(slots=True)
class ProvidedLocation:
    """The location as it was sent to the service"""

    location: Optional[str] = None
    latLng: Optional[GeoPoint] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProvidedLocation":
        data = _expectDict(data, "providedLocation")
        return cls(location=_optStr(data, "location"), latLng=_optGeoPoint(data, "latLng"))


@dataclass(slots=True)
class RoadMetadata:
    """Road metadata. ``TollRoad`` has no documented type and is kept raw."""

    speedLimitUnits: Optional[str] = None
    tollRoad: Optional[List[Any]] = None
    speedLimit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoadMetadata":
        data = _expectDict(data, "roadMetadata")
        tollRoad = data.get("TollRoad")
        return cls(
            speedLimitUnits=_optStr(data, "speedLimitUnits"),
            tollRoad=list(_expectList(tollRoad, "TollRoad")) if tollRoad is not None else None,
            speedLimit=_optInt(data, "speedLimit"),
        )


@dataclass(slots=True)
class NearestIntersection:
    """Nearest intersection to a reverse-geocoded point"""

    streetDisplayName: Optional[str] = None
    distanceMeters: Optional[str] = None
    latLng: Optional[GeoPoint] = None
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NearestIntersection":
        data = _expectDict(data, "nearestIntersection")
        return cls(
            streetDisplayName=_optStr(data, "streetDisplayName"),
            distanceMeters=_optStr(data, "distanceMeters"),
            latLng=_optGeoPoint(data, "latLng"),
            label=_optStr(data, "label"),
        )


@dataclass(slots=True)
class GeocodeLocation:
    """Single geocoded location, dood!

    adminArea1..6 go from country down to neighborhood, each with its
    ``*Type`` label. See the MapQuest quality code docs for ``geocodeQualityCode``.
    """

    latLng: Optional[GeoPoint] = None
    displayLatLng: Optional[GeoPoint] = None
    mapUrl: Optional[str] = None
    street: Optional[str] = None
    postalCode: Optional[str] = None
    type: Optional[Union[GeocodeType, str]] = None
    adminArea6: Optional[str] = None
    adminArea6Type: Optional[str] = None
    adminArea5: Optional[str] = None
    adminArea5Type: Optional[str] = None
    adminArea4: Optional[str] = None
    adminArea4Type: Optional[str] = None
    adminArea3: Optional[str] = None
    adminArea3Type: Optional[str] = None
    adminArea2: Optional[str] = None
    adminArea2Type: Optional[str] = None
    adminArea1: Optional[str] = None
    adminArea1Type: Optional[str] = None
    geocodeQuality: Optional[str] = None
    geocodeQualityCode: Optional[str] = None
    unknownInput: Optional[str] = None
    roadMetadata: Optional[RoadMetadata] = None
    nearestIntersection: Optional[NearestIntersection] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    _STR_FIELDS: ClassVar[Tuple[str, ...]] = (
        "mapUrl",
        "street",
        "postalCode",
        "adminArea6",
        "adminArea6Type",
        "adminArea5",
        "adminArea5Type",
        "adminArea4",
        "adminArea4Type",
        "adminArea3",
        "adminArea3Type",
        "adminArea2",
        "adminArea2Type",
        "adminArea1",
        "adminArea1Type",
        "geocodeQuality",
        "geocodeQualityCode",
        "unknownInput",
    )
    _KNOWN: ClassVar[FrozenSet[str]] = frozenset(
        _STR_FIELDS + ("latLng", "displayLatLng", "type", "roadMetadata", "nearestIntersection")
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeocodeLocation":
        data = _expectDict(data, "location")

        locationType: Optional[Union[GeocodeType, str]] = _optStr(data, "type")
        if locationType is not None:
            try:
                locationType = GeocodeType(locationType)
            except ValueError:
                logger.debug(f"Unknown geocode location type: {locationType}")

        return cls(
            latLng=_optGeoPoint(data, "latLng"),
            displayLatLng=_optGeoPoint(data, "displayLatLng"),
            type=locationType,
            roadMetadata=RoadMetadata.from_dict(data["roadMetadata"]) if data.get("roadMetadata") else None,
            nearestIntersection=(
                NearestIntersection.from_dict(data["nearestIntersection"])
                if data.get("nearestIntersection")
                else None
            ),
            api_kwargs=_extraKwargs(data, cls._KNOWN),
            **{name: _optStr(data, name) for name in cls._STR_FIELDS},
        )


@dataclass(slots=True)
class GeocodeResult:
    """Geocoding result for one provided location"""

    providedLocation: Optional[ProvidedLocation] = None
    locations: List[GeocodeLocation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeocodeResult":
        data = _expectDict(data, "result")
        locations = data.get("locations")
        return cls(
            providedLocation=(
                ProvidedLocation.from_dict(data["providedLocation"]) if data.get("providedLocation") else None
            ),
            locations=[
                GeocodeLocation.from_dict(item) for item in (_expectList(locations, "locations") if locations else [])
            ],
        )


@dataclass(slots=True)
class GeocodeAddressResponse:
    """Response of the /address and /reverse geocoding endpoints"""

    info: Optional[GeocodeInfo] = None
    options: Optional[GeocodeOptions] = None
    results: List[GeocodeResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "GeocodeAddressResponse":
        data = _expectDict(data, "geocode response")
        results = data.get("results")
        return cls(
            info=GeocodeInfo.from_dict(data["info"]) if data.get("info") is not None else None,
            options=GeocodeOptions.from_dict(data["options"]) if data.get("options") is not None else None,
            results=[GeocodeResult.from_dict(item) for item in (_expectList(results, "results") if results else [])],
        )


# ============================================================================
# Nominatim responses
# ============================================================================


@dataclass(slots=True)
class NominatimAddress:
    """Structured address of a nominatim place. All fields are optional."""

    city: Optional[str] = None
    city_district: Optional[str] = None
    continent: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    county: Optional[str] = None
    hamlet: Optional[str] = None
    house_number: Optional[str] = None
    pedestrian: Optional[str] = None
    neighbourhood: Optional[str] = None
    postcode: Optional[str] = None
    road: Optional[str] = None
    state: Optional[str] = None
    state_district: Optional[str] = None
    suburb: Optional[str] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    _FIELDS: ClassVar[Tuple[str, ...]] = (
        "city",
        "city_district",
        "continent",
        "country",
        "country_code",
        "county",
        "hamlet",
        "house_number",
        "pedestrian",
        "neighbourhood",
        "postcode",
        "road",
        "state",
        "state_district",
        "suburb",
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NominatimAddress":
        data = _expectDict(data, "address")
        return cls(
            api_kwargs=_extraKwargs(data, frozenset(cls._FIELDS)),
            **{name: _optStr(data, name) for name in cls._FIELDS},
        )


@dataclass(slots=True)
class NominatimPlace:
    """Single nominatim place, dood!

    ``lat``, ``lon``, ``importance`` and the ``boundingbox`` entries arrive as
    strings and are parsed to floats. ``class_`` holds the JSON ``class`` key.
    """

    place_id: Optional[str] = None
    licence: Optional[str] = None
    osm_type: Optional[str] = None
    osm_id: Optional[str] = None
    boundingbox: List[float] = field(default_factory=list)
    lat: Optional[float] = None
    lon: Optional[float] = None
    display_name: Optional[str] = None
    class_: Optional[str] = None
    type: Optional[str] = None
    importance: Optional[float] = None
    icon: Optional[str] = None
    address: Optional[NominatimAddress] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    _KNOWN: ClassVar[FrozenSet[str]] = frozenset(
        {
            "place_id",
            "licence",
            "osm_type",
            "osm_id",
            "boundingbox",
            "lat",
            "lon",
            "display_name",
            "class",
            "type",
            "importance",
            "icon",
            "address",
        }
    )

    @classmethod
    def from_dict(cls, data: Any) -> "NominatimPlace":
        data = _expectDict(data, "place")
        if "error" in data and "place_id" not in data:
            raise DecodeError(f"Service error: {data['error']}", response=data)

        boundingbox = data.get("boundingbox")
        return cls(
            place_id=_optStr(data, "place_id"),
            licence=_optStr(data, "licence"),
            osm_type=_optStr(data, "osm_type"),
            osm_id=_optStr(data, "osm_id"),
            boundingbox=[
                _toFloat(v, "boundingbox") for v in (_expectList(boundingbox, "boundingbox") if boundingbox else [])
            ],
            lat=_optFloat(data, "lat"),
            lon=_optFloat(data, "lon"),
            display_name=_optStr(data, "display_name"),
            class_=_optStr(data, "class"),
            type=_optStr(data, "type"),
            importance=_optFloat(data, "importance"),
            icon=_optStr(data, "icon"),
            address=NominatimAddress.from_dict(data["address"]) if data.get("address") is not None else None,
            api_kwargs=_extraKwargs(data, cls._KNOWN),
        )


@dataclass(slots=True)
class NominatimSearchResponse:
    """Nominatim search results in service order"""

    results: List[NominatimPlace] = field(default_factory=list)

    @classmethod
    def from_list(cls, data: Any) -> "NominatimSearchResponse":
        return cls(results=[NominatimPlace.from_dict(item) for item in _expectList(data, "search response")])
