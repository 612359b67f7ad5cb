"""
Unit tests for the MapQuest static map API

Tests parameter building, image decoding and streaming access.
"""

import pytest

from lib.mapquest.encoders import Banner, BannerSize, BoundingBox, Color, GeoPoint, Location, Scalebar, Size
from lib.mapquest.exceptions import DimensionTooLargeError, ImageCodecError
from lib.mapquest.models import StaticMapFormat, StaticMapRequest, StaticMapType
from lib.mapquest.static_map import buildMapParams, decodeImage
from lib.mapquest.test_helpers import FakeService, makeImage, makePng, makePngHeader


class TestMapParams:
    """Test suite for static map parameter building."""

    def test_full_request(self):
        """Test every static map option lands under its query key, dood!"""
        request = StaticMapRequest(
            size=Size(500, 300, retina=True),
            center=GeoPoint(48.151313, 11.54165),
            boundingBox=BoundingBox(GeoPoint(48.2, 11.4), GeoPoint(48.1, 11.7)),
            margin=20,
            zoom=9,
            format=StaticMapFormat.PNG,
            type=StaticMapType.DARK,
            scalebar=Scalebar(enable=True, position="bottom"),
            locations=[Location("Munich", "marker-red"), Location("Augsburg")],
            declutter=True,
            defaultMarker="marker-sm",
            banner=Banner("Trip", size=BannerSize.LARGE, onTop=True, textColor=0x112233, backgroundColor=0x445566),
            start=Location("Munich"),
            end=Location("Augsburg", "flag"),
            routeArc=True,
            routeWidth=5,
            routeColor=Color(255, 0, 0, 128),
        )

        assert buildMapParams(request, "secret") == {
            "size": "500,300@2",
            "center": "48.151313,11.541650",
            "boundingBox": "48.200000,11.400000,48.100000,11.700000",
            "margin": "20",
            "zoom": "9",
            "format": "png",
            "type": "dark",
            "scalebar": "true|bottom",
            "locations": "Munich|marker-red||Augsburg",
            "declutter": "true",
            "defaultMarker": "marker-sm",
            "banner": "Trip|lg-top-112233-445566",
            "start": "Munich",
            "end": "Augsburg|flag",
            "routeArc": "true",
            "routeWidth": "5",
            "routeColor": "255,0,0,128",
            "key": "secret",
        }

    def test_free_text_center(self):
        """Test a string center is sent as-is."""
        params = buildMapParams(StaticMapRequest(center="Munich, Germany", zoom=9), "secret")

        assert params == {"center": "Munich, Germany", "zoom": "9", "key": "secret"}

    def test_no_output_format_param(self):
        """Test static map requests do not carry a JSON output format."""
        params = buildMapParams(StaticMapRequest(center="Munich"), "secret")

        assert "outFormat" not in params
        assert "format" not in params

    def test_oversized_map_rejected(self):
        """Test maps larger than 1920 pixels fail before encoding finishes."""
        with pytest.raises(DimensionTooLargeError):
            buildMapParams(StaticMapRequest(size=Size(2000, 100)), "secret")


class TestDecodeImage:
    """Test suite for bitmap decoding."""

    def test_png(self):
        """Test a PNG body decodes with its size."""
        image = decodeImage(makePng(40, 30))

        assert image.size == (40, 30)
        assert image.format == "PNG"

    @pytest.mark.parametrize("imageFormat", ["PNG", "GIF", "JPEG"])
    def test_supported_formats(self, imageFormat):
        """Test every format the service may return decodes with its size, dood!"""
        image = decodeImage(makeImage(40, 30, imageFormat))

        assert image.size == (40, 30)
        assert image.format == imageFormat

    @pytest.mark.parametrize("imageFormat", ["BMP", "TIFF"])
    def test_other_formats_rejected(self, imageFormat):
        """Test bitmaps outside PNG, GIF and JPEG are refused."""
        with pytest.raises(ImageCodecError):
            decodeImage(makeImage(40, 30, imageFormat))

    @pytest.mark.parametrize("data", [b"", b"not an image", makePng(40, 30)[:60]])
    def test_corrupt_data(self, data):
        """Test garbage and truncated bodies raise ImageCodecError."""
        with pytest.raises(ImageCodecError):
            decodeImage(data)

    def test_huge_declared_size(self):
        """Test a header claiming an enormous bitmap raises ImageCodecError."""
        with pytest.raises(ImageCodecError):
            decodeImage(makePngHeader(20000, 20000))


@pytest.mark.asyncio
async def test_map_call(pngService, clientFor):
    """Test map fetches /staticmap/v5/map and decodes the bitmap, dood!"""
    service = pngService(500, 300)
    client = clientFor(service)

    image = await client.staticMap().map(StaticMapRequest(center="48.151313,11.54165", zoom=9, size=Size(500, 300)))

    assert image.size == (500, 300)
    request = service.requests[0]
    assert request.url.path == "/staticmap/v5/map"
    assert service.lastParams["size"] == "500,300"
    assert service.lastParams["key"] == "test_key"
    assert service.streams[0].closed


@pytest.mark.asyncio
async def test_map_corrupt_body(clientFor):
    """Test a non-image body surfaces as ImageCodecError."""
    client = clientFor(FakeService(content=b"<html>not a map</html>", contentType="text/html"))

    with pytest.raises(ImageCodecError):
        await client.staticMap().map(StaticMapRequest(center="Munich"))


@pytest.mark.asyncio
async def test_oversized_map_sends_nothing(pngService, clientFor):
    """Test an oversized map fails without any request going out."""
    service = pngService(10, 10)
    client = clientFor(service)

    with pytest.raises(DimensionTooLargeError):
        await client.staticMap().map(StaticMapRequest(center="Munich", size=Size(1921, 100)))

    assert service.requests == []


@pytest.mark.asyncio
async def test_map_bytes(pngService, clientFor):
    """Test mapBytes returns the raw body undecoded."""
    service = pngService(20, 10)
    client = clientFor(service)

    data = await client.staticMap().mapBytes(StaticMapRequest(center="Munich"))

    assert data == service.content


@pytest.mark.asyncio
async def test_map_reader_streams_and_releases(pngService, clientFor):
    """Test mapReader yields the body in chunks and releases it afterwards."""
    service = pngService(20, 10)
    client = clientFor(service)

    chunks = []
    async with client.staticMap().mapReader(StaticMapRequest(center="Munich")) as response:
        assert response.status_code == 200
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)

    assert b"".join(chunks) == service.content
    assert service.streams[0].closed


@pytest.mark.asyncio
async def test_map_reader_released_when_unread(pngService, clientFor):
    """Test the body is released even if the caller never reads it."""
    service = pngService(20, 10)
    client = clientFor(service)

    async with client.staticMap().mapReader(StaticMapRequest(center="Munich")):
        pass

    assert service.streams[0].closed
