"""Tests for reference image normalization and loading."""

from io import BytesIO

import httpx
import pytest
from PIL import Image

from anchor_studio.content.media import load_reference_image, normalize_reference_image


def make_png(size=(64, 32), mode="RGBA") -> bytes:
    img = Image.new(mode, size, color=(200, 30, 30, 255) if mode == "RGBA" else 128)
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


class TestNormalizeReferenceImage:

    def test_png_becomes_rgb_jpeg(self):
        reference = normalize_reference_image(make_png(), source="shot.png")

        assert reference.mime_type == "image/jpeg"
        assert reference.source == "shot.png"
        img = Image.open(BytesIO(reference.data))
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert img.size == (64, 32)

    def test_large_image_is_downscaled(self):
        reference = normalize_reference_image(make_png(size=(400, 200)), max_side=100)

        assert Image.open(BytesIO(reference.data)).size == (100, 50)

    def test_grayscale_is_converted(self):
        reference = normalize_reference_image(make_png(mode="L"))

        assert Image.open(BytesIO(reference.data)).mode == "RGB"

    def test_not_an_image(self):
        with pytest.raises(ValueError, match="Not a readable image"):
            normalize_reference_image(b"definitely not an image")


class TestLoadReferenceImage:

    @pytest.mark.asyncio
    async def test_local_file(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(make_png())

        reference = await load_reference_image(path)

        assert reference.source == str(path)
        assert reference.mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await load_reference_image(tmp_path / "missing.png")

    @pytest.mark.asyncio
    async def test_url_download(self):
        png = make_png()

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url == "https://images.example.com/photo.png"
            return httpx.Response(200, content=png)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            reference = await load_reference_image("https://images.example.com/photo.png", http_client=client)

        assert reference.source == "https://images.example.com/photo.png"

    @pytest.mark.asyncio
    async def test_url_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await load_reference_image("https://images.example.com/missing.png", http_client=client)
