"""Reference image loading and normalization.

Images attached to a request are sent inline as JPEG, so anything the
caller supplies (PNG screenshots, WebP, CMYK scans) is converted to RGB
JPEG and downscaled before it reaches the model.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError

from ..constants import REFERENCE_IMAGE_JPEG_QUALITY, REFERENCE_IMAGE_MAX_SIDE
from .models import ReferenceImage

_logger = logging.getLogger("studio")


def normalize_reference_image(
    image_bytes: bytes,
    source: str | None = None,
    max_side: int = REFERENCE_IMAGE_MAX_SIDE,
) -> ReferenceImage:
    """Convert arbitrary image bytes into an RGB JPEG reference image.

    Args:
        image_bytes: Raw image file contents.
        source: Where the image came from (path or URL), for diagnostics.
        max_side: Longest side after downscaling. Smaller images are untouched.

    Raises:
        ValueError: If the bytes are not a readable image.
    """
    try:
        img = Image.open(BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Not a readable image: {source or 'bytes'} ({e})") from e

    img = ImageOps.exif_transpose(img)

    # Convert to RGB if necessary
    if img.mode != "RGB":
        img = img.convert("RGB")

    if max(img.size) > max_side:
        img.thumbnail((max_side, max_side), Image.Resampling.LANCZOS)

    output = BytesIO()
    img.save(output, format="JPEG", quality=REFERENCE_IMAGE_JPEG_QUALITY, optimize=True)
    _logger.debug(f"Normalized reference image {source or '-'} -> {img.size[0]}x{img.size[1]}")
    return ReferenceImage(data=output.getvalue(), mime_type="image/jpeg", source=source)


async def load_reference_image(
    location: str | Path,
    http_client: httpx.AsyncClient | None = None,
) -> ReferenceImage:
    """Load a reference image from a local path or an http(s) URL.

    Args:
        location: File path or URL.
        http_client: Client to reuse for URL downloads. A temporary one
            is created when omitted.

    Raises:
        FileNotFoundError: If a local path does not exist.
        httpx.HTTPError: If the download fails.
        ValueError: If the content is not an image.
    """
    text = str(location)
    if text.startswith(("http://", "https://")):
        if http_client is not None:
            response = await http_client.get(text, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.get(text, follow_redirects=True)
        response.raise_for_status()
        return normalize_reference_image(response.content, source=text)

    path = Path(location).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    return normalize_reference_image(path.read_bytes(), source=str(path))
