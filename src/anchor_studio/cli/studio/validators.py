"""Studio-specific validators - pure functions returning Result."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ...errors import ConfigurationError
from ...providers.config import StudioSettings, load_studio_settings
from ..core.types import Failure, Result, Success
from .params import BRollParams, MultiStoryParams, ParagraphParams, SingleStoryParams, ThumbnailParams


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def validate_image_location(location: Optional[str]) -> Result[Optional[str]]:
    """Validate a reference image given as a local path or http(s) URL."""
    if location is None or _is_url(location):
        return Success(location)
    path = Path(location).expanduser()
    if not path.is_file():
        return Failure(f"Image not found: {location}", {"path": str(path)})
    return Success(location)


def validate_single_params(params: SingleStoryParams) -> Result[SingleStoryParams]:
    """Validate single-story parameters.

    Exactly one of headline or URL must be given.
    """
    if params.headline and params.url:
        return Failure(
            "Provide either --headline or --url, not both",
            {"hint": "Use --url for an article link, --headline for a headline in any language"},
        )
    if not params.headline and not params.url:
        return Failure(
            "Please enter a news article URL or a headline.",
            {"hint": "studio single --headline 'City announces new park'"},
        )
    if params.url and not _is_url(params.url):
        return Failure(
            f"Invalid URL: {params.url}",
            {"hint": "Please enter a valid URL (e.g., https://example.com)"},
        )
    if params.language and not params.headline:
        return Failure("--language only applies to --headline input")

    image_result = validate_image_location(params.image)
    if isinstance(image_result, Failure):
        return image_result

    return Success(params)


def validate_multi_params(params: MultiStoryParams) -> Result[MultiStoryParams]:
    """Validate roundup parameters."""
    if len(params.headlines) < 2 or not all(params.headlines):
        return Failure("Please fill in at least two headlines for the roundup.")
    if len(params.headlines) > 3:
        return Failure(f"Too many headlines: {len(params.headlines)}", {"hint": "A roundup covers 2-3 stories"})

    for image in params.images:
        image_result = validate_image_location(image)
        if isinstance(image_result, Failure):
            return image_result

    return Success(params)


def validate_thumbnail_params(params: ThumbnailParams) -> Result[ThumbnailParams]:
    if not params.prompt:
        return Failure("Thumbnail prompt is empty. Cannot regenerate.")
    return Success(params)


def validate_broll_params(params: BRollParams) -> Result[BRollParams]:
    if not params.prompts:
        return Failure("No B-roll prompts given")
    return Success(params)


def validate_paragraph_params(params: ParagraphParams) -> Result[ParagraphParams]:
    if not params.script_path.is_file():
        return Failure(f"Script file not found: {params.script_path}")
    if not params.script_path.read_text(encoding="utf-8").strip():
        return Failure(f"Script file is empty: {params.script_path}")
    return Success(params)


def validate_settings(config_path: Optional[Path] = None) -> Result[StudioSettings]:
    """Load settings, turning a missing credential into a Failure."""
    try:
        return Success(load_studio_settings(config_path))
    except ConfigurationError as e:
        return Failure(
            str(e),
            {"hint": "Add GEMINI_API_KEY=<your key> to .env or the environment"},
        )
    except ValidationError as e:
        return Failure("Invalid studio settings", {"errors": e.error_count(), "detail": str(e)})
