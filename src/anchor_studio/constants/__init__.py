"""Global constants package for Anchor Studio.

PACKAGE STRUCTURE:
-----------------
- limits.py  : Retry budget, pacing delays, story counts, model defaults
- prompts.py : Fixed prompt fragments and fallback prompts

USAGE EXAMPLES:
--------------
    from anchor_studio.constants import IMAGE_CALL_DELAY_SECONDS
    from anchor_studio.constants import BASE_ANCHOR_PROMPT
"""

from .limits import (
    ASPECT_LANDSCAPE,
    ASPECT_PORTRAIT,
    ASPECT_SQUARE,
    IMAGE_CALL_DELAY_SECONDS,
    IMAGE_MODEL_DEFAULT,
    MULTI_STORY_MAX_HEADLINES,
    MULTI_STORY_MIN_HEADLINES,
    REFERENCE_IMAGE_JPEG_QUALITY,
    REFERENCE_IMAGE_MAX_SIDE,
    RETRY_INITIAL_DELAY_SECONDS,
    RETRY_MAX_RETRIES,
    TEMPERATURE_HEADLINE,
    TEMPERATURE_MULTI_STORY,
    TEMPERATURE_PARAGRAPHS,
    TEMPERATURE_URL,
    TEXT_MODEL_DEFAULT,
    TRANSIENT_ERROR_MARKERS,
    AspectRatio,
)
from .prompts import (
    ANCHOR_PORTRAIT_PREFIX,
    B_ROLL_SUFFIX,
    BASE_ANCHOR_PROMPT,
    FALLBACK_NOTE,
    GENERIC_STUDIO_BACKGROUND,
    INTRO_MARKER,
    MAIN_SCRIPT_MARKER,
    POST_IMAGE_TEMPLATE,
    ROUNDUP_POST_FALLBACK_PROMPT,
    ROUNDUP_POST_IMAGE_TEMPLATE,
    ROUNDUP_THUMBNAIL_FALLBACK_TEMPLATE,
    ROUNDUP_THUMBNAIL_FALLBACK_THEME,
    SCRIPT_SECTION_SEPARATOR,
)

__all__ = [
    "ASPECT_LANDSCAPE",
    "ASPECT_PORTRAIT",
    "ASPECT_SQUARE",
    "IMAGE_CALL_DELAY_SECONDS",
    "IMAGE_MODEL_DEFAULT",
    "MULTI_STORY_MAX_HEADLINES",
    "MULTI_STORY_MIN_HEADLINES",
    "REFERENCE_IMAGE_JPEG_QUALITY",
    "REFERENCE_IMAGE_MAX_SIDE",
    "RETRY_INITIAL_DELAY_SECONDS",
    "RETRY_MAX_RETRIES",
    "TEMPERATURE_HEADLINE",
    "TEMPERATURE_MULTI_STORY",
    "TEMPERATURE_PARAGRAPHS",
    "TEMPERATURE_URL",
    "TEXT_MODEL_DEFAULT",
    "TRANSIENT_ERROR_MARKERS",
    "AspectRatio",
    "ANCHOR_PORTRAIT_PREFIX",
    "B_ROLL_SUFFIX",
    "BASE_ANCHOR_PROMPT",
    "FALLBACK_NOTE",
    "GENERIC_STUDIO_BACKGROUND",
    "INTRO_MARKER",
    "MAIN_SCRIPT_MARKER",
    "POST_IMAGE_TEMPLATE",
    "ROUNDUP_POST_FALLBACK_PROMPT",
    "ROUNDUP_POST_IMAGE_TEMPLATE",
    "ROUNDUP_THUMBNAIL_FALLBACK_TEMPLATE",
    "ROUNDUP_THUMBNAIL_FALLBACK_THEME",
    "SCRIPT_SECTION_SEPARATOR",
]
