"""Limit constants for Anchor Studio.

This module contains the rate, retry and size limits the generation
pipeline relies on:
- Retry budget and backoff for remote calls
- Mandatory pacing between image calls
- Story counts and prompt counts requested from the model

AI CONTEXT:
-----------
The image backend enforces a per-minute quota. Image calls are strictly
sequential and separated by IMAGE_CALL_DELAY_SECONDS. Lowering that value
trades throughput for 429 errors that the retry layer then has to absorb.
"""

from typing import Final, Literal

# =============================================================================
# RETRY SETTINGS
# =============================================================================

RETRY_MAX_RETRIES: Final[int] = 3
"""Retries after the first attempt for transient errors (4 attempts total)."""

RETRY_INITIAL_DELAY_SECONDS: Final[float] = 5.0
"""Backoff before the first retry; doubles on every further retry."""

TRANSIENT_ERROR_MARKERS: Final[tuple[str, ...]] = (
    "429",
    "resource_exhausted",
    "rate limit",
    "500",
    "internal error",
)
"""Lower-case message fragments that mark an error as safe to retry."""


# =============================================================================
# PACING
# =============================================================================

IMAGE_CALL_DELAY_SECONDS: Final[float] = 15.0
"""Minimum pause between two consecutive image generation calls."""


# =============================================================================
# STORY LIMITS
# =============================================================================

MULTI_STORY_MIN_HEADLINES: Final[int] = 2
"""Minimum headlines for a roundup."""

MULTI_STORY_MAX_HEADLINES: Final[int] = 3
"""Maximum headlines for a roundup."""


# =============================================================================
# ASPECT RATIOS
# =============================================================================

AspectRatio = Literal["16:9", "9:16", "1:1"]

ASPECT_LANDSCAPE: Final[AspectRatio] = "16:9"
ASPECT_PORTRAIT: Final[AspectRatio] = "9:16"
ASPECT_SQUARE: Final[AspectRatio] = "1:1"


# =============================================================================
# MODEL DEFAULTS
# =============================================================================

TEXT_MODEL_DEFAULT: Final[str] = "gemini-2.5-flash"
IMAGE_MODEL_DEFAULT: Final[str] = "imagen-3.0-generate-002"

TEMPERATURE_URL: Final[float] = 0.3
TEMPERATURE_HEADLINE: Final[float] = 0.5
TEMPERATURE_MULTI_STORY: Final[float] = 0.6
TEMPERATURE_PARAGRAPHS: Final[float] = 0.7


# =============================================================================
# REFERENCE IMAGES
# =============================================================================

REFERENCE_IMAGE_MAX_SIDE: Final[int] = 1536
"""Longest side (px) of a reference image after normalization."""

REFERENCE_IMAGE_JPEG_QUALITY: Final[int] = 90
