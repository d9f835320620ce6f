"""Prompt fragments shared by the generators and the image orchestrator.

Only fixed text lives here. Prompt assembly happens in
``anchor_studio.content.prompts``.
"""

from typing import Final

BASE_ANCHOR_PROMPT: Final[str] = (
    "A photorealistic, professional news anchor in a tailored dark suit, "
    "seated at a modern glass news desk, looking directly into the camera "
    "with a confident, neutral expression, soft broadcast studio lighting"
)
"""Default anchor description; the background is appended per story."""

GENERIC_STUDIO_BACKGROUND: Final[str] = "a generic news studio"
"""Background substituted when the story background is rejected."""

FALLBACK_NOTE: Final[str] = "(Fallback to generic background due to content policy)"
"""Suffix on the reported prompt when the 16:9 anchor used the fallback."""

ANCHOR_PORTRAIT_PREFIX: Final[str] = "Medium close-up shot of"

POST_IMAGE_TEMPLATE: Final[str] = (
    "A high-quality, photorealistic image representing: {description}. "
    "Clean, professional, editorial style."
)

ROUNDUP_POST_IMAGE_TEMPLATE: Final[str] = (
    "A high-quality, photorealistic image for a social media post about: "
    "{description}. Clean, professional, editorial style, with eye-catching "
    "text integrated into the image. 1:1 aspect ratio."
)

ROUNDUP_THUMBNAIL_FALLBACK_TEMPLATE: Final[str] = (
    "A professional and eye-catching YouTube thumbnail for a news roundup. "
    "The main theme is '{theme}'. Feature bold text saying 'Breaking News'. "
    "Graphic design, high contrast."
)

ROUNDUP_THUMBNAIL_FALLBACK_THEME: Final[str] = "news stories"

ROUNDUP_POST_FALLBACK_PROMPT: Final[str] = (
    "An abstract graphic design with news-related symbols and bold text "
    "saying 'News Update'. 1:1 aspect ratio, clean, modern."
)

B_ROLL_SUFFIX: Final[str] = "Photorealistic, cinematic, 16:9 aspect ratio."

# Roundup script layout
INTRO_MARKER: Final[str] = "INTRO:"
MAIN_SCRIPT_MARKER: Final[str] = "FULL SCRIPT:"
SCRIPT_SECTION_SEPARATOR: Final[str] = "---"
