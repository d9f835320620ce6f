"""Data models for news content generation.

Requests describe what to generate, ``ContentBundle`` holds the text
produced for one run and ``ImageSet`` the images. Both are frozen; the
only post-creation change (an edited thumbnail prompt) goes through
copy helpers that return new objects.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..constants import MULTI_STORY_MAX_HEADLINES, MULTI_STORY_MIN_HEADLINES


class NewsTopic(str, Enum):
    """Closed set of story categories."""

    POLITICS = "politics"
    SPORTS = "sports"
    TECHNOLOGY = "technology"
    WEATHER = "weather"
    FINANCE = "finance"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    SCIENCE = "science"
    DEFAULT = "default"

    @classmethod
    def choices(cls) -> list[str]:
        """Topic labels the model may pick from (everything but default)."""
        return [topic.value for topic in cls if topic is not cls.DEFAULT]


def normalize_topic(value: Any) -> NewsTopic:
    """Map a model-supplied topic onto the closed set.

    Unknown or non-string values become ``NewsTopic.DEFAULT``.
    """
    if isinstance(value, NewsTopic):
        return value
    if not isinstance(value, str):
        return NewsTopic.DEFAULT
    try:
        return NewsTopic(value.strip().lower())
    except ValueError:
        return NewsTopic.DEFAULT


class CamelModel(BaseModel):
    """Base for models exchanged with the model as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# =============================================================================
# REQUESTS
# =============================================================================

class ReferenceImage(BaseModel):
    """Caller-supplied image used as visual context (already JPEG-normalized)."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str = "image/jpeg"
    source: str | None = None

    def __repr__(self) -> str:
        return f"ReferenceImage(mime_type={self.mime_type!r}, bytes={len(self.data)}, source={self.source!r})"


class UrlRequest(BaseModel):
    """Single story from an article URL."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["url"] = "url"
    url: AnyHttpUrl
    image: ReferenceImage | None = None


class HeadlineRequest(BaseModel):
    """Single story from a headline in any language."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    kind: Literal["headline"] = "headline"
    headline: str = Field(min_length=1)
    language: str | None = None
    image: ReferenceImage | None = None


SingleStoryRequest = Annotated[Union[UrlRequest, HeadlineRequest], Field(discriminator="kind")]


class MultiHeadlineRequest(BaseModel):
    """Roundup of 2-3 headlines, each with an optional reference image.

    ``images`` is aligned with ``headlines`` by slot. A blank third
    headline is dropped together with its image.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["multiHeadline"] = "multiHeadline"
    headlines: list[str]
    images: list[ReferenceImage | None] = Field(default_factory=list, validate_default=True)

    @field_validator("headlines")
    @classmethod
    def _check_headlines(cls, value: list[str]) -> list[str]:
        headlines = [h.strip() for h in value]
        if len(headlines) > MULTI_STORY_MIN_HEADLINES and not headlines[-1]:
            headlines = headlines[:-1]
        if not MULTI_STORY_MIN_HEADLINES <= len(headlines) <= MULTI_STORY_MAX_HEADLINES:
            raise ValueError(
                f"expected {MULTI_STORY_MIN_HEADLINES}-{MULTI_STORY_MAX_HEADLINES} headlines, got {len(headlines)}"
            )
        if any(not h for h in headlines):
            raise ValueError("headlines must not be empty")
        return headlines

    @field_validator("images")
    @classmethod
    def _align_images(
        cls, value: list[ReferenceImage | None], info: ValidationInfo
    ) -> list[ReferenceImage | None]:
        headlines = info.data.get("headlines")
        if headlines is None:
            return value
        count = len(headlines)
        images = list(value[:count])
        images.extend([None] * (count - len(images)))
        return images

    @property
    def story_count(self) -> int:
        return len(self.headlines)

    @property
    def attached_images(self) -> list[ReferenceImage]:
        """Supplied images in slot order, skipping empty slots."""
        return [image for image in self.images if image is not None]


# =============================================================================
# SOCIAL MEDIA COPY
# =============================================================================

class YouTubeContent(CamelModel):
    title: str
    description: str
    keywords: list[str]
    hashtags: list[str]


class FacebookContent(CamelModel):
    post: str


class InstagramContent(CamelModel):
    post: str


class SocialMediaContent(CamelModel):
    """Per-platform copy for one run."""

    youtube: YouTubeContent
    facebook: FacebookContent
    instagram: InstagramContent


# =============================================================================
# RUN OUTPUT
# =============================================================================

class ContentBundle(CamelModel):
    """Text output of one generation run.

    Single-story runs fill ``background_description`` and one post image
    description. Roundups fill the intro/main/translated scripts, the
    thumbnail prompt, the intro video prompt and one post description
    and story video prompt per headline.
    """

    script: str
    topic: NewsTopic = NewsTopic.DEFAULT
    post_image_descriptions: list[str]
    social_media_content: SocialMediaContent
    video_image_prompts: list[str] = Field(default_factory=list)
    story_video_prompts: list[str] = Field(default_factory=list)

    # Single story
    background_description: str | None = None

    # Roundup
    translated_script: str | None = None
    translated_language: str | None = None
    intro_script: str | None = None
    main_script: str | None = None
    intro_video_prompt: str | None = None
    thumbnail_prompt: str | None = None

    @property
    def is_roundup(self) -> bool:
        return self.thumbnail_prompt is not None

    def with_thumbnail_prompt(self, prompt: str) -> "ContentBundle":
        """Return a copy with an edited thumbnail prompt; nothing else changes."""
        return self.model_copy(update={"thumbnail_prompt": prompt})


class ImageSet(BaseModel):
    """Images for one run. A None role means generation failed after fallback."""

    model_config = ConfigDict(frozen=True)

    anchor_16x9: bytes | None = None
    anchor_9x16: bytes | None = None
    post_images: tuple[bytes | None, ...] = ()
    thumbnail: bytes | None = None
    b_roll: tuple[bytes, ...] = ()

    # Prompt that actually produced the 16:9 anchor (single story only)
    final_prompt: str | None = None
    fallback_used: bool = False

    def roles(self) -> dict[str, bytes]:
        """Present images keyed by role name (``anchor16x9``, ``postImage[1]``, ``bRoll[0]``...)."""
        result: dict[str, bytes] = {}
        if self.anchor_16x9:
            result["anchor16x9"] = self.anchor_16x9
        if self.anchor_9x16:
            result["anchor9x16"] = self.anchor_9x16
        if self.thumbnail:
            result["thumbnail"] = self.thumbnail
        if len(self.post_images) == 1:
            if self.post_images[0]:
                result["postImage"] = self.post_images[0]
        else:
            for index, image in enumerate(self.post_images):
                if image:
                    result[f"postImage[{index}]"] = image
        for index, image in enumerate(self.b_roll):
            result[f"bRoll[{index}]"] = image
        return result

    @property
    def is_empty(self) -> bool:
        return not self.roles()


class ParagraphPrompt(BaseModel):
    """One script paragraph and its text-to-video prompt."""

    model_config = ConfigDict(frozen=True)

    paragraph: str
    prompt: str


class StudioResult(BaseModel):
    """Everything a finished run hands back to the caller."""

    model_config = ConfigDict(frozen=True)

    bundle: ContentBundle
    images: ImageSet
    warnings: tuple[str, ...] = ()
    paragraph_prompts: tuple[ParagraphPrompt, ...] | None = None

    def with_thumbnail(self, prompt: str, image: bytes | None) -> "StudioResult":
        """Return a copy carrying an edited thumbnail prompt and its new image."""
        return self.model_copy(
            update={
                "bundle": self.bundle.with_thumbnail_prompt(prompt),
                "images": self.images.model_copy(update={"thumbnail": image}),
            }
        )
