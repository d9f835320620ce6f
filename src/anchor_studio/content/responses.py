"""Pydantic response models for AI extraction.

These define the exact JSON the model must return. They double as the
``response_schema`` of schema-constrained calls and as the validator
applied to every response, schema-constrained or not.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field

from .models import CamelModel, ParagraphPrompt, SocialMediaContent


class SingleStoryResponse(CamelModel):
    """Content for one story (URL or headline input)."""

    script: str = Field(
        min_length=1, description="A 3-4 sentence news summary written for a news anchor."
    )
    topic: str = Field(description="The single most relevant topic from the allowed list.")
    background_description: str = Field(
        min_length=1,
        description="Short, vivid, safe-for-work background behind the anchor. No people or violence.",
    )
    post_image_description: str = Field(
        min_length=1,
        description="Prompt for a 1:1 social post image including a short high-impact text phrase.",
    )
    social_media_content: SocialMediaContent
    video_image_prompts: list[str] = Field(
        description="3-4 photorealistic 16:9 B-roll image prompts without people or text."
    )
    story_video_prompts: list[str] = Field(
        description="1-2 cinematic text-to-video prompts based on the script."
    )


class MultiStoryResponse(CamelModel):
    """Content for a 2-3 story roundup."""

    intro_script: str = Field(
        min_length=1, description="A 15-20 second hook teasing every story."
    )
    main_script: str = Field(
        min_length=1, description="A detailed long-form script covering each story in depth."
    )
    translated_script: str = Field(
        min_length=1,
        validation_alias=AliasChoices("translatedScript", "urduScript", "translated_script"),
        description="A complete translation of the main script into the requested language.",
    )
    thumbnail_prompt: str = Field(
        min_length=1, description="Prompt for a 16:9 YouTube thumbnail with a short bold text phrase."
    )
    post_image_descriptions: list[str] = Field(
        description="One short (5-7 words) square post image description per story."
    )
    social_media_content: SocialMediaContent
    video_image_prompts: list[str] = Field(
        description="5-6 photorealistic 16:9 B-roll image prompts without people or text."
    )
    intro_video_prompt: str = Field(
        min_length=1, description="One dynamic text-to-video prompt for the intro."
    )
    story_video_prompts: list[str] = Field(
        description="One cinematic text-to-video prompt per story."
    )


class ParagraphPromptsResponse(CamelModel):
    """Script split into paragraphs, each with a video prompt."""

    prompts: list[ParagraphPrompt]
