"""Prompt builders for text and image generation calls."""

from __future__ import annotations

from textwrap import dedent
from typing import Sequence

from ..constants import (
    ANCHOR_PORTRAIT_PREFIX,
    B_ROLL_SUFFIX,
    FALLBACK_NOTE,
    GENERIC_STUDIO_BACKGROUND,
    INTRO_MARKER,
    MAIN_SCRIPT_MARKER,
    POST_IMAGE_TEMPLATE,
    ROUNDUP_POST_IMAGE_TEMPLATE,
    ROUNDUP_THUMBNAIL_FALLBACK_TEMPLATE,
    ROUNDUP_THUMBNAIL_FALLBACK_THEME,
    SCRIPT_SECTION_SEPARATOR,
)
from .models import NewsTopic

# Free-text calls (URL + search) cannot use a schema, so they get an example
_SINGLE_STORY_EXAMPLE = """\
{
  "script": "Innovate Inc. has unveiled a quantum computer that it says solves certain problems millions of times faster than today's supercomputers.",
  "topic": "technology",
  "backgroundDescription": "A sleek quantum computer with glowing blue qubits in a modern laboratory.",
  "postImageDescription": "A dramatic, high-contrast image of a quantum computer with the text 'QUANTUM LEAP!' in a bold modern font.",
  "socialMediaContent": {
    "youtube": {
      "title": "Quantum Leap: The Computer That Changes Everything",
      "description": "Innovate Inc. just unveiled a new quantum computer. Here is what it means for science and computing.",
      "keywords": ["quantum computing", "Innovate Inc", "supercomputer", "technology"],
      "hashtags": ["#QuantumComputing", "#TechNews"]
    },
    "facebook": {"post": "Big news from the tech world: Innovate Inc. has announced a new quantum computer. #QuantumComputing #Tech"},
    "instagram": {"post": "The future is here. Innovate Inc. revealed its quantum computer. #QuantumComputing #Innovation #FutureTech"}
  },
  "videoImagePrompts": [
    "A quantum circuit schematic on a holographic display.",
    "Close-up of a cryogenic chamber cooling a quantum processor.",
    "An abstract visualization of data flowing through entangled qubits."
  ],
  "storyVideoPrompts": [
    "A slow panning shot across a high-tech lab, settling on a glowing quantum computer with soft lens flares."
  ]
}"""

_SINGLE_STORY_FIELDS = """\
1. "script": A 3-4 sentence news summary written for a news anchor. Report the news directly. Do NOT mention the source.
2. "topic": The single most relevant topic from this list: {topics}.
3. "backgroundDescription": A short, vivid description of a background image behind the news anchor. It must be safe for work and must NOT describe people, graphic events or violence. Focus on locations, objects or abstract concepts.
4. "postImageDescription": A detailed prompt for an AI image generator to create an eye-catching 1:1 social media post image about the story. It MUST include a short high-impact text phrase (like 'BREAKING NEWS') rendered on the image.
5. "socialMediaContent": An object with "youtube" (title, description, keywords[], hashtags[]), "facebook" (post) and "instagram" (post).
6. "videoImagePrompts": An array of 3-4 detailed, photorealistic image prompts for 16:9 video B-roll. Describe scenes, objects or abstract concepts. No people or text.
7. "storyVideoPrompts": An array of 1-2 cinematic text-to-video prompts based on the script, describing actions, camera movements and mood."""


def _topic_list() -> str:
    return ", ".join(NewsTopic.choices())


def build_url_prompt(url: str, has_image: bool = False) -> str:
    """Instructions for a single story read from an article URL."""
    sections = [f'Analyze the content at the URL "{url}". Based on the article, generate a response in a specific JSON format.']
    if has_image:
        sections.append(
            "An image has also been provided. Use this image as the PRIMARY visual context. "
            "The 'backgroundDescription' and 'postImageDescription' MUST be derived from this image, "
            "while the script still reports the news article."
        )
    sections.append(
        "The JSON object must contain these top-level properties:\n"
        + _SINGLE_STORY_FIELDS.format(topics=_topic_list())
    )
    sections.append(
        "CRITICAL INSTRUCTIONS:\n"
        "- Your entire response MUST be a single, raw, valid JSON object.\n"
        "- Do NOT include any text, conversation or markdown outside of the JSON object."
    )
    sections.append("EXAMPLE OF A CORRECTLY FORMATTED RESPONSE:\n" + _SINGLE_STORY_EXAMPLE)
    return "\n\n".join(sections)


def build_headline_prompt(headline: str, language: str | None = None, has_image: bool = False) -> str:
    """Instructions for a single story expanded from a headline."""
    sections = [
        "You are a creative news content generator. You will be given a news headline, and optionally "
        "an image. Expand the headline into a full news segment."
    ]
    if has_image:
        sections.append(
            "An image has been provided. It is the primary source of visual context; the headline gives "
            "additional context. The 'backgroundDescription' and 'postImageDescription' MUST be based on the "
            "image, and the 'script' should connect the headline to the image."
        )
    language_hint = f" The headline is written in {language}." if language else ""
    sections.append(
        f"First, if the headline is not in English, translate it to English.{language_hint} Then use the "
        "English headline (and the image if provided) to generate the content, following the JSON schema exactly."
    )
    sections.append("Fields:\n" + _SINGLE_STORY_FIELDS.format(topics=_topic_list()))
    sections.append(f'The user-provided headline is: "{headline}"')
    return "\n\n".join(sections)


def build_multi_story_prompt(
    headlines: Sequence[str],
    has_images: bool = False,
    translated_language: str = "Urdu",
) -> str:
    """Instructions for a unified roundup of 2-3 headlines."""
    count = len(headlines)
    numbered = "\n".join(f'{i}. "{headline}"' for i, headline in enumerate(headlines, 1))
    sections = [
        f"You are an expert news producer creating a content package for a YouTube video covering "
        f"{count} stories.\nThe headlines are:\n{numbered}"
    ]
    if has_images:
        sections.append(
            "Images have been provided for one or more headlines. Use them as the primary visual inspiration. "
            "The 'thumbnailPrompt' should describe a single compelling scene or collage that creatively "
            "combines elements from the provided images."
        )
    sections.append(dedent(f"""\
        Fields:
        1. "introScript": A short, engaging 15-20 second introduction that hooks the viewer by teasing every story.
        2. "mainScript": A detailed long-form news script covering each of the {count} stories in depth, with clear separators.
        3. "translatedScript": A complete and accurate {translated_language} translation of the entire mainScript.
        4. "thumbnailPrompt": A prompt for an eye-catching 16:9 YouTube thumbnail. It MUST include a short high-impact text phrase (like '{count} HUGE STORIES') rendered on the thumbnail.
        5. "postImageDescriptions": An array of exactly {count} short (5-7 words) descriptions, one per story in headline order, each for a photorealistic square post image with a short catchy text phrase.
        6. "socialMediaContent": An object with "youtube" (title, description, keywords[], hashtags[]), "facebook" (post) and "instagram" (post).
        7. "videoImagePrompts": An array of 5-6 detailed, photorealistic image prompts for 16:9 video B-roll. No people or text.
        8. "introVideoPrompt": One dynamic, cinematic text-to-video prompt for the intro (e.g. fast-paced montage, dramatic zoom).
        9. "storyVideoPrompts": An array of exactly {count} cinematic text-to-video prompts, one per story in headline order."""))
    sections.append(
        "Translate any non-English headlines to English before processing. Your entire response MUST be a "
        "single, raw, valid JSON object that strictly follows the schema. The 'postImageDescriptions' and "
        f"'storyVideoPrompts' arrays MUST have exactly {count} items. You must provide the "
        f"{translated_language} translation of the main script."
    )
    return "\n\n".join(sections)


def build_paragraph_prompt(script: str) -> str:
    """Instructions for splitting a script into paragraph video prompts."""
    return dedent("""\
        You are a video production assistant. Break the news script below into logical paragraphs and write a cinematic text-to-video prompt for each paragraph.

        The script is:
        ---
        {script}
        ---

        Each prompt should visually represent its paragraph and describe camera movements, angles, lighting and mood, suitable for a modern text-to-video generator.

        Return a JSON object with a "prompts" array. Each element has a "paragraph" (the paragraph text) and its "prompt".""").format(script=script)


# =============================================================================
# IMAGE PROMPTS
# =============================================================================

def anchor_landscape_prompt(base_anchor_prompt: str, background: str) -> str:
    return f"{base_anchor_prompt}, with a background of {background}"


def anchor_portrait_prompt(base_anchor_prompt: str, background: str) -> str:
    return f"{ANCHOR_PORTRAIT_PREFIX} {anchor_landscape_prompt(base_anchor_prompt, background)}"


def anchor_fallback_prompt(base_anchor_prompt: str, portrait: bool = False) -> str:
    """Anchor prompt with the generic studio background in place of the story one."""
    prompt = f"{anchor_landscape_prompt(base_anchor_prompt, GENERIC_STUDIO_BACKGROUND)}."
    if portrait:
        return f"{ANCHOR_PORTRAIT_PREFIX} {prompt}"
    return prompt


def reported_fallback_prompt(fallback_prompt: str) -> str:
    return f"{fallback_prompt} {FALLBACK_NOTE}"


def post_image_prompt(description: str) -> str:
    return POST_IMAGE_TEMPLATE.format(description=description)


def roundup_post_image_prompt(description: str) -> str:
    return ROUNDUP_POST_IMAGE_TEMPLATE.format(description=description)


def roundup_thumbnail_fallback_prompt(descriptions: Sequence[str | None]) -> str:
    theme = (descriptions[0] if descriptions else None) or ROUNDUP_THUMBNAIL_FALLBACK_THEME
    return ROUNDUP_THUMBNAIL_FALLBACK_TEMPLATE.format(theme=theme)


def b_roll_prompt(prompt: str) -> str:
    return f"{prompt.rstrip().rstrip('.')}. {B_ROLL_SUFFIX}"


# =============================================================================
# SCRIPT LAYOUT
# =============================================================================

def compose_roundup_script(intro_script: str, main_script: str) -> str:
    """Join intro and main script into the single narration text."""
    return (
        f"{INTRO_MARKER}\n{intro_script}\n\n{SCRIPT_SECTION_SEPARATOR}\n\n"
        f"{MAIN_SCRIPT_MARKER}\n{main_script}"
    )


def main_script_section(script: str) -> str:
    """Return the text after the main-script marker, or the whole script."""
    _, marker, rest = script.partition(MAIN_SCRIPT_MARKER)
    if not marker:
        return script.strip()
    return rest.strip()
