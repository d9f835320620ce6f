"""Multi-story roundup generation.

Fuses 2-3 headlines into one intro + main script, a translated script,
one thumbnail prompt and per-story post descriptions and video prompts.
Validation is strict: nothing is substituted when a field is missing.
"""

from __future__ import annotations

import logging

from ..constants import TEMPERATURE_MULTI_STORY
from ..errors import IncompleteGenerationResult
from ..providers.text import TextProvider
from ..services.events import AIEventCallback
from ..services.retry import RetryableCaller
from .generator import StructuredGenerator
from .models import ContentBundle, MultiHeadlineRequest, NewsTopic
from .parsing import parse_response
from .prompts import build_multi_story_prompt, compose_roundup_script
from .responses import MultiStoryResponse

_logger = logging.getLogger("ai_calls")


class MultiStoryContentGenerator(StructuredGenerator):
    """Builds a roundup bundle from several headlines."""

    def __init__(
        self,
        text_provider: TextProvider,
        caller: RetryableCaller,
        translated_language: str = "Urdu",
        event_callback: AIEventCallback = None,
    ):
        super().__init__(text_provider, caller, event_callback)
        self.translated_language = translated_language

    async def generate(self, request: MultiHeadlineRequest) -> ContentBundle:
        """Generate and validate roundup content.

        Raises:
            RemoteCallFailed: The generation call failed after retries.
            MalformedResponse: The response holds no parseable JSON object.
            IncompleteGenerationResult: A required field is missing or an
                array length does not match the number of headlines.
        """
        images = request.attached_images
        raw = await self._request(
            build_multi_story_prompt(
                request.headlines,
                has_images=bool(images),
                translated_language=self.translated_language,
            ),
            task="multi_story",
            failure_message="Could not process headlines",
            temperature=TEMPERATURE_MULTI_STORY,
            response_model=MultiStoryResponse,
            images=images,
        )

        response = parse_response(raw, MultiStoryResponse)
        self._check_story_counts(response, request.story_count, raw)

        return ContentBundle(
            script=compose_roundup_script(response.intro_script.strip(), response.main_script.strip()),
            topic=NewsTopic.DEFAULT,
            intro_script=response.intro_script.strip(),
            main_script=response.main_script.strip(),
            translated_script=response.translated_script.strip(),
            translated_language=self.translated_language,
            thumbnail_prompt=response.thumbnail_prompt.strip(),
            post_image_descriptions=list(response.post_image_descriptions),
            social_media_content=response.social_media_content,
            video_image_prompts=list(response.video_image_prompts),
            intro_video_prompt=response.intro_video_prompt.strip(),
            story_video_prompts=list(response.story_video_prompts),
        )

    @staticmethod
    def _check_story_counts(response: MultiStoryResponse, expected: int, raw: str) -> None:
        mismatched = [
            f"{name} has {len(items)} items, expected {expected}"
            for name, items in (
                ("postImageDescriptions", response.post_image_descriptions),
                ("storyVideoPrompts", response.story_video_prompts),
            )
            if len(items) != expected
        ]
        if mismatched:
            message = "AI returned incomplete data structure for multi-headline request: " + "; ".join(mismatched)
            _logger.error(message)
            raise IncompleteGenerationResult(message, raw_response=raw)
