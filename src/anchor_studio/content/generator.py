"""Single-story text generation (URL or headline input).

One structured generation call produces the whole ``ContentBundle``:
script, topic, image descriptions, social copy and video prompts.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import BaseModel

from ..constants import TEMPERATURE_HEADLINE, TEMPERATURE_URL
from ..errors import ConfigurationError, RemoteCallFailed
from ..providers.text import TextProvider
from ..services.events import AIEventCallback, EventEmitter
from ..services.retry import RetryableCaller
from .models import (
    ContentBundle,
    NewsTopic,
    ReferenceImage,
    SingleStoryRequest,
    UrlRequest,
    normalize_topic,
)
from .parsing import parse_response
from .prompts import build_headline_prompt, build_url_prompt
from .responses import SingleStoryResponse

_logger = logging.getLogger("ai_calls")


class StructuredGenerator:
    """Shared plumbing for generators issuing one retried text call."""

    def __init__(
        self,
        text_provider: TextProvider,
        caller: RetryableCaller,
        event_callback: AIEventCallback = None,
    ):
        self._text = text_provider
        self._caller = caller
        self._events = EventEmitter(event_callback)

    async def _request(
        self,
        prompt: str,
        *,
        task: str,
        failure_message: str,
        temperature: float,
        response_model: type[BaseModel] | None = None,
        images: Sequence[ReferenceImage] = (),
        search: bool = False,
    ) -> str:
        """Run one text call through the retry wrapper.

        Remote failures surviving the retries become ``RemoteCallFailed``
        with the backend message appended verbatim.
        """
        try:
            return await self._caller.call(
                lambda: self._text.generate(
                    prompt,
                    images=images,
                    response_model=response_model,
                    search=search,
                    temperature=temperature,
                    task=task,
                ),
                label=task,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            _logger.error(f"AI_FAILED | task:{task} | error:{e}")
            await self._events.emit("text_failed", task=task, error=str(e)[:200])
            raise RemoteCallFailed(f"{failure_message}. Details: {e}") from e


class TextContentGenerator(StructuredGenerator):
    """Builds a single-story bundle from a URL or a headline.

    URL requests without an image enable search grounding so the model
    can read the page. Any attached image drives the visual descriptions.
    """

    async def generate(self, request: SingleStoryRequest) -> ContentBundle:
        """Generate and validate content for one story.

        Raises:
            RemoteCallFailed: The generation call failed after retries.
            MalformedResponse: The response holds no parseable JSON object.
            IncompleteGenerationResult: Required fields missing or mistyped.
        """
        images = [request.image] if request.image is not None else []

        if isinstance(request, UrlRequest):
            raw = await self._request(
                build_url_prompt(str(request.url), has_image=bool(images)),
                task="article_url",
                failure_message="Could not process the article URL",
                temperature=TEMPERATURE_URL,
                response_model=SingleStoryResponse,
                images=images,
                search=not images,
            )
        else:
            raw = await self._request(
                build_headline_prompt(request.headline, request.language, has_image=bool(images)),
                task="headline",
                failure_message="Could not process the headline",
                temperature=TEMPERATURE_HEADLINE,
                response_model=SingleStoryResponse,
                images=images,
            )

        response = parse_response(raw, SingleStoryResponse)
        return self._to_bundle(response)

    def _to_bundle(self, response: SingleStoryResponse) -> ContentBundle:
        topic = normalize_topic(response.topic)
        if topic is NewsTopic.DEFAULT and response.topic.strip().lower() != NewsTopic.DEFAULT.value:
            _logger.warning(f"AI returned an unknown topic: '{response.topic}'. Defaulting to 'default'.")

        return ContentBundle(
            script=response.script.strip(),
            topic=topic,
            background_description=response.background_description.strip(),
            post_image_descriptions=[response.post_image_description.strip()],
            social_media_content=response.social_media_content,
            video_image_prompts=list(response.video_image_prompts),
            story_video_prompts=list(response.story_video_prompts),
        )
