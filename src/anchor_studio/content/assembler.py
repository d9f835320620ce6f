"""Run orchestration: text, then images, then B-roll and paragraph prompts.

A run succeeds as soon as its text step succeeds. Image trouble becomes
warnings on the result, except total failure of the main image batch,
which raises ``AllImagesFailed`` carrying the bundle already produced.
"""

from __future__ import annotations

import asyncio
import logging
import time

from ..errors import AllImagesFailed
from ..providers.config import StudioSettings
from ..providers.image import ImageProvider
from ..providers.text import TextProvider
from ..services.events import AIEventCallback, EventEmitter
from ..services.pacing import CallPacer
from ..services.retry import RetryableCaller
from .generator import TextContentGenerator
from .images import ImageOrchestrator
from .models import (
    ContentBundle,
    ImageSet,
    MultiHeadlineRequest,
    ParagraphPrompt,
    SingleStoryRequest,
    StudioResult,
)
from .multi_story import MultiStoryContentGenerator
from .paragraphs import ParagraphPromptExpander

_logger = logging.getLogger("studio")

THUMBNAIL_MISSING_WARNING = (
    "The YouTube thumbnail could not be generated. This is often due to safety filters. "
    "You can try editing the prompt and regenerating it."
)


class ContentAssembler:
    """Orchestration root for generation runs.

    Runs are serialized: a second ``generate_*`` call waits until the one
    in flight finishes. Thumbnail regeneration and standalone B-roll
    batches wait for the same lock, so image calls never overlap.
    Each run builds a fresh bundle and image set.

    Usage:
        studio = create_studio()
        result = await studio.generate_single(HeadlineRequest(headline="City announces new park"))
        for warning in result.warnings:
            print(warning)
    """

    def __init__(
        self,
        text_generator: TextContentGenerator,
        multi_story_generator: MultiStoryContentGenerator,
        image_orchestrator: ImageOrchestrator,
        paragraph_expander: ParagraphPromptExpander,
        event_callback: AIEventCallback = None,
    ):
        self._text = text_generator
        self._multi = multi_story_generator
        self._images = image_orchestrator
        self._paragraphs = paragraph_expander
        self._events = EventEmitter(event_callback)
        self._lock = asyncio.Lock()

    async def _warn(self, warnings: list[str], message: str) -> None:
        _logger.warning(f"RUN_WARNING | {message}")
        warnings.append(message)
        await self._events.emit("run_warning", message=message)

    async def generate_single(
        self,
        request: SingleStoryRequest,
        include_paragraph_prompts: bool = False,
    ) -> StudioResult:
        """Generate a single-story package.

        Raises:
            RemoteCallFailed, MalformedResponse, IncompleteGenerationResult:
                The text step failed; nothing is returned.
            AllImagesFailed: No anchor or post image could be generated.
                ``bundle`` on the exception holds the text content.
        """
        async with self._lock:
            start_time = time.time()
            await self._events.emit("run_start", mode="single", kind=request.kind)
            _logger.info(f"RUN_START | mode:single | kind:{request.kind}")

            bundle = await self._text.generate(request)
            warnings: list[str] = []

            try:
                images = await self._images.generate_single_story_images(
                    bundle.background_description or "",
                    bundle.post_image_descriptions[0] if bundle.post_image_descriptions else "",
                )
            except AllImagesFailed as e:
                _logger.error(f"RUN_FAILED | mode:single | error:{e}")
                raise AllImagesFailed(str(e), bundle=bundle) from e

            return await self._finish(bundle, images, warnings, include_paragraph_prompts, "single", start_time)

    async def generate_multi(
        self,
        request: MultiHeadlineRequest,
        include_paragraph_prompts: bool = False,
    ) -> StudioResult:
        """Generate a roundup package for 2-3 headlines.

        Raises:
            RemoteCallFailed, MalformedResponse, IncompleteGenerationResult:
                The text step failed; nothing is returned.
            AllImagesFailed: Neither the thumbnail nor any post image could
                be generated. ``bundle`` on the exception holds the text.
        """
        async with self._lock:
            start_time = time.time()
            await self._events.emit("run_start", mode="multi", stories=request.story_count)
            _logger.info(f"RUN_START | mode:multi | stories:{request.story_count}")

            bundle = await self._multi.generate(request)
            warnings: list[str] = []

            try:
                images = await self._images.generate_roundup_images(
                    bundle.thumbnail_prompt or "",
                    bundle.post_image_descriptions,
                )
            except AllImagesFailed as e:
                _logger.error(f"RUN_FAILED | mode:multi | error:{e}")
                raise AllImagesFailed(str(e), bundle=bundle) from e

            if images.thumbnail is None:
                await self._warn(warnings, THUMBNAIL_MISSING_WARNING)

            return await self._finish(bundle, images, warnings, include_paragraph_prompts, "multi", start_time)

    async def _finish(
        self,
        bundle: ContentBundle,
        images: ImageSet,
        warnings: list[str],
        include_paragraph_prompts: bool,
        mode: str,
        start_time: float,
    ) -> StudioResult:
        if bundle.video_image_prompts:
            try:
                b_roll = await self._images.generate_b_roll(bundle.video_image_prompts, after_main_images=True)
                images = images.model_copy(update={"b_roll": tuple(b_roll)})
            except Exception as e:
                await self._warn(warnings, f"Failed to generate B-Roll images. {e}")

        paragraph_prompts = None
        if include_paragraph_prompts:
            try:
                paragraph_prompts = tuple(await self._paragraphs.expand(bundle.script, roundup=bundle.is_roundup))
            except Exception as e:
                await self._warn(warnings, f"Failed to generate detailed video prompts. {e}")

        result = StudioResult(
            bundle=bundle,
            images=images,
            warnings=tuple(warnings),
            paragraph_prompts=paragraph_prompts,
        )
        duration = time.time() - start_time
        _logger.info(
            f"RUN_COMPLETE | mode:{mode} | images:{len(images.roles())} | "
            f"warnings:{len(warnings)} | duration:{duration:.1f}s"
        )
        await self._events.emit(
            "run_complete",
            mode=mode,
            images=len(images.roles()),
            warnings=len(warnings),
            duration_seconds=duration,
        )
        return result

    async def regenerate_thumbnail(self, prompt: str) -> bytes | None:
        """Regenerate a thumbnail from an edited prompt; errors propagate."""
        async with self._lock:
            return await self._images.regenerate_thumbnail(prompt)

    async def generate_b_roll(self, prompts: list[str]) -> list[bytes]:
        """Generate B-roll images for a prompt list; partial results are normal."""
        async with self._lock:
            return await self._images.generate_b_roll(prompts)

    async def generate_paragraph_prompts(self, script: str, roundup: bool = False) -> list[ParagraphPrompt]:
        """Split a finished script into paragraph video prompts."""
        return await self._paragraphs.expand(script, roundup=roundup)


def create_studio(
    settings: StudioSettings | None = None,
    event_callback: AIEventCallback = None,
    client=None,
) -> ContentAssembler:
    """Wire providers, retry, pacing and generators into an assembler.

    Args:
        settings: Studio settings. Loaded from the environment and
            ``config/studio.yaml`` when omitted.
        event_callback: Optional observer for pipeline events.
        client: Pre-built genai client shared by both providers.

    Raises:
        ConfigurationError: If no API key is configured.
    """
    if settings is None:
        from ..providers.config import load_studio_settings

        settings = load_studio_settings()
    else:
        settings.require_api_key()

    caller = RetryableCaller(
        max_retries=settings.max_retries,
        initial_delay=settings.initial_retry_delay_seconds,
        event_callback=event_callback,
    )
    text_provider = TextProvider(settings, client=client, event_callback=event_callback)
    image_provider = ImageProvider(settings, client=client, event_callback=event_callback)

    return ContentAssembler(
        text_generator=TextContentGenerator(text_provider, caller, event_callback),
        multi_story_generator=MultiStoryContentGenerator(
            text_provider,
            caller,
            translated_language=settings.translated_language,
            event_callback=event_callback,
        ),
        image_orchestrator=ImageOrchestrator(
            image_provider,
            caller,
            CallPacer(settings.image_call_delay_seconds),
            base_anchor_prompt=settings.base_anchor_prompt,
            event_callback=event_callback,
        ),
        paragraph_expander=ParagraphPromptExpander(text_provider, caller, event_callback),
        event_callback=event_callback,
    )
