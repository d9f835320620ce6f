"""Image orchestration for a generation run.

All image calls are strictly sequential and separated by the pacer's
delay. A primary attempt that yields no image (after retries) gets one
fallback attempt with a generic prompt; a role that still has no image
is recorded as absent. Only a batch where every role is absent raises.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..constants import (
    ASPECT_LANDSCAPE,
    ASPECT_PORTRAIT,
    ASPECT_SQUARE,
    BASE_ANCHOR_PROMPT,
    ROUNDUP_POST_FALLBACK_PROMPT,
    AspectRatio,
)
from ..errors import AllImagesFailed, ConfigurationError
from ..providers.image import ImageProvider
from ..services.events import AIEventCallback, EventEmitter
from ..services.pacing import CallPacer
from ..services.retry import RetryableCaller
from .models import ImageSet
from .prompts import (
    anchor_fallback_prompt,
    anchor_landscape_prompt,
    anchor_portrait_prompt,
    b_roll_prompt,
    post_image_prompt,
    reported_fallback_prompt,
    roundup_post_image_prompt,
    roundup_thumbnail_fallback_prompt,
)

_logger = logging.getLogger("image_pipeline")


class ImageOrchestrator:
    """Turns descriptions into images for single stories, roundups and B-roll.

    Usage:
        orchestrator = ImageOrchestrator(image_provider, caller, CallPacer(15.0))
        images = await orchestrator.generate_single_story_images(background, post_description)
    """

    def __init__(
        self,
        image_provider: ImageProvider,
        caller: RetryableCaller,
        pacer: CallPacer,
        base_anchor_prompt: str = BASE_ANCHOR_PROMPT,
        event_callback: AIEventCallback = None,
    ):
        self._images = image_provider
        self._caller = caller
        self._pacer = pacer
        self.base_anchor_prompt = base_anchor_prompt
        self._events = EventEmitter(event_callback)

    async def _attempt(self, prompt: str, aspect_ratio: AspectRatio, role: str) -> bytes | None:
        """One retried image call. Failures after retries count as no image."""
        try:
            return await self._caller.call(
                lambda: self._images.generate(prompt, aspect_ratio, task=role),
                label=f"image:{role}",
            )
        except ConfigurationError:
            raise
        except Exception as e:
            _logger.error(f"IMAGE_FAILED | role:{role} | aspect:{aspect_ratio} | error:{e}")
            await self._events.emit("image_error", role=role, aspect_ratio=aspect_ratio, error=str(e)[:200])
            return None

    async def _fallback(self, prompt: str, aspect_ratio: AspectRatio, role: str) -> bytes | None:
        """Pace, then retry a role once with a generic prompt."""
        _logger.warning(f"IMAGE_FALLBACK | role:{role} | prompt:{prompt}")
        await self._events.emit("image_fallback", role=role, aspect_ratio=aspect_ratio, prompt=prompt)
        await self._pacer.wait(f"{role} fallback")
        return await self._attempt(prompt, aspect_ratio, role)

    async def generate_single_story_images(self, background: str, post_description: str) -> ImageSet:
        """Generate the 16:9 anchor, the 9:16 anchor and the 1:1 post image.

        Primaries run first in that order; anchor fallbacks follow. The
        returned ``final_prompt`` is the prompt behind the 16:9 anchor.

        Raises:
            AllImagesFailed: All three roles are absent after fallbacks.
        """
        base = self.base_anchor_prompt
        landscape_prompt = anchor_landscape_prompt(base, background)
        final_prompt = landscape_prompt
        fallback_used = False

        _logger.info("Generating 16:9 anchor image")
        anchor_16x9 = await self._attempt(landscape_prompt, ASPECT_LANDSCAPE, "anchor16x9")

        await self._pacer.wait("anchor9x16")
        _logger.info("Generating 9:16 anchor image")
        anchor_9x16 = await self._attempt(anchor_portrait_prompt(base, background), ASPECT_PORTRAIT, "anchor9x16")

        await self._pacer.wait("postImage")
        _logger.info("Generating 1:1 post image")
        post_image = await self._attempt(post_image_prompt(post_description), ASPECT_SQUARE, "postImage")

        if anchor_16x9 is None:
            fallback = anchor_fallback_prompt(base)
            anchor_16x9 = await self._fallback(fallback, ASPECT_LANDSCAPE, "anchor16x9")
            final_prompt = reported_fallback_prompt(fallback)
            fallback_used = True

        if anchor_9x16 is None:
            fallback = anchor_fallback_prompt(base, portrait=True)
            anchor_9x16 = await self._fallback(fallback, ASPECT_PORTRAIT, "anchor9x16")
            fallback_used = True

        if anchor_16x9 is None and anchor_9x16 is None and post_image is None:
            raise AllImagesFailed(
                "All image generation attempts failed. The topic may be too sensitive for the image "
                "safety filters or there may be a persistent API issue."
            )

        return ImageSet(
            anchor_16x9=anchor_16x9,
            anchor_9x16=anchor_9x16,
            post_images=(post_image,),
            final_prompt=final_prompt,
            fallback_used=fallback_used,
        )

    async def generate_roundup_images(
        self,
        thumbnail_prompt: str,
        descriptions: Sequence[str | None],
    ) -> ImageSet:
        """Generate the 16:9 thumbnail, then one 1:1 post image per story.

        Empty descriptions are recorded as absent without a call or a delay.

        Raises:
            AllImagesFailed: The thumbnail and every post image are absent.
        """
        _logger.info("Generating 16:9 roundup thumbnail")
        thumbnail = await self._attempt(thumbnail_prompt, ASPECT_LANDSCAPE, "thumbnail")
        fallback_used = False
        if thumbnail is None:
            thumbnail = await self._fallback(
                roundup_thumbnail_fallback_prompt(descriptions), ASPECT_LANDSCAPE, "thumbnail"
            )
            fallback_used = True

        await self._pacer.wait("postImages")

        post_images: list[bytes | None] = []
        last_index = len(descriptions) - 1
        for index, description in enumerate(descriptions):
            role = f"postImage[{index}]"
            if not description or not description.strip():
                _logger.info(f"Skipping {role}: empty description")
                post_images.append(None)
                continue

            _logger.info(f"Generating 1:1 post image for: {description}")
            image = await self._attempt(roundup_post_image_prompt(description), ASPECT_SQUARE, role)
            if image is None:
                image = await self._fallback(ROUNDUP_POST_FALLBACK_PROMPT, ASPECT_SQUARE, role)
                fallback_used = True
            post_images.append(image)

            if index < last_index:
                await self._pacer.wait("postImages")

        if thumbnail is None and all(image is None for image in post_images):
            raise AllImagesFailed(
                "All image generation attempts, including fallbacks, have failed for the multi-story "
                "roundup. This might be due to persistent safety filters or a network issue. "
                "Please try different headlines."
            )

        return ImageSet(
            thumbnail=thumbnail,
            post_images=tuple(post_images),
            final_prompt=thumbnail_prompt,
            fallback_used=fallback_used,
        )

    async def generate_b_roll(self, prompts: Sequence[str], after_main_images: bool = False) -> list[bytes]:
        """Generate one 16:9 B-roll image per prompt, best effort.

        Failed or empty prompts contribute nothing; the order of the
        remaining images follows the input order. With ``after_main_images``
        the first call is paced as well, since a main image call precedes it.
        """
        images: list[bytes] = []
        calls = 0
        for index, prompt in enumerate(prompts):
            role = f"bRoll[{index}]"
            if not prompt or not prompt.strip():
                _logger.warning(f"Skipping {role}: empty prompt")
                continue
            if calls or after_main_images:
                await self._pacer.wait("bRoll")
            calls += 1

            image = await self._attempt(b_roll_prompt(prompt), ASPECT_LANDSCAPE, role)
            if image is None:
                _logger.warning(f"No B-roll image for prompt: {prompt}")
                continue
            images.append(image)

        _logger.info(f"B-roll batch finished: {len(images)}/{len(prompts)} images")
        return images

    async def regenerate_thumbnail(self, prompt: str) -> bytes | None:
        """Regenerate a 16:9 thumbnail from an edited prompt.

        One retried attempt, no fallback. Returns None if the backend
        returned no image.

        Raises:
            ValueError: If the prompt is empty.
            Exception: The remote error itself once retries are spent.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Thumbnail prompt is empty. Cannot regenerate.")
        try:
            return await self._caller.call(
                lambda: self._images.generate(prompt.strip(), ASPECT_LANDSCAPE, task="thumbnail"),
                label="image:thumbnail_regenerate",
            )
        except Exception as e:
            _logger.error(f"Thumbnail regeneration failed: {e}")
            raise
