"""Image generation provider backed by Imagen through google-genai."""

from __future__ import annotations

import logging
import time

from google import genai
from google.genai import types

from ..constants import ASPECT_LANDSCAPE, AspectRatio
from ..services.events import AIEventCallback, EventEmitter
from .client import create_client
from .config import StudioSettings

_logger = logging.getLogger("ai_calls")


class ImageProvider:
    """One JPEG per call at a requested aspect ratio.

    Returns ``None`` when the backend answers without an image, which is
    what happens when a prompt is rejected by the safety filters.

    Usage:
        provider = ImageProvider(settings)
        image_bytes = await provider.generate("A quiet city park at dawn", "16:9")
    """

    def __init__(
        self,
        settings: StudioSettings,
        client: genai.Client | None = None,
        event_callback: AIEventCallback = None,
    ):
        self.settings = settings
        self._client = client
        self._events = EventEmitter(event_callback)
        self._total_calls = 0

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = create_client(self.settings)
        return self._client

    async def generate(
        self,
        prompt: str,
        aspect_ratio: AspectRatio = ASPECT_LANDSCAPE,
        task: str | None = None,
    ) -> bytes | None:
        """Generate a single image.

        Args:
            prompt: Full image prompt.
            aspect_ratio: One of ``16:9``, ``9:16`` or ``1:1``.
            task: Optional task name for logs and events.

        Returns:
            JPEG bytes, or None when no image came back.
        """
        client = self._get_client()
        model = self.settings.image_model

        await self._events.emit(
            "image_call",
            model=model,
            task=task,
            aspect_ratio=aspect_ratio,
            prompt_preview=prompt[:200],
        )
        _logger.info(f"IMAGE_REQUEST | model:{model} | task:{task} | aspect:{aspect_ratio} | prompt:{prompt}")

        start_time = time.time()
        response = await client.aio.models.generate_images(
            model=model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/jpeg",
                aspect_ratio=aspect_ratio,
            ),
        )
        duration = time.time() - start_time
        self._total_calls += 1

        generated = response.generated_images or []
        image_bytes = None
        if generated and generated[0].image is not None:
            image_bytes = generated[0].image.image_bytes

        if not image_bytes:
            _logger.warning(f"IMAGE_MISSING | model:{model} | task:{task} | duration:{duration:.2f}s")
            await self._events.emit("image_missing", model=model, task=task, aspect_ratio=aspect_ratio)
            return None

        _logger.info(
            f"IMAGE_RESPONSE | model:{model} | task:{task} | duration:{duration:.2f}s | bytes:{len(image_bytes)}"
        )
        await self._events.emit(
            "image_response",
            model=model,
            task=task,
            aspect_ratio=aspect_ratio,
            duration_seconds=duration,
            image_size_bytes=len(image_bytes),
            total_calls=self._total_calls,
        )
        return image_bytes
