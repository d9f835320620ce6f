"""Text generation provider backed by the Gemini API (google-genai)."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel

from ..services.events import AIEventCallback, EventEmitter
from .client import create_client
from .config import StudioSettings

if TYPE_CHECKING:
    from ..content.models import ReferenceImage

_logger = logging.getLogger("ai_calls")


class TextProvider:
    """Single-call text/JSON generation.

    One ``generate`` call is one round-trip to the model. Retries, JSON
    extraction and validation are the caller's job.

    Usage:
        provider = TextProvider(settings)
        raw = await provider.generate(prompt, response_model=SingleStoryResponse)
    """

    def __init__(
        self,
        settings: StudioSettings,
        client: genai.Client | None = None,
        event_callback: AIEventCallback = None,
    ):
        """Initialize the text provider.

        Args:
            settings: Studio settings (credential and model name).
            client: Pre-built genai client. Created lazily when omitted.
            event_callback: Optional callback for AI events.
        """
        self.settings = settings
        self._client = client
        self._events = EventEmitter(event_callback)
        self._total_calls = 0

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = create_client(self.settings)
        return self._client

    @staticmethod
    def _build_config(
        temperature: float,
        response_model: type[BaseModel] | None,
        search: bool,
    ) -> types.GenerateContentConfig:
        config: dict[str, Any] = {"temperature": temperature}
        # The search tool and a response schema cannot be combined
        if search:
            config["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        elif response_model is not None:
            config["response_mime_type"] = "application/json"
            config["response_schema"] = response_model
        return types.GenerateContentConfig(**config)

    async def generate(
        self,
        prompt: str,
        images: Sequence["ReferenceImage"] = (),
        response_model: type[BaseModel] | None = None,
        search: bool = False,
        temperature: float = 0.7,
        task: str | None = None,
    ) -> str:
        """Generate a text completion.

        Args:
            prompt: Instruction block sent as the first content part.
            images: Reference images attached as inline parts after the prompt.
            response_model: Pydantic model used as the response schema.
            search: Enable Google Search grounding (disables the schema).
            temperature: Sampling temperature.
            task: Optional task name for logs and events.

        Returns:
            The raw response text (may be empty).
        """
        client = self._get_client()
        model = self.settings.text_model
        contents: list[Any] = [prompt]
        contents.extend(
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type) for image in images
        )
        config = self._build_config(temperature, response_model, search)

        await self._events.emit(
            "text_call",
            model=model,
            task=task,
            prompt_preview=prompt[:200],
            images=len(images),
            search=search,
            structured=response_model is not None and not search,
        )
        _logger.info(
            f"AI_REQUEST | model:{model} | task:{task} | images:{len(images)} | search:{search}\n"
            f"--- PROMPT ---\n{prompt}\n"
            f"--- END REQUEST ---"
        )

        start_time = time.time()
        response = await client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
        result = response.text or ""
        duration = time.time() - start_time
        self._total_calls += 1

        _logger.info(
            f"AI_RESPONSE | model:{model} | task:{task} | duration:{duration:.2f}s\n"
            f"--- RESPONSE ---\n{result}\n"
            f"--- END RESPONSE ---"
        )
        await self._events.emit(
            "text_response",
            model=model,
            task=task,
            response_preview=result[:200],
            duration_seconds=duration,
            total_calls=self._total_calls,
        )
        return result
