"""Stateless service for studio commands.

Turns CLI params into core requests, runs them and writes results to
disk. Every method returns a Result instead of raising.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...content import (
    HeadlineRequest,
    MultiHeadlineRequest,
    ParagraphPrompt,
    StudioResult,
    UrlRequest,
    create_studio,
    load_reference_image,
)
from ...errors import AllImagesFailed
from ...providers.config import StudioSettings
from ...services.events import AIEventCallback
from ..core.types import Failure, Result, Success
from .params import BRollParams, MultiStoryParams, ParagraphParams, SingleStoryParams, ThumbnailParams

_INDEXED_ROLE = re.compile(r"^(\w+)\[(\d+)\]$")


@dataclass(frozen=True)
class StudioRunOutput:
    """A finished run plus the files written for it."""

    result: StudioResult
    output_dir: Optional[Path] = None
    files: list[Path] = field(default_factory=list)


def image_filename(role: str) -> str:
    """Map an image role to a file name (``bRoll[0]`` -> ``b_roll_01.jpg``)."""
    match = _INDEXED_ROLE.match(role)
    if match:
        name, index = match.groups()
        return f"{_snake(name)}_{int(index) + 1:02d}.jpg"
    return f"{_snake(role)}.jpg"


def _snake(name: str) -> str:
    return re.sub(r"(?<=[a-z])([A-Z])", r"_\1", name).lower()


def save_studio_result(result: StudioResult, output_dir: Path) -> list[Path]:
    """Write images, ``bundle.json`` and ``run.json`` into ``output_dir``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    files: list[Path] = []

    for role, data in result.images.roles().items():
        path = output_dir / image_filename(role)
        path.write_bytes(data)
        files.append(path)

    bundle_path = output_dir / "bundle.json"
    with open(bundle_path, "w", encoding="utf-8") as f:
        json.dump(result.bundle.model_dump(mode="json", by_alias=True), f, indent=2, ensure_ascii=False)
    files.append(bundle_path)

    run_info = {
        "finalPrompt": result.images.final_prompt,
        "fallbackUsed": result.images.fallback_used,
        "warnings": list(result.warnings),
        "images": [path.name for path in files if path.suffix == ".jpg"],
        "paragraphPrompts": (
            [p.model_dump() for p in result.paragraph_prompts]
            if result.paragraph_prompts is not None
            else None
        ),
    }
    run_path = output_dir / "run.json"
    with open(run_path, "w", encoding="utf-8") as f:
        json.dump(run_info, f, indent=2, ensure_ascii=False)
    files.append(run_path)
    return files


def save_images(images: list[bytes], output_dir: Path, role: str) -> list[Path]:
    """Write a list of images as ``<role>_NN.jpg``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    files = []
    for index, data in enumerate(images):
        path = output_dir / image_filename(f"{role}[{index}]")
        path.write_bytes(data)
        files.append(path)
    return files


class StudioService:
    """Stateless service for studio generation.

    All state is passed via params - no instance state.
    """

    async def generate_single(
        self,
        params: SingleStoryParams,
        settings: StudioSettings,
        event_callback: AIEventCallback = None,
    ) -> Result[StudioRunOutput]:
        """Run a single-story generation and save it when an output dir is set."""
        try:
            image = await load_reference_image(params.image) if params.image else None
            if params.url:
                request = UrlRequest(url=params.url, image=image)
            else:
                request = HeadlineRequest(headline=params.headline, language=params.language, image=image)

            studio = create_studio(settings, event_callback=event_callback)
            result = await studio.generate_single(request, include_paragraph_prompts=params.paragraphs)
            return Success(self._save(result, params.output_dir))

        except AllImagesFailed as e:
            return Failure(f"Failed to generate content. {e}", {"bundle": e.bundle})
        except Exception as e:
            return Failure(f"Failed to generate content. {e}")

    async def generate_multi(
        self,
        params: MultiStoryParams,
        settings: StudioSettings,
        event_callback: AIEventCallback = None,
    ) -> Result[StudioRunOutput]:
        """Run a roundup generation and save it when an output dir is set."""
        try:
            images = [
                await load_reference_image(location) if location else None
                for location in params.images
            ]
            request = MultiHeadlineRequest(headlines=list(params.headlines), images=images)

            studio = create_studio(settings, event_callback=event_callback)
            result = await studio.generate_multi(request, include_paragraph_prompts=params.paragraphs)
            return Success(self._save(result, params.output_dir))

        except AllImagesFailed as e:
            return Failure(f"Failed to generate multi-story content. {e}", {"bundle": e.bundle})
        except Exception as e:
            return Failure(f"Failed to generate multi-story content. {e}")

    async def regenerate_thumbnail(
        self,
        params: ThumbnailParams,
        settings: StudioSettings,
        event_callback: AIEventCallback = None,
    ) -> Result[Optional[Path]]:
        """Regenerate one thumbnail. Returns the saved path (None without output dir)."""
        try:
            studio = create_studio(settings, event_callback=event_callback)
            image = await studio.regenerate_thumbnail(params.prompt)
        except Exception as e:
            return Failure(f"Failed to regenerate thumbnail. {e}")

        if image is None:
            return Failure(
                "Failed to regenerate thumbnail. The image generation failed. This is often due to "
                "safety filters. Please try revising your prompt to be more general or less sensitive."
            )
        if params.output_dir is None:
            return Success(None)
        params.output_dir.mkdir(parents=True, exist_ok=True)
        path = params.output_dir / image_filename("thumbnail")
        path.write_bytes(image)
        return Success(path)

    async def generate_b_roll(
        self,
        params: BRollParams,
        settings: StudioSettings,
        event_callback: AIEventCallback = None,
    ) -> Result[tuple[int, list[Path]]]:
        """Generate a B-roll batch. Returns (images generated, files written).

        Partial batches are a success.
        """
        try:
            studio = create_studio(settings, event_callback=event_callback)
            images = await studio.generate_b_roll(list(params.prompts))
        except Exception as e:
            return Failure(f"Failed to generate B-Roll images. {e}")

        if params.output_dir is None:
            return Success((len(images), []))
        return Success((len(images), save_images(images, params.output_dir, "bRoll")))

    async def generate_paragraph_prompts(
        self,
        params: ParagraphParams,
        settings: StudioSettings,
        event_callback: AIEventCallback = None,
    ) -> Result[list[ParagraphPrompt]]:
        """Split a script file into paragraph video prompts."""
        try:
            script = params.script_path.read_text(encoding="utf-8")
            studio = create_studio(settings, event_callback=event_callback)
            return Success(await studio.generate_paragraph_prompts(script, roundup=params.roundup))
        except Exception as e:
            return Failure(f"Failed to generate detailed video prompts. {e}")

    def _save(self, result: StudioResult, output_dir: Optional[Path]) -> StudioRunOutput:
        if output_dir is None:
            return StudioRunOutput(result=result)
        return StudioRunOutput(result=result, output_dir=output_dir, files=save_studio_result(result, output_dir))
