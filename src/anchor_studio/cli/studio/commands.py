"""Studio CLI commands - thin wrappers orchestrating params, validation, display, and service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from ..core.console import console
from ..core.progress import StudioProgressDisplay
from ..core.types import Failure
from .display import (
    show_broll_result,
    show_multi_config,
    show_paragraph_prompts,
    show_single_config,
    show_studio_error,
    show_studio_result,
    show_thumbnail_result,
)
from .params import BRollParams, MultiStoryParams, ParagraphParams, SingleStoryParams, ThumbnailParams
from .service import StudioService
from .validators import (
    validate_broll_params,
    validate_multi_params,
    validate_paragraph_params,
    validate_settings,
    validate_single_params,
    validate_thumbnail_params,
)

_CONFIG_HELP = "Studio YAML config (default: config/studio.yaml)"


def _load_settings(config_path: Optional[Path]):
    settings = validate_settings(config_path)
    if isinstance(settings, Failure):
        show_studio_error(console, settings.error, settings.details)
        raise typer.Exit(1)
    return settings.value


def single(
    headline: Optional[str] = typer.Option(None, "--headline", "-H", help="News headline (any language)"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="News article URL"),
    image: Optional[str] = typer.Option(None, "--image", "-i", help="Reference image path or URL"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language of the headline"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for images and bundle.json"),
    paragraphs: bool = typer.Option(False, "--paragraphs", help="Also generate paragraph video prompts"),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate a news segment from one headline or article URL."""
    params = SingleStoryParams.from_cli(
        headline=headline,
        url=url,
        image=image,
        language=language,
        output=output,
        paragraphs=paragraphs,
        config=config,
    )

    validation = validate_single_params(params)
    if isinstance(validation, Failure):
        show_studio_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    settings = _load_settings(params.config_path)
    show_single_config(console, params)

    progress = StudioProgressDisplay(console)
    result = asyncio.run(StudioService().generate_single(params, settings, progress.handle_event))
    progress.show_summary()

    if isinstance(result, Failure):
        show_studio_error(console, result.error, result.details)
        raise typer.Exit(1)
    show_studio_result(console, result.value)


def multi(
    headline1: str = typer.Argument(..., help="First headline"),
    headline2: str = typer.Argument(..., help="Second headline"),
    headline3: Optional[str] = typer.Argument(None, help="Optional third headline"),
    image1: Optional[str] = typer.Option(None, "--image1", help="Reference image for headline 1"),
    image2: Optional[str] = typer.Option(None, "--image2", help="Reference image for headline 2"),
    image3: Optional[str] = typer.Option(None, "--image3", help="Reference image for headline 3"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for images and bundle.json"),
    paragraphs: bool = typer.Option(False, "--paragraphs", help="Also generate paragraph video prompts"),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate a 2-3 story news roundup."""
    params = MultiStoryParams.from_cli(
        headline1=headline1,
        headline2=headline2,
        headline3=headline3,
        image1=image1,
        image2=image2,
        image3=image3,
        output=output,
        paragraphs=paragraphs,
        config=config,
    )

    validation = validate_multi_params(params)
    if isinstance(validation, Failure):
        show_studio_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    settings = _load_settings(params.config_path)
    show_multi_config(console, params)

    progress = StudioProgressDisplay(console)
    result = asyncio.run(StudioService().generate_multi(params, settings, progress.handle_event))
    progress.show_summary()

    if isinstance(result, Failure):
        show_studio_error(console, result.error, result.details)
        raise typer.Exit(1)
    show_studio_result(console, result.value)


def thumbnail(
    prompt: str = typer.Argument(..., help="Edited thumbnail prompt"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for thumbnail.jpg"),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Regenerate a 16:9 roundup thumbnail from an edited prompt."""
    params = ThumbnailParams.from_cli(prompt=prompt, output=output, config=config)

    validation = validate_thumbnail_params(params)
    if isinstance(validation, Failure):
        show_studio_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    settings = _load_settings(params.config_path)
    progress = StudioProgressDisplay(console)
    result = asyncio.run(StudioService().regenerate_thumbnail(params, settings, progress.handle_event))

    if isinstance(result, Failure):
        show_studio_error(console, result.error, result.details)
        raise typer.Exit(1)
    show_thumbnail_result(console, result.value)


def broll(
    prompts: List[str] = typer.Argument(..., help="One or more B-roll image prompts"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for b_roll_NN.jpg files"),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate 16:9 B-roll images, one per prompt (best effort)."""
    params = BRollParams.from_cli(prompts=prompts, output=output, config=config)

    validation = validate_broll_params(params)
    if isinstance(validation, Failure):
        show_studio_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    settings = _load_settings(params.config_path)
    progress = StudioProgressDisplay(console)
    result = asyncio.run(StudioService().generate_b_roll(params, settings, progress.handle_event))
    progress.show_summary()

    if isinstance(result, Failure):
        show_studio_error(console, result.error, result.details)
        raise typer.Exit(1)
    generated, files = result.value
    show_broll_result(console, len(params.prompts), generated, files)


def paragraphs(
    script_file: Path = typer.Argument(..., help="Text file holding a finished script"),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
    roundup: bool = typer.Option(False, "--roundup", help="Script is a roundup; use only the FULL SCRIPT section"),
) -> None:
    """Split a finished script into paragraphs with text-to-video prompts."""
    params = ParagraphParams.from_cli(script_file=script_file, config=config, roundup=roundup)

    validation = validate_paragraph_params(params)
    if isinstance(validation, Failure):
        show_studio_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    settings = _load_settings(params.config_path)
    result = asyncio.run(StudioService().generate_paragraph_prompts(params, settings))

    if isinstance(result, Failure):
        show_studio_error(console, result.error, result.details)
        raise typer.Exit(1)
    show_paragraph_prompts(console, result.value)
