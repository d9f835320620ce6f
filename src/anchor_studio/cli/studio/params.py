"""Immutable parameter dataclasses for studio commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SingleStoryParams:
    """Immutable parameters for single-story generation."""

    headline: Optional[str]
    url: Optional[str]
    image: Optional[str]
    language: Optional[str]
    output_dir: Optional[Path]
    paragraphs: bool
    config_path: Optional[Path]

    @property
    def source(self) -> str:
        return "url" if self.url else "headline"

    @classmethod
    def from_cli(
        cls,
        headline: Optional[str] = None,
        url: Optional[str] = None,
        image: Optional[str] = None,
        language: Optional[str] = None,
        output: Optional[Path] = None,
        paragraphs: bool = False,
        config: Optional[Path] = None,
        **kwargs,
    ) -> "SingleStoryParams":
        """Create from CLI arguments, trimming blank strings to None."""
        return cls(
            headline=_clean(headline),
            url=_clean(url),
            image=_clean(image),
            language=_clean(language),
            output_dir=output,
            paragraphs=paragraphs,
            config_path=config,
        )


@dataclass(frozen=True)
class MultiStoryParams:
    """Immutable parameters for a 2-3 story roundup."""

    headlines: tuple[str, ...]
    images: tuple[Optional[str], ...]
    output_dir: Optional[Path]
    paragraphs: bool
    config_path: Optional[Path]

    @classmethod
    def from_cli(
        cls,
        headline1: str,
        headline2: str,
        headline3: Optional[str] = None,
        image1: Optional[str] = None,
        image2: Optional[str] = None,
        image3: Optional[str] = None,
        output: Optional[Path] = None,
        paragraphs: bool = False,
        config: Optional[Path] = None,
        **kwargs,
    ) -> "MultiStoryParams":
        """Create from CLI arguments. A blank third headline is dropped."""
        headlines = [headline1.strip(), headline2.strip()]
        images = [_clean(image1), _clean(image2)]
        if _clean(headline3):
            headlines.append(headline3.strip())
            images.append(_clean(image3))
        return cls(
            headlines=tuple(headlines),
            images=tuple(images),
            output_dir=output,
            paragraphs=paragraphs,
            config_path=config,
        )


@dataclass(frozen=True)
class ThumbnailParams:
    """Immutable parameters for thumbnail regeneration."""

    prompt: str
    output_dir: Optional[Path]
    config_path: Optional[Path]

    @classmethod
    def from_cli(
        cls,
        prompt: str,
        output: Optional[Path] = None,
        config: Optional[Path] = None,
        **kwargs,
    ) -> "ThumbnailParams":
        return cls(prompt=prompt.strip(), output_dir=output, config_path=config)


@dataclass(frozen=True)
class BRollParams:
    """Immutable parameters for a B-roll batch."""

    prompts: tuple[str, ...]
    output_dir: Optional[Path]
    config_path: Optional[Path]

    @classmethod
    def from_cli(
        cls,
        prompts: list[str],
        output: Optional[Path] = None,
        config: Optional[Path] = None,
        **kwargs,
    ) -> "BRollParams":
        return cls(
            prompts=tuple(p.strip() for p in prompts if p and p.strip()),
            output_dir=output,
            config_path=config,
        )


@dataclass(frozen=True)
class ParagraphParams:
    """Immutable parameters for paragraph prompt expansion."""

    script_path: Path
    config_path: Optional[Path]
    roundup: bool = False

    @classmethod
    def from_cli(
        cls, script_file: Path, config: Optional[Path] = None, roundup: bool = False, **kwargs
    ) -> "ParagraphParams":
        return cls(script_path=script_file, config_path=config, roundup=roundup)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
