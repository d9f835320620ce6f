"""Anchor Studio - turn a headline or article URL into a packaged news segment.

Generates an anchor script, anchor/background images, social media copy,
B-roll images and text-to-video prompts through a generative AI backend.

Usage:
    from anchor_studio import HeadlineRequest, create_studio

    studio = create_studio()
    result = await studio.generate_single(HeadlineRequest(headline="City announces new park"))
"""

from .content import (
    ContentAssembler,
    ContentBundle,
    HeadlineRequest,
    ImageSet,
    MultiHeadlineRequest,
    ParagraphPrompt,
    StudioResult,
    UrlRequest,
    create_studio,
)
from .errors import (
    AllImagesFailed,
    ConfigurationError,
    IncompleteGenerationResult,
    MalformedResponse,
    RemoteCallFailed,
    StudioError,
    TransientRemoteError,
)

__version__ = "0.1.0"

__all__ = [
    "AllImagesFailed",
    "ConfigurationError",
    "ContentAssembler",
    "ContentBundle",
    "HeadlineRequest",
    "ImageSet",
    "IncompleteGenerationResult",
    "MalformedResponse",
    "MultiHeadlineRequest",
    "ParagraphPrompt",
    "RemoteCallFailed",
    "StudioError",
    "StudioResult",
    "TransientRemoteError",
    "UrlRequest",
    "create_studio",
]
