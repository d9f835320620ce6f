"""News content generation: models, generators, images and run assembly."""

from .assembler import ContentAssembler, create_studio
from .generator import TextContentGenerator
from .images import ImageOrchestrator
from .media import load_reference_image, normalize_reference_image
from .models import (
    ContentBundle,
    HeadlineRequest,
    ImageSet,
    MultiHeadlineRequest,
    NewsTopic,
    ParagraphPrompt,
    ReferenceImage,
    SingleStoryRequest,
    SocialMediaContent,
    StudioResult,
    UrlRequest,
)
from .multi_story import MultiStoryContentGenerator
from .paragraphs import ParagraphPromptExpander

__all__ = [
    "ContentAssembler",
    "ContentBundle",
    "HeadlineRequest",
    "ImageOrchestrator",
    "ImageSet",
    "MultiHeadlineRequest",
    "MultiStoryContentGenerator",
    "NewsTopic",
    "ParagraphPrompt",
    "ParagraphPromptExpander",
    "ReferenceImage",
    "SingleStoryRequest",
    "SocialMediaContent",
    "StudioResult",
    "TextContentGenerator",
    "UrlRequest",
    "create_studio",
    "load_reference_image",
    "normalize_reference_image",
]
