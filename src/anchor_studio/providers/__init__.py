"""Generation backend providers (Gemini text, Imagen images) and settings."""

from .config import StudioSettings, load_studio_settings
from .image import ImageProvider
from .text import TextProvider

__all__ = [
    "ImageProvider",
    "StudioSettings",
    "TextProvider",
    "load_studio_settings",
]
