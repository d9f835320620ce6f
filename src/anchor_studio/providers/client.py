"""Shared google-genai client construction."""

from __future__ import annotations

from google import genai

from .config import StudioSettings


def create_client(settings: StudioSettings) -> genai.Client:
    """Create a genai client authenticated with the configured API key."""
    return genai.Client(api_key=settings.require_api_key())
