"""Shared test fixtures and configuration.

Provides mocks and fixtures for testing the Anchor Studio components.
All fixtures follow the pattern of returning async-compatible mocks that
can be used with the async/await syntax.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from anchor_studio.providers.config import StudioSettings
from anchor_studio.services.pacing import CallPacer
from anchor_studio.services.retry import RetryableCaller


class SleepRecorder:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class EventRecorder:
    """Async event callback that keeps every event it receives."""

    def __init__(self):
        self.events: list[dict[str, Any]] = []

    async def __call__(self, event: dict[str, Any]) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [event["type"] for event in self.events]

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [event for event in self.events if event["type"] == event_type]


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def event_recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def studio_settings() -> StudioSettings:
    """Settings with a test credential and no real delays."""
    return StudioSettings(
        api_key="test-key",
        max_retries=3,
        initial_retry_delay_seconds=5.0,
        image_call_delay_seconds=15.0,
    )


@pytest.fixture
def caller(sleep_recorder: SleepRecorder) -> RetryableCaller:
    """Retry wrapper whose backoff sleeps are recorded, not slept."""
    return RetryableCaller(max_retries=3, initial_delay=5.0, sleep=sleep_recorder)


@pytest.fixture
def pacer(sleep_recorder: SleepRecorder) -> CallPacer:
    """Pacer sharing the sleep recorder so pacing and backoff interleave."""
    return CallPacer(delay_seconds=15.0, sleep=sleep_recorder)


@pytest.fixture
def mock_image_provider() -> AsyncMock:
    """Create a mock ImageProvider.

    Returns:
        AsyncMock configured as ImageProvider.
    """
    provider = AsyncMock()
    provider.generate.return_value = b"fake_image_bytes_12345"
    return provider


@pytest.fixture
def mock_text_provider() -> AsyncMock:
    """Create a mock TextProvider.

    Returns:
        AsyncMock configured as TextProvider.
    """
    provider = AsyncMock()
    provider.generate.return_value = "Mock generated text response"
    return provider


# =============================================================================
# Sample responses
# =============================================================================

SOCIAL_MEDIA = {
    "youtube": {
        "title": "City Opens New Riverside Park",
        "description": "The city has opened a new riverside park.",
        "keywords": ["park", "city", "riverside"],
        "hashtags": ["#news", "#park"],
    },
    "facebook": {"post": "A new park opens downtown today."},
    "instagram": {"post": "New park, new views. #news"},
}


@pytest.fixture
def single_story_payload() -> dict[str, Any]:
    return {
        "script": "The city opened a new riverside park today. Officials expect thousands of visitors.",
        "topic": "politics",
        "backgroundDescription": "a sunny riverside park with green lawns",
        "postImageDescription": "A wide green park by a river with the text 'NEW PARK OPENS'",
        "socialMediaContent": SOCIAL_MEDIA,
        "videoImagePrompts": [
            "A calm river at sunrise",
            "Empty park benches under trees",
            "A wooden footbridge over water",
        ],
        "storyVideoPrompts": ["Slow drone flight over a riverside park"],
    }


@pytest.fixture
def single_story_json(single_story_payload: dict[str, Any]) -> str:
    return json.dumps(single_story_payload)


@pytest.fixture
def multi_story_payload() -> dict[str, Any]:
    return {
        "introScript": "Tonight: a new park, a record harvest and a late-night win.",
        "mainScript": "First, the park.\n\nSecond, the harvest.",
        "translatedScript": "Translated main script.",
        "thumbnailPrompt": "Bold news collage with the text 'TOP STORIES'",
        "postImageDescriptions": ["New riverside park", "Record wheat harvest"],
        "socialMediaContent": SOCIAL_MEDIA,
        "videoImagePrompts": ["Golden wheat field", "City skyline at dusk"],
        "introVideoPrompt": "Fast cuts of city and fields",
        "storyVideoPrompts": ["Drone over a park", "Combine harvester at work"],
    }


@pytest.fixture
def multi_story_json(multi_story_payload: dict[str, Any]) -> str:
    return json.dumps(multi_story_payload)
