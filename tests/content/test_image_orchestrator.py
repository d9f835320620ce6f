"""Tests for image orchestration: ordering, pacing and fallbacks."""

import pytest

from anchor_studio.constants import BASE_ANCHOR_PROMPT, ROUNDUP_POST_FALLBACK_PROMPT
from anchor_studio.content.images import ImageOrchestrator
from anchor_studio.errors import AllImagesFailed, ConfigurationError
from anchor_studio.services.pacing import CallPacer
from anchor_studio.services.retry import RetryableCaller

BACKGROUND = "a rainy city street at night"


class Timeline:
    """Shared log of image calls and sleeps in the order they happen."""

    def __init__(self):
        self.entries = []

    async def sleep(self, seconds):
        self.entries.append(("sleep", seconds))

    def calls(self):
        return [entry for entry in self.entries if entry[0] == "image"]


class ScriptedImageProvider:
    """Image provider returning scripted outcomes per task.

    Outcomes are consumed in order; an Exception instance is raised.
    Tasks without a script return ``b"img-<task>"``.
    """

    def __init__(self, timeline, outcomes=None):
        self.timeline = timeline
        self.outcomes = {task: list(items) for task, items in (outcomes or {}).items()}
        self.prompts = []

    async def generate(self, prompt, aspect_ratio="16:9", task=None):
        self.timeline.entries.append(("image", task, aspect_ratio))
        self.prompts.append(prompt)
        queue = self.outcomes.get(task)
        if queue:
            outcome = queue.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return f"img-{task}".encode()


@pytest.fixture
def timeline():
    return Timeline()


def make_orchestrator(timeline, outcomes=None, event_callback=None):
    provider = ScriptedImageProvider(timeline, outcomes)
    orchestrator = ImageOrchestrator(
        provider,
        RetryableCaller(max_retries=3, initial_delay=5.0, sleep=timeline.sleep),
        CallPacer(delay_seconds=15.0, sleep=timeline.sleep),
        event_callback=event_callback,
    )
    return orchestrator, provider


class TestSingleStoryImages:
    """16:9 anchor, 9:16 anchor and 1:1 post image."""

    @pytest.mark.asyncio
    async def test_order_and_pacing(self, timeline):
        orchestrator, provider = make_orchestrator(timeline)

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert timeline.entries == [
            ("image", "anchor16x9", "16:9"),
            ("sleep", 15.0),
            ("image", "anchor9x16", "9:16"),
            ("sleep", 15.0),
            ("image", "postImage", "1:1"),
        ]
        assert images.anchor_16x9 == b"img-anchor16x9"
        assert images.anchor_9x16 == b"img-anchor9x16"
        assert images.post_images == (b"img-postImage",)
        assert not images.fallback_used

    @pytest.mark.asyncio
    async def test_prompts(self, timeline):
        orchestrator, provider = make_orchestrator(timeline)

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        landscape = f"{BASE_ANCHOR_PROMPT}, with a background of {BACKGROUND}"
        assert provider.prompts[0] == landscape
        assert provider.prompts[1] == f"Medium close-up shot of {landscape}"
        assert "A flooded street" in provider.prompts[2]
        assert images.final_prompt == landscape

    @pytest.mark.asyncio
    async def test_landscape_fallback_after_primaries(self, timeline, event_recorder):
        orchestrator, provider = make_orchestrator(
            timeline, {"anchor16x9": [None]}, event_callback=event_recorder
        )

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert [call[1] for call in timeline.calls()] == ["anchor16x9", "anchor9x16", "postImage", "anchor16x9"]
        assert timeline.entries[-2:] == [("sleep", 15.0), ("image", "anchor16x9", "16:9")]
        fallback = f"{BASE_ANCHOR_PROMPT}, with a background of a generic news studio."
        assert provider.prompts[-1] == fallback
        assert images.final_prompt == f"{fallback} (Fallback to generic background due to content policy)"
        assert images.fallback_used
        assert images.anchor_16x9 == b"img-anchor16x9"
        assert event_recorder.of_type("image_fallback")[0]["role"] == "anchor16x9"

    @pytest.mark.asyncio
    async def test_portrait_fallback_keeps_final_prompt(self, timeline):
        orchestrator, provider = make_orchestrator(timeline, {"anchor9x16": [RuntimeError("blocked")]})

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert provider.prompts[-1].startswith("Medium close-up shot of ")
        assert "a generic news studio" in provider.prompts[-1]
        assert timeline.calls()[-1] == ("image", "anchor9x16", "9:16")
        assert images.final_prompt == f"{BASE_ANCHOR_PROMPT}, with a background of {BACKGROUND}"
        assert images.fallback_used

    @pytest.mark.asyncio
    async def test_both_fallbacks_run_in_order(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"anchor16x9": [None], "anchor9x16": [None]})

        await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert [call[1] for call in timeline.calls()] == [
            "anchor16x9", "anchor9x16", "postImage", "anchor16x9", "anchor9x16",
        ]

    @pytest.mark.asyncio
    async def test_failed_fallback_leaves_role_absent(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"anchor16x9": [None, None]})

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert images.anchor_16x9 is None
        assert "anchor16x9" not in images.roles()
        assert images.anchor_9x16 is not None

    @pytest.mark.asyncio
    async def test_only_post_image_is_enough(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"anchor16x9": [None, None], "anchor9x16": [None, None]})

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert images.post_images == (b"img-postImage",)

    @pytest.mark.asyncio
    async def test_all_images_failed(self, timeline):
        orchestrator, _ = make_orchestrator(
            timeline,
            {"anchor16x9": [None, None], "anchor9x16": [None, None], "postImage": [None]},
        )

        with pytest.raises(AllImagesFailed, match="All image generation attempts failed"):
            await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert len(timeline.calls()) == 5

    @pytest.mark.asyncio
    async def test_transient_error_retried_with_backoff(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"anchor16x9": [RuntimeError("429 quota")]})

        images = await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")

        assert timeline.entries[:3] == [
            ("image", "anchor16x9", "16:9"),
            ("sleep", 5.0),
            ("image", "anchor16x9", "16:9"),
        ]
        assert not images.fallback_used

    @pytest.mark.asyncio
    async def test_configuration_error_propagates(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"anchor16x9": [ConfigurationError("API key not set")]})

        with pytest.raises(ConfigurationError):
            await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")


class TestRoundupImages:
    """16:9 thumbnail followed by one 1:1 post image per story."""

    @pytest.mark.asyncio
    async def test_order_and_pacing(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        images = await orchestrator.generate_roundup_images("Thumbnail", ["Park", "Harvest"])

        assert timeline.entries == [
            ("image", "thumbnail", "16:9"),
            ("sleep", 15.0),
            ("image", "postImage[0]", "1:1"),
            ("sleep", 15.0),
            ("image", "postImage[1]", "1:1"),
        ]
        assert images.thumbnail == b"img-thumbnail"
        assert images.post_images == (b"img-postImage[0]", b"img-postImage[1]")
        assert images.final_prompt == "Thumbnail"

    @pytest.mark.asyncio
    async def test_thumbnail_fallback_uses_first_description(self, timeline):
        orchestrator, provider = make_orchestrator(timeline, {"thumbnail": [None]})

        images = await orchestrator.generate_roundup_images("Thumbnail", ["Park", "Harvest"])

        assert timeline.entries[:3] == [
            ("image", "thumbnail", "16:9"),
            ("sleep", 15.0),
            ("image", "thumbnail", "16:9"),
        ]
        assert "'Park'" in provider.prompts[1]
        assert images.thumbnail == b"img-thumbnail"
        assert images.fallback_used

    @pytest.mark.asyncio
    async def test_post_fallback_prompt(self, timeline):
        orchestrator, provider = make_orchestrator(timeline, {"postImage[1]": [None]})

        images = await orchestrator.generate_roundup_images("Thumbnail", ["Park", "Harvest"])

        assert provider.prompts[-1] == ROUNDUP_POST_FALLBACK_PROMPT
        assert images.post_images[1] == b"img-postImage[1]"

    @pytest.mark.asyncio
    async def test_empty_description_is_skipped(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        images = await orchestrator.generate_roundup_images("Thumbnail", ["Park", "", "Harvest"])

        assert [call[1] for call in timeline.calls()] == ["thumbnail", "postImage[0]", "postImage[2]"]
        assert images.post_images[1] is None
        assert list(images.roles()) == ["thumbnail", "postImage[0]", "postImage[2]"]

    @pytest.mark.asyncio
    async def test_missing_thumbnail_is_not_fatal(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"thumbnail": [None, None]})

        images = await orchestrator.generate_roundup_images("Thumbnail", ["Park", "Harvest"])

        assert images.thumbnail is None
        assert all(images.post_images)

    @pytest.mark.asyncio
    async def test_all_roundup_images_failed(self, timeline):
        orchestrator, _ = make_orchestrator(
            timeline,
            {"thumbnail": [None, None], "postImage[0]": [None, None], "postImage[1]": [None, None]},
        )

        with pytest.raises(AllImagesFailed, match="multi-story roundup"):
            await orchestrator.generate_roundup_images("Thumbnail", ["Park", "Harvest"])


class TestBRoll:
    """Best-effort 16:9 B-roll batches."""

    @pytest.mark.asyncio
    async def test_partial_batch(self, timeline):
        orchestrator, provider = make_orchestrator(timeline, {"bRoll[1]": [RuntimeError("blocked")]})

        images = await orchestrator.generate_b_roll(["A river", "A crowd", "A bridge."])

        assert images == [b"img-bRoll[0]", b"img-bRoll[2]"]
        assert timeline.entries == [
            ("image", "bRoll[0]", "16:9"),
            ("sleep", 15.0),
            ("image", "bRoll[1]", "16:9"),
            ("sleep", 15.0),
            ("image", "bRoll[2]", "16:9"),
        ]
        assert provider.prompts[2] == "A bridge. Photorealistic, cinematic, 16:9 aspect ratio."

    @pytest.mark.asyncio
    async def test_blank_prompts_skipped_without_delay(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        images = await orchestrator.generate_b_roll(["", "A river", "  "])

        assert images == [b"img-bRoll[1]"]
        assert timeline.entries == [("image", "bRoll[1]", "16:9")]

    @pytest.mark.asyncio
    async def test_first_call_paced_after_main_images(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        await orchestrator.generate_single_story_images(BACKGROUND, "A flooded street")
        await orchestrator.generate_b_roll(["A river", "A crowd"], after_main_images=True)

        assert timeline.entries[4:] == [
            ("image", "postImage", "1:1"),
            ("sleep", 15.0),
            ("image", "bRoll[0]", "16:9"),
            ("sleep", 15.0),
            ("image", "bRoll[1]", "16:9"),
        ]

    @pytest.mark.asyncio
    async def test_leading_blank_prompt_still_paced_once(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        await orchestrator.generate_b_roll(["", "A river"], after_main_images=True)

        assert timeline.entries == [("sleep", 15.0), ("image", "bRoll[1]", "16:9")]

    @pytest.mark.asyncio
    async def test_empty_batch(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        assert await orchestrator.generate_b_roll([]) == []
        assert timeline.entries == []


class TestRegenerateThumbnail:
    """Single-shot thumbnail regeneration."""

    @pytest.mark.asyncio
    async def test_returns_image(self, timeline):
        orchestrator, provider = make_orchestrator(timeline)

        image = await orchestrator.regenerate_thumbnail("  New thumbnail  ")

        assert image == b"img-thumbnail"
        assert provider.prompts == ["New thumbnail"]

    @pytest.mark.asyncio
    async def test_no_fallback_when_filtered(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"thumbnail": [None]})

        assert await orchestrator.regenerate_thumbnail("New thumbnail") is None
        assert len(timeline.calls()) == 1

    @pytest.mark.asyncio
    async def test_empty_prompt_rejected(self, timeline):
        orchestrator, _ = make_orchestrator(timeline)

        with pytest.raises(ValueError, match="empty"):
            await orchestrator.regenerate_thumbnail("   ")
        assert timeline.entries == []

    @pytest.mark.asyncio
    async def test_error_propagates(self, timeline):
        orchestrator, _ = make_orchestrator(timeline, {"thumbnail": [RuntimeError("permission denied")]})

        with pytest.raises(RuntimeError, match="permission denied"):
            await orchestrator.regenerate_thumbnail("New thumbnail")
