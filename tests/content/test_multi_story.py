"""Tests for roundup content generation."""

import json

import pytest

from anchor_studio.content.models import MultiHeadlineRequest, NewsTopic, ReferenceImage
from anchor_studio.content.multi_story import MultiStoryContentGenerator
from anchor_studio.content.prompts import main_script_section
from anchor_studio.content.responses import MultiStoryResponse
from anchor_studio.errors import IncompleteGenerationResult, RemoteCallFailed


@pytest.fixture
def generator(mock_text_provider, caller, multi_story_json):
    mock_text_provider.generate.return_value = multi_story_json
    return MultiStoryContentGenerator(mock_text_provider, caller)


@pytest.fixture
def two_headlines():
    return MultiHeadlineRequest(headlines=["City opens new park", "Farmers report record harvest"])


class TestMultiStoryGeneration:
    """Roundup bundle assembly."""

    @pytest.mark.asyncio
    async def test_builds_roundup_bundle(self, generator, two_headlines):
        bundle = await generator.generate(two_headlines)

        assert bundle.is_roundup
        assert bundle.topic is NewsTopic.DEFAULT
        assert bundle.thumbnail_prompt == "Bold news collage with the text 'TOP STORIES'"
        assert bundle.post_image_descriptions == ["New riverside park", "Record wheat harvest"]
        assert bundle.story_video_prompts == ["Drone over a park", "Combine harvester at work"]
        assert bundle.intro_video_prompt == "Fast cuts of city and fields"
        assert bundle.translated_script == "Translated main script."
        assert bundle.translated_language == "Urdu"
        assert bundle.background_description is None

    @pytest.mark.asyncio
    async def test_script_joins_intro_and_main(self, generator, two_headlines):
        bundle = await generator.generate(two_headlines)

        assert bundle.script.startswith("INTRO:\nTonight:")
        assert "\n\n---\n\nFULL SCRIPT:\n" in bundle.script
        assert main_script_section(bundle.script) == "First, the park.\n\nSecond, the harvest."

    @pytest.mark.asyncio
    async def test_prompt_lists_headlines_and_language(self, mock_text_provider, caller, multi_story_json):
        mock_text_provider.generate.return_value = multi_story_json
        generator = MultiStoryContentGenerator(mock_text_provider, caller, translated_language="Hindi")

        bundle = await generator.generate(MultiHeadlineRequest(headlines=["Park opens", "Harvest record"]))

        call = mock_text_provider.generate.call_args
        assert '1. "Park opens"' in call.args[0]
        assert '2. "Harvest record"' in call.args[0]
        assert "Hindi" in call.args[0]
        assert call.kwargs["task"] == "multi_story"
        assert call.kwargs["response_model"] is MultiStoryResponse
        assert bundle.translated_language == "Hindi"

    @pytest.mark.asyncio
    async def test_only_present_images_attached(self, generator, mock_text_provider):
        image = ReferenceImage(data=b"jpeg", source="second.jpg")
        request = MultiHeadlineRequest(headlines=["One", "Two"], images=[None, image])

        await generator.generate(request)

        assert list(mock_text_provider.generate.call_args.kwargs["images"]) == [image]


class TestMultiStoryValidation:
    """Strict validation of roundup responses."""

    @pytest.mark.asyncio
    async def test_post_description_count_mismatch(
        self, generator, mock_text_provider, multi_story_payload, two_headlines
    ):
        multi_story_payload["postImageDescriptions"] = ["Only one"]
        mock_text_provider.generate.return_value = json.dumps(multi_story_payload)

        with pytest.raises(IncompleteGenerationResult, match="postImageDescriptions has 1 items, expected 2"):
            await generator.generate(two_headlines)

    @pytest.mark.asyncio
    async def test_story_video_prompt_count_mismatch(self, generator, mock_text_provider, multi_story_payload):
        request = MultiHeadlineRequest(headlines=["One", "Two", "Three"])
        multi_story_payload["postImageDescriptions"] = ["a", "b", "c"]
        mock_text_provider.generate.return_value = json.dumps(multi_story_payload)

        with pytest.raises(IncompleteGenerationResult, match="storyVideoPrompts"):
            await generator.generate(request)

    @pytest.mark.asyncio
    async def test_missing_thumbnail_prompt(self, generator, mock_text_provider, multi_story_payload, two_headlines):
        del multi_story_payload["thumbnailPrompt"]
        mock_text_provider.generate.return_value = json.dumps(multi_story_payload)

        with pytest.raises(IncompleteGenerationResult):
            await generator.generate(two_headlines)

    @pytest.mark.asyncio
    async def test_remote_failure_message(self, generator, mock_text_provider, two_headlines):
        mock_text_provider.generate.side_effect = RuntimeError("invalid argument")

        with pytest.raises(RemoteCallFailed, match="^Could not process headlines. Details: invalid argument$"):
            await generator.generate(two_headlines)


class TestThreeHeadlines:
    """Three-story roundups need three-element story arrays."""

    @pytest.fixture
    def three_headlines(self):
        return MultiHeadlineRequest(headlines=["Park opens", "Harvest record", "Team wins final"])

    @pytest.mark.asyncio
    async def test_three_element_arrays_accepted(
        self, generator, mock_text_provider, multi_story_payload, three_headlines
    ):
        multi_story_payload["postImageDescriptions"] = ["Riverside park", "Wheat harvest", "Trophy lift"]
        multi_story_payload["storyVideoPrompts"] = ["Drone over a park", "Combine harvester", "Stadium crowd"]
        mock_text_provider.generate.return_value = json.dumps(multi_story_payload)

        bundle = await generator.generate(three_headlines)

        assert len(bundle.post_image_descriptions) == 3
        assert len(bundle.story_video_prompts) == 3
        assert bundle.post_image_descriptions[2] == "Trophy lift"

    @pytest.mark.asyncio
    async def test_two_element_arrays_rejected(self, generator, three_headlines):
        with pytest.raises(IncompleteGenerationResult, match="expected 3"):
            await generator.generate(three_headlines)
