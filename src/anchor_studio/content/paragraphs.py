"""Paragraph-aligned video prompts for a finished script."""

from __future__ import annotations

from ..constants import TEMPERATURE_PARAGRAPHS
from .generator import StructuredGenerator
from .models import ParagraphPrompt
from .parsing import parse_response
from .prompts import build_paragraph_prompt, main_script_section
from .responses import ParagraphPromptsResponse


class ParagraphPromptExpander(StructuredGenerator):
    """Asks the model to split a script into paragraphs with video prompts.

    Segmentation is left entirely to the model. For roundup scripts only
    the part after the ``FULL SCRIPT:`` marker is sent; single-story
    scripts are sent whole.
    """

    async def expand(self, script: str, roundup: bool = False) -> list[ParagraphPrompt]:
        """Return (paragraph, prompt) pairs in script order.

        An empty script yields an empty list without a remote call.

        Raises:
            RemoteCallFailed: The generation call failed after retries.
            MalformedResponse: The response is not a valid prompts object.
        """
        section = main_script_section(script or "") if roundup else (script or "").strip()
        if not section:
            return []

        raw = await self._request(
            build_paragraph_prompt(section),
            task="paragraph_prompts",
            failure_message="Could not generate paragraph video prompts",
            temperature=TEMPERATURE_PARAGRAPHS,
            response_model=ParagraphPromptsResponse,
        )
        return list(parse_response(raw, ParagraphPromptsResponse).prompts)
