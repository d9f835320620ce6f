"""JSON extraction and validation for model responses.

Every text response goes through ``parse_response``: fenced code is
unwrapped, the first ``{`` to the last ``}`` is cut out, parsed, then
validated against a pydantic response model.
"""

from __future__ import annotations

import json
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import IncompleteGenerationResult, MalformedResponse

M = TypeVar("M", bound=BaseModel)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def extract_json_object(text: str | None) -> str:
    """Return the JSON object text embedded in a response.

    Raises:
        MalformedResponse: If the response is empty or has no ``{...}`` span.
    """
    if not text or not text.strip():
        raise MalformedResponse("The AI returned an empty response.", raw_response=text)

    candidate = text.strip()
    match = _CODE_BLOCK_PATTERN.search(candidate)
    if match and "{" in match.group(1):
        candidate = match.group(1).strip()

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start == -1 or end < start:
        raise MalformedResponse(
            f"Could not find a valid JSON object in the AI's response. Raw response: {text[:500]}",
            raw_response=text,
        )
    return candidate[start:end + 1]


def _describe_errors(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "(root)"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_response(text: str | None, response_model: type[M]) -> M:
    """Extract, decode and validate one JSON response.

    Args:
        text: Raw response text.
        response_model: Pydantic model the object must satisfy.

    Returns:
        Validated model instance.

    Raises:
        MalformedResponse: No JSON object, or the object is not valid JSON.
        IncompleteGenerationResult: Required fields missing or mistyped.
    """
    payload = extract_json_object(text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedResponse(
            f"The AI failed to return valid JSON. Details: {e}", raw_response=text
        ) from e

    try:
        return response_model.model_validate(data)
    except ValidationError as e:
        raise IncompleteGenerationResult(
            f"AI returned an invalid or incomplete data structure ({_describe_errors(e)})",
            raw_response=text,
            errors=e.errors(include_url=False),
        ) from e
