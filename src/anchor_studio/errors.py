"""Exceptions raised by the generation pipeline.

Text-generation failures abort a run. Image failures are absorbed by the
image orchestrator except where noted on the class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .content.models import ContentBundle


class StudioError(Exception):
    """Base exception for studio errors."""

    pass


class ConfigurationError(StudioError):
    """Missing or invalid configuration (e.g. no backend credential)."""

    pass


class TransientRemoteError(StudioError):
    """Rate-limit or internal error from the backend; safe to retry."""

    pass


class RemoteCallFailed(StudioError):
    """A remote generation call failed for good.

    The message embeds the backend's own message; the original exception
    is chained as ``__cause__``.
    """

    pass


class MalformedResponse(StudioError):
    """The backend returned text that is not the expected JSON object."""

    def __init__(self, message: str, raw_response: str | None = None):
        super().__init__(message)
        self.raw_response = raw_response


class IncompleteGenerationResult(MalformedResponse):
    """Parsed JSON is missing required fields or has wrong field types."""

    def __init__(
        self,
        message: str,
        raw_response: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, raw_response)
        self.errors = errors or []


class AllImagesFailed(StudioError):
    """Every image in a required batch is absent after fallbacks.

    When raised by the assembler, ``bundle`` holds the text content that
    was already produced so it can still be shown.
    """

    def __init__(self, message: str, bundle: "ContentBundle | None" = None):
        super().__init__(message)
        self.bundle = bundle
