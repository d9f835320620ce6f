"""Studio configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    BASE_ANCHOR_PROMPT,
    IMAGE_CALL_DELAY_SECONDS,
    IMAGE_MODEL_DEFAULT,
    RETRY_INITIAL_DELAY_SECONDS,
    RETRY_MAX_RETRIES,
    TEXT_MODEL_DEFAULT,
)
from ..errors import ConfigurationError

# Load .env file
load_dotenv()


class StudioSettings(BaseSettings):
    """Settings for the generation backend and pipeline pacing.

    Values come from (highest priority first) explicit keyword arguments,
    ``STUDIO_*`` environment variables, then the defaults below. The
    credential is read from ``GEMINI_API_KEY`` or ``API_KEY``.
    """

    model_config = SettingsConfigDict(env_prefix="STUDIO_", extra="ignore")

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "GEMINI_API_KEY", "API_KEY"),
    )
    text_model: str = TEXT_MODEL_DEFAULT
    image_model: str = IMAGE_MODEL_DEFAULT

    max_retries: int = Field(default=RETRY_MAX_RETRIES, ge=0)
    initial_retry_delay_seconds: float = Field(default=RETRY_INITIAL_DELAY_SECONDS, ge=0)
    image_call_delay_seconds: float = Field(default=IMAGE_CALL_DELAY_SECONDS, ge=0)

    translated_language: str = "Urdu"
    base_anchor_prompt: str = BASE_ANCHOR_PROMPT
    log_dir: Path = Path("logs")

    def require_api_key(self) -> str:
        """Return the credential or fail with ConfigurationError."""
        if not self.api_key:
            raise ConfigurationError(
                "API key not set. Set GEMINI_API_KEY (or API_KEY) in the "
                "environment or in a .env file."
            )
        return self.api_key


def load_studio_settings(config_path: Path | None = None) -> StudioSettings:
    """Load studio settings from an optional YAML file plus the environment.

    Args:
        config_path: YAML file with setting overrides. Defaults to
            ``config/studio.yaml`` under the working directory; a missing
            file is not an error.

    Returns:
        Validated settings with a credential present.

    Raises:
        ConfigurationError: If the YAML file is invalid or no credential
            is configured.
    """
    if config_path is None:
        config_path = Path.cwd() / "config" / "studio.yaml"

    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigurationError(f"Invalid config file (expected a mapping): {config_path}")
        data = loaded or {}

    settings = StudioSettings(**data)
    settings.require_api_key()
    return settings
