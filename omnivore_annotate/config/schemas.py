"""
Configuration Schemas for omnivore-annotate.

Security:
    Sensitive fields use SecretStr to prevent accidental logging
    of credentials. Access the value with `.get_secret_value()`.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator

DEFAULT_ANNOTATE_LABEL = "do"
DEFAULT_COMPLETED_LABEL = "did"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-haiku-latest"


class AppSettings(BaseModel):
    """
    Application settings model.

    Loaded once per process from the environment (see
    ``omnivore_annotate.app.dependencies.get_settings``).
    """

    # Service identity
    service_name: str = "omnivore-annotate"
    environment: str = "development"
    debug: bool = False

    # Label conventions
    annotate_label: str = Field(
        DEFAULT_ANNOTATE_LABEL, min_length=1, description="Trigger label prefix"
    )
    completed_label: str = Field(
        DEFAULT_COMPLETED_LABEL, min_length=1, description="Prefix marking finished actions"
    )
    default_prompt: str | None = Field(
        None, description="Prompt used when a trigger label has no description"
    )

    # Omnivore
    omnivore_api_key: SecretStr = Field(default=SecretStr(""), description="Omnivore API key")
    omnivore_api_url: str = "https://api-prod.omnivore.app/api/graphql"

    # Completion provider
    llm_provider: str = Field("openai", pattern="^(openai|anthropic)$")
    openai_api_key: SecretStr | None = None
    anthropic_api_key: SecretStr | None = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    openai_settings: dict[str, Any] = Field(
        default_factory=dict, description="Raw chat-completions parameters"
    )
    structured_output: bool = Field(
        True, description="Constrain tag generation with a JSON schema"
    )

    @field_validator("openai_settings", mode="before")
    @classmethod
    def _parse_settings(cls, value: Any) -> Any:
        if value is None or value == "":
            return {}
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"OPENAI_SETTINGS is not valid JSON: {e}") from e
        if not isinstance(value, dict):
            raise ValueError("OPENAI_SETTINGS must be a JSON object")
        return value

    @field_validator("default_prompt", mode="before")
    @classmethod
    def _blank_prompt_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _default_model_setting(self) -> "AppSettings":
        self.openai_settings.setdefault("model", self.openai_model)
        return self
