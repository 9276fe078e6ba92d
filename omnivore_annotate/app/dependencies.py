"""
Dependency Injection for omnivore-annotate.

Provides process-wide instances of settings, the Omnivore client, the
completion provider and the webhook handler. Each is created on first
access; FastAPI routes receive them through ``Depends``.
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from omnivore_annotate.automation import LabelWebhookHandler
from omnivore_annotate.config import (
    DEFAULT_ANNOTATE_LABEL,
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_COMPLETED_LABEL,
    DEFAULT_OPENAI_MODEL,
    AppSettings,
)
from omnivore_annotate.integrations.omnivore import (
    DEFAULT_GRAPHQL_URL,
    OmnivoreClient,
    OmnivoreConfig,
)
from omnivore_annotate.providers.llm import (
    AnthropicLLMProvider,
    LLMProvider,
    OpenAILLMProvider,
)

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return AppSettings(
        # Service
        environment=os.getenv("OMNIVORE_ANNOTATE_ENVIRONMENT", "development"),
        debug=_env_flag("OMNIVORE_ANNOTATE_DEBUG", "false"),
        # Labels
        annotate_label=os.getenv("OMNIVORE_ANNOTATE_LABEL") or DEFAULT_ANNOTATE_LABEL,
        completed_label=os.getenv("OMNIVORE_COMPLETED_LABEL") or DEFAULT_COMPLETED_LABEL,
        default_prompt=os.getenv("OPENAI_PROMPT"),
        # Omnivore
        omnivore_api_key=os.getenv("OMNIVORE_API_KEY", ""),
        omnivore_api_url=os.getenv("OMNIVORE_API_URL") or DEFAULT_GRAPHQL_URL,
        # Completion provider
        llm_provider=os.getenv("LLM_PROVIDER", "openai").lower(),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        anthropic_model=os.getenv("ANTHROPIC_MODEL") or DEFAULT_ANTHROPIC_MODEL,
        openai_settings=os.getenv("OPENAI_SETTINGS"),
        structured_output=_env_flag("OMNIVORE_STRUCTURED_OUTPUT", "true"),
    )


# Global instances (initialized on first access)
_omnivore_client: Optional[OmnivoreClient] = None
_llm_provider: Optional[LLMProvider] = None


def get_omnivore_client() -> OmnivoreClient:
    """Get the shared Omnivore client."""
    global _omnivore_client
    if _omnivore_client is None:
        settings = get_settings()
        _omnivore_client = OmnivoreClient(
            OmnivoreConfig(
                api_key=settings.omnivore_api_key.get_secret_value(),
                graphql_url=settings.omnivore_api_url,
                log_requests=settings.debug,
                log_responses=settings.debug,
            )
        )
    return _omnivore_client


def get_llm_provider() -> LLMProvider:
    """Get the configured completion provider."""
    global _llm_provider
    if _llm_provider is None:
        settings = get_settings()
        if settings.llm_provider == "anthropic":
            api_key = settings.anthropic_api_key
            _llm_provider = AnthropicLLMProvider(
                api_key=api_key.get_secret_value() if api_key else None,
                model=settings.anthropic_model,
            )
        else:
            api_key = settings.openai_api_key
            _llm_provider = OpenAILLMProvider(
                api_key=api_key.get_secret_value() if api_key else None,
                model=settings.openai_model,
                settings=settings.openai_settings,
            )
        logger.info(f"Using LLM provider: {_llm_provider!r}")
    return _llm_provider


def get_webhook_handler() -> LabelWebhookHandler:
    return LabelWebhookHandler(
        omnivore=get_omnivore_client(),
        llm=get_llm_provider(),
        settings=get_settings(),
    )


async def shutdown_services() -> None:
    """
    Close shared clients on application shutdown.

    Called from FastAPI lifespan.
    """
    global _omnivore_client, _llm_provider
    if _omnivore_client is not None:
        await _omnivore_client.close()
        _omnivore_client = None
    _llm_provider = None
