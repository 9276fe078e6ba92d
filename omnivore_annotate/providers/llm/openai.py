"""
OpenAI and Anthropic LLM Providers for omnivore-annotate.

Both wrap the vendors' async SDK clients behind BaseLLMProvider.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .base import BaseLLMProvider, LLMConfig, LLMResponse, Message

logger = logging.getLogger(__name__)


class OpenAILLMProvider(BaseLLMProvider):
    """
    OpenAI-based LLM provider.

    Uses OpenAI's Chat Completions API. A settings mapping (the parsed
    OPENAI_SETTINGS object) is forwarded as-is into every request, so any
    chat-completions parameter can be configured without code changes.

    Requirements:
    - openai package
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        settings: dict[str, Any] | None = None,
        organization: str | None = None,
    ):
        """
        Initialize OpenAI LLM provider.

        Args:
            api_key: OpenAI API key (SDK reads OPENAI_API_KEY when None)
            model: Default model to use
            settings: Extra request parameters merged into each call
            organization: Optional OpenAI organization ID
        """
        super().__init__(default_model=model)
        self._api_key = api_key
        self._organization = organization
        self._settings = dict(settings or {})
        self._client = None

    @property
    def name(self) -> str:
        return "openai"

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self._api_key,
                organization=self._organization,
            )
        return self._client

    def _convert_messages(self, messages: list[Message]) -> list[dict[str, Any]]:
        return [msg.to_dict() for msg in messages]

    def _build_params(self, messages: list[Message], config: LLMConfig) -> dict[str, Any]:
        params: dict[str, Any] = {**self._settings, **config.extra}
        params["model"] = config.model or params.get("model") or self.default_model
        params["messages"] = self._convert_messages(messages)

        if config.temperature is not None:
            params["temperature"] = config.temperature
        if config.max_tokens is not None:
            params["max_tokens"] = config.max_tokens

        if config.response_format == "json_schema" and config.json_schema:
            params["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": config.schema_name,
                    "schema": config.json_schema,
                    "strict": True,
                },
            }
        elif config.response_format == "json":
            params["response_format"] = {"type": "json_object"}

        return params

    async def complete(
        self,
        messages: list[Message],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """
        Generate a completion using OpenAI.

        Args:
            messages: List of conversation messages
            config: Optional configuration overrides

        Returns:
            LLMResponse with generated content (empty string when the
            model returned no content)
        """
        if config is None:
            config = LLMConfig()

        try:
            client = self._get_client()
            params = self._build_params(messages, config)

            response = await client.chat.completions.create(**params)

            choice = response.choices[0]
            content = choice.message.content or ""

            usage = {}
            if response.usage:
                usage = {
                    "input_tokens": response.usage.prompt_tokens,
                    "output_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens,
                }

            return LLMResponse(
                content=content,
                model=response.model,
                usage=usage,
                finish_reason=choice.finish_reason or "stop",
                provider=self.name,
            )

        except Exception as e:
            logger.error(f"OpenAI completion error: {e}", exc_info=True)
            raise


class AnthropicLLMProvider(BaseLLMProvider):
    """
    Anthropic-based LLM provider.

    Claude has no response_format parameter; JSON requests are steered
    through the system prompt and parsed leniently by complete_json().

    Requirements:
    - anthropic package
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-haiku-latest",
        max_tokens: int = 1024,
    ):
        super().__init__(default_model=model)
        self._api_key = api_key
        self._max_tokens = max_tokens
        self._client = None

    @property
    def name(self) -> str:
        return "anthropic"

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            from anthropic import AsyncAnthropic

            self._client = AsyncAnthropic(api_key=self._api_key)
        return self._client

    def _system_prompt(self, messages: list[Message], config: LLMConfig) -> str:
        system_parts = [m.content for m in messages if m.role.value == "system"]
        if config.response_format == "json_schema" and config.json_schema:
            system_parts.append(
                "Respond ONLY with a JSON object matching this JSON schema: "
                + json.dumps(config.json_schema)
            )
        elif config.response_format == "json":
            system_parts.append("Respond ONLY with a JSON object.")
        return "\n\n".join(system_parts)

    async def complete(
        self,
        messages: list[Message],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """
        Generate a completion using Anthropic.

        Args:
            messages: List of conversation messages
            config: Optional configuration overrides

        Returns:
            LLMResponse with generated content
        """
        if config is None:
            config = LLMConfig()

        try:
            client = self._get_client()

            conversation = [
                {"role": msg.role.value, "content": msg.content}
                for msg in messages
                if msg.role.value != "system"
            ]

            params: dict[str, Any] = {
                "model": config.model or self.default_model,
                "max_tokens": config.max_tokens or self._max_tokens,
                "messages": conversation,
            }
            system_prompt = self._system_prompt(messages, config)
            if system_prompt:
                params["system"] = system_prompt
            if config.temperature is not None:
                params["temperature"] = config.temperature

            response = await client.messages.create(**params)

            content = ""
            if response.content:
                content = response.content[0].text

            usage = {
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
            }

            return LLMResponse(
                content=content,
                model=response.model,
                usage=usage,
                finish_reason=response.stop_reason or "end_turn",
                provider=self.name,
            )

        except Exception as e:
            logger.error(f"Anthropic completion error: {e}", exc_info=True)
            raise
