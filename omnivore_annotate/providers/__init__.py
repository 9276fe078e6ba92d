"""
omnivore-annotate Providers

Swappable completion providers used to generate tags and notes.
"""

from .llm import (
    AnthropicLLMProvider,
    BaseLLMProvider,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    Message,
    MessageRole,
    OpenAILLMProvider,
)

__all__ = [
    "LLMProvider",
    "BaseLLMProvider",
    "LLMConfig",
    "LLMResponse",
    "Message",
    "MessageRole",
    "OpenAILLMProvider",
    "AnthropicLLMProvider",
]
