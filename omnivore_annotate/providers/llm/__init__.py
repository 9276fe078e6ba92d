"""
LLM Providers for omnivore-annotate.

- OpenAILLMProvider: Chat Completions, supports JSON-schema constrained output
- AnthropicLLMProvider: Claude messages API
"""

from .base import BaseLLMProvider, LLMConfig, LLMProvider, LLMResponse, Message, MessageRole
from .openai import AnthropicLLMProvider, OpenAILLMProvider

__all__ = [
    "AnthropicLLMProvider",
    "BaseLLMProvider",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "Message",
    "MessageRole",
    "OpenAILLMProvider",
]
