"""
LLM Provider Protocol for omnivore-annotate.

Defines the interface for the chat-completion providers that generate
tags and notes.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from omnivore_annotate.utils.json_parser import parse_json_value


class MessageRole(str, Enum):
    """Role of a message in the conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """
    A message in the LLM conversation.

    Attributes:
        role: Role of the message sender
        content: Text content of the message
    """

    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)


@dataclass
class LLMResponse:
    """
    Response from LLM completion.

    Attributes:
        content: The generated text content
        model: Model used for generation
        usage: Token usage statistics
        finish_reason: Why generation stopped
        provider: Name of the provider
    """

    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    finish_reason: str = "stop"
    provider: str = ""

    @property
    def input_tokens(self) -> int:
        return self.usage.get("input_tokens", 0)

    @property
    def output_tokens(self) -> int:
        return self.usage.get("output_tokens", 0)


@dataclass
class LLMConfig:
    """
    Configuration for LLM requests.

    Attributes:
        model: Model identifier, provider default when None
        temperature: Sampling temperature, provider default when None
        max_tokens: Maximum tokens to generate
        response_format: None for free text, "json" or "json_schema"
        json_schema: JSON schema used with response_format="json_schema"
        schema_name: Name reported to the provider for the schema
        extra: Raw provider settings merged into the request
    """

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    response_format: Optional[str] = None
    json_schema: Optional[Dict[str, Any]] = None
    schema_name: str = "response"
    extra: Dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class LLMProvider(Protocol):
    """
    Protocol for LLM providers.

    Implementations must provide:
    - complete(): Generate text from messages
    - complete_json(): Generate and parse a JSON value
    - name: Provider identifier
    """

    @property
    def name(self) -> str:
        ...

    async def complete(
        self,
        messages: List[Message],
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        ...

    async def complete_json(
        self,
        messages: List[Message],
        config: Optional[LLMConfig] = None,
    ) -> Any:
        ...


class BaseLLMProvider(ABC):
    """
    Base class for LLM provider implementations.

    Provides common functionality and enforces interface.
    """

    def __init__(self, default_model: str = ""):
        self.default_model = default_model

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Generate a completion from messages."""
        pass

    async def complete_json(
        self,
        messages: List[Message],
        config: Optional[LLMConfig] = None,
    ) -> Any:
        """
        Generate a JSON completion from messages.

        Keeps a json_schema response format when one is configured,
        otherwise asks for plain JSON mode. Returns the parsed object or
        array, or None for an empty or unparseable reply.
        """
        if config is None:
            config = LLMConfig()
        if config.response_format != "json_schema":
            config.response_format = "json"

        response = await self.complete(messages, config)
        return parse_json_value(response.content)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', model='{self.default_model}')"
