"""
Pytest configuration and fixtures for omnivore-annotate tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add the repository root to path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from omnivore_annotate.config import AppSettings
from omnivore_annotate.integrations.omnivore import Article, Highlight, Label
from omnivore_annotate.providers.llm import BaseLLMProvider, LLMConfig, LLMResponse, Message


class MockLLMProvider(BaseLLMProvider):
    """LLM provider returning a canned reply and recording requests."""

    def __init__(self, content: str | None = ""):
        super().__init__(default_model="mock-model")
        self.content = content
        self.calls: list[tuple[list[Message], LLMConfig | None]] = []

    @property
    def name(self) -> str:
        return "mock_llm"

    async def complete(
        self,
        messages: list[Message],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        self.calls.append((messages, config))
        return LLMResponse(content=self.content or "", model="mock-model", provider=self.name)

    @property
    def last_prompt(self) -> str:
        return self.calls[-1][0][-1].content


@pytest.fixture
def make_llm():
    """Factory for MockLLMProvider instances."""
    return MockLLMProvider


@pytest.fixture
def make_article():
    """Factory for articles with optional labels and note."""

    def _make(
        labels: list[tuple[str, str | None]] | None = None,
        note: str | None = None,
        article_id: str = "page-123",
    ) -> Article:
        highlights = [Highlight(id="hl-1", type="HIGHLIGHT")]
        if note is not None:
            highlights.append(Highlight(id="note-1", type="NOTE", annotation=note))
        return Article(
            id=article_id,
            title="The Future of Reading",
            content="Read-it-later apps change how people read.",
            labels=[Label(name=name, description=desc) for name, desc in labels or []],
            highlights=highlights,
        )

    return _make


@pytest.fixture
def sample_article(make_article):
    return make_article(labels=[("python", "Python things"), ("do:tags", None)])


@pytest.fixture
def settings():
    return AppSettings(omnivore_api_key="omnivore-test-key", openai_api_key="sk-test")


@pytest.fixture
def mock_omnivore(sample_article):
    """Omnivore client double with async methods."""
    client = MagicMock()
    client.fetch_article = AsyncMock(return_value=sample_article)
    client.fetch_all_labels = AsyncMock(
        return_value=[Label(name="python"), Label(name="reading"), Label(name="do:tags")]
    )
    client.set_labels = AsyncMock(return_value=[])
    client.upsert_note = AsyncMock(return_value=Highlight(id="note-new", type="NOTE"))
    return client


@pytest.fixture
def webhook_body():
    """A LABEL_ADDED webhook body as Omnivore sends it."""
    return {
        "action": "created",
        "userId": "user-1",
        "label": {
            "pageId": "page-123",
            "labels": [
                {"id": "l1", "name": "do:tags", "color": "#FF0000"},
                {"id": "l2", "name": "python", "color": "#00FF00"},
            ],
        },
    }
