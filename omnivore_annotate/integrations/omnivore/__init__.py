"""
Omnivore integration.

Provides OmnivoreClient for the GraphQL API plus the Pydantic models
for articles, labels, highlights and webhook payloads.
"""

from omnivore_annotate.integrations.omnivore.client import (
    DEFAULT_GRAPHQL_URL,
    OmnivoreClient,
    OmnivoreConfig,
    OmnivoreError,
)
from omnivore_annotate.integrations.omnivore.schemas import (
    NOTE_HIGHLIGHT_TYPE,
    Article,
    Highlight,
    Label,
    WebhookLabel,
    WebhookLabelPayload,
    WebhookPayload,
)

__all__ = [
    "DEFAULT_GRAPHQL_URL",
    "NOTE_HIGHLIGHT_TYPE",
    "Article",
    "Highlight",
    "Label",
    "OmnivoreClient",
    "OmnivoreConfig",
    "OmnivoreError",
    "WebhookLabel",
    "WebhookLabelPayload",
    "WebhookPayload",
]
