"""
Omnivore GraphQL Client.

Async access to the parts of Omnivore's GraphQL API the automation
needs: reading an article with its labels and highlights, reading the
workspace label taxonomy, replacing an article's labels and writing the
whole-article note.

Usage:
    async with OmnivoreClient(OmnivoreConfig(api_key="...")) as client:
        article = await client.fetch_article(page_id)
        labels = await client.fetch_all_labels()
        await client.set_labels(article.id, [*article.labels, Label(name="did:tags")])
        await client.upsert_note(article.id, "TL;DR ...", article.existing_note)
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from omnivore_annotate.integrations.base import (
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    NotFoundError,
)
from omnivore_annotate.integrations.omnivore.queries import (
    ARTICLE_QUERY,
    CREATE_HIGHLIGHT_MUTATION,
    LABELS_QUERY,
    SET_LABELS_MUTATION,
    UPDATE_HIGHLIGHT_MUTATION,
)
from omnivore_annotate.integrations.omnivore.schemas import (
    NOTE_HIGHLIGHT_TYPE,
    Article,
    Highlight,
    Label,
)

logger = logging.getLogger(__name__)

DEFAULT_GRAPHQL_URL = "https://api-prod.omnivore.app/api/graphql"


class OmnivoreError(IntegrationError):
    """Raised when the GraphQL layer reports errors or error codes."""

    def __init__(self, message: str, *, error_codes: Sequence[str] = (), **kwargs):
        super().__init__(message, "omnivore", **kwargs)
        self.error_codes = list(error_codes)


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class OmnivoreConfig(IntegrationConfig):
    """Configuration for the Omnivore client."""

    graphql_url: str = DEFAULT_GRAPHQL_URL

    # Omnivore resolves "." to the owner of the API key
    username: str = "."
    content_format: str = "markdown"

    def __post_init__(self):
        if not self.graphql_url:
            raise ValueError("Omnivore GraphQL URL is required")


# =============================================================================
# Client
# =============================================================================


class OmnivoreClient(IntegrationClient):
    """
    Async client for Omnivore's GraphQL API.

    The API key is forwarded verbatim in the Authorization header.
    """

    def __init__(self, config: OmnivoreConfig):
        super().__init__(config)
        self._config: OmnivoreConfig = config
        self._note_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def name(self) -> str:
        return "omnivore"

    def _get_auth_headers(self) -> dict[str, str]:
        return {"Authorization": self._config.api_key or ""}

    async def _graphql(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        POST a GraphQL document and return its ``data`` member.

        Raises:
            OmnivoreError: If the response carries top-level ``errors``
        """
        body: dict[str, Any] = {"query": query}
        if variables is not None:
            body["variables"] = variables

        response = await self._request("POST", self._config.graphql_url, json=body)
        payload = response.json()

        errors = payload.get("errors")
        if errors:
            messages = ", ".join(str(e.get("message", e)) for e in errors)
            raise OmnivoreError(f"GraphQL errors: {messages}")

        return payload.get("data") or {}

    @staticmethod
    def _unwrap(data: dict[str, Any], field: str, key: str) -> Any:
        """
        Pull ``data[field][key]`` out of a success/error union result.

        Raises:
            OmnivoreError: If the union resolved to its error member
        """
        result = data.get(field) or {}
        error_codes = result.get("errorCodes")
        if error_codes:
            raise OmnivoreError(
                f"{field} failed: {', '.join(error_codes)}",
                error_codes=error_codes,
            )
        if key not in result:
            raise OmnivoreError(f"Unexpected {field} response structure")
        return result[key]

    # =========================================================================
    # Reads
    # =========================================================================

    async def fetch_article(self, article_id: str) -> Article:
        """
        Fetch an article's title, markdown content, labels and highlights.

        Args:
            article_id: Omnivore page id (the webhook's ``pageId``)

        Returns:
            Article

        Raises:
            NotFoundError: If Omnivore returns no article for the id
            OmnivoreError: On GraphQL or union errors
        """
        data = await self._graphql(
            ARTICLE_QUERY,
            {
                "username": self._config.username,
                "slug": article_id,
                "format": self._config.content_format,
            },
        )
        node = self._unwrap(data, "article", "article")
        if not node:
            raise NotFoundError(f"Article not found: {article_id}", self.name)

        article = Article.model_validate({**node, "id": article_id})
        logger.debug(
            f"[omnivore] Fetched article {article_id}: labels={article.label_names}, "
            f"highlights={len(article.highlights)}"
        )
        return article

    async def fetch_all_labels(self) -> list[Label]:
        """Fetch every label defined in the workspace."""
        data = await self._graphql(LABELS_QUERY)
        labels = self._unwrap(data, "labels", "labels") or []
        return [Label.model_validate(label) for label in labels]

    # =========================================================================
    # Writes
    # =========================================================================

    async def set_labels(
        self,
        article_id: str,
        labels: Sequence[Label | str] | None = None,
        *,
        label_ids: Sequence[str] | None = None,
    ) -> list[Label]:
        """
        Replace the article's label set.

        Exactly one of ``labels`` (names or Label objects, created on the
        fly by Omnivore when missing) or ``label_ids`` must be given.

        Returns:
            The labels Omnivore reports on the article afterwards
        """
        if (labels is None) == (label_ids is None):
            raise ValueError("Provide either labels or label_ids")

        mutation_input: dict[str, Any] = {"pageId": article_id}
        if labels is not None:
            mutation_input["labels"] = [
                label.to_input() if isinstance(label, Label) else {"name": label}
                for label in labels
            ]
        else:
            mutation_input["labelIds"] = list(label_ids or [])

        data = await self._graphql(SET_LABELS_MUTATION, {"input": mutation_input})
        result = self._unwrap(data, "setLabels", "labels") or []
        applied = [Label.model_validate(label) for label in result]
        logger.info(
            f"[omnivore] Labels set on article {article_id}: {[l.name for l in applied]}"
        )
        return applied

    async def create_note(self, article_id: str, annotation: str) -> Highlight:
        """Create a NOTE highlight with a fresh id; its short id is the first 8 chars."""
        highlight_id = str(uuid4())
        data = await self._graphql(
            CREATE_HIGHLIGHT_MUTATION,
            {
                "input": {
                    "type": NOTE_HIGHLIGHT_TYPE,
                    "id": highlight_id,
                    "shortId": highlight_id[:8],
                    "articleId": article_id,
                    "annotation": annotation,
                }
            },
        )
        highlight = Highlight.model_validate(
            self._unwrap(data, "createHighlight", "highlight")
        )
        logger.info(f"[omnivore] Note {highlight.id} created on article {article_id}")
        return highlight

    async def update_note(self, highlight_id: str, annotation: str) -> Highlight:
        """Overwrite the annotation of an existing note highlight."""
        data = await self._graphql(
            UPDATE_HIGHLIGHT_MUTATION,
            {"input": {"highlightId": highlight_id, "annotation": annotation}},
        )
        highlight = Highlight.model_validate(
            self._unwrap(data, "updateHighlight", "highlight")
        )
        logger.info(f"[omnivore] Note {highlight_id} updated")
        return highlight

    async def upsert_note(
        self,
        article_id: str,
        annotation: str,
        existing_note: Highlight | None = None,
    ) -> Highlight:
        """
        Write the article's single note, updating it when one exists.

        When the caller saw no note, the article's highlights are re-read
        under a per-article lock right before creating, so overlapping
        deliveries handled by this process update the note another one
        just created instead of adding a second.
        """
        if existing_note is not None:
            return await self.update_note(existing_note.id, annotation)

        lock = self._note_locks.get(article_id)
        if lock is None:
            lock = asyncio.Lock()
            self._note_locks[article_id] = lock

        async with lock:
            current = await self.fetch_article(article_id)
            if current.existing_note is not None:
                logger.info(
                    f"[omnivore] Note appeared on article {article_id} since last read, updating"
                )
                return await self.update_note(current.existing_note.id, annotation)
            return await self.create_note(article_id, annotation)
