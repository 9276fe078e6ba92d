"""
Label webhook handler.

Runs one Omnivore webhook delivery end to end:

    payload -> classify labels -> fetch article -> resolve actions
            -> dispatch -> tag generation | annotation -> FlowResult

Input problems become 400 results, failures of Omnivore or the model
become 500 results. Nothing is raised to the caller.
"""
from __future__ import annotations

import logging
from typing import Any

import pydantic

from omnivore_annotate.automation.actions import resolve_label_actions
from omnivore_annotate.automation.dispatch import (
    NoAction,
    RunAnnotation,
    RunTagGeneration,
    dispatch_actions,
)
from omnivore_annotate.automation.flows import FlowResult, run_annotation, run_tag_generation
from omnivore_annotate.automation.labels import classify_labels
from omnivore_annotate.config import AppSettings
from omnivore_annotate.integrations.omnivore import OmnivoreClient, WebhookPayload
from omnivore_annotate.providers.llm import LLMProvider

logger = logging.getLogger(__name__)


class InvalidWebhookError(ValueError):
    """The webhook payload cannot be acted on."""


class LabelWebhookHandler:
    """
    Stateless per-delivery orchestration of the label automation.

    Usage:
        handler = LabelWebhookHandler(omnivore_client, llm_provider, settings)
        result = await handler.handle(await request.json())
    """

    def __init__(
        self,
        omnivore: OmnivoreClient,
        llm: LLMProvider,
        settings: AppSettings,
    ):
        self.omnivore = omnivore
        self.llm = llm
        self.settings = settings

    @property
    def trigger(self) -> str:
        return self.settings.annotate_label

    def parse_payload(self, body: Any) -> tuple[WebhookPayload, list[str]]:
        """
        Validate the body and find the trigger labels on it.

        Raises:
            InvalidWebhookError: Malformed body, no labels, or no trigger labels
        """
        if not isinstance(body, dict):
            raise InvalidWebhookError("Webhook payload must be a JSON object.")
        try:
            payload = WebhookPayload.model_validate(body)
        except pydantic.ValidationError as e:
            raise InvalidWebhookError(f"Invalid webhook payload: {e}") from e

        if not payload.labels:
            raise InvalidWebhookError("No labels found in the webhook payload.")

        matching = classify_labels(payload.labels, self.trigger)
        if not matching:
            raise InvalidWebhookError(
                f"No '{self.trigger}' labels found. Expected at least one "
                f"'{self.trigger}' or '{self.trigger}:*' label."
            )

        if not payload.page_id:
            raise InvalidWebhookError("No article ID found in the webhook payload.")

        return payload, matching

    async def handle(self, body: Any) -> FlowResult:
        try:
            payload, matching = self.parse_payload(body)
        except InvalidWebhookError as e:
            logger.warning(f"Rejected webhook: {e}")
            return FlowResult(400, str(e))

        try:
            return await self._process(payload, matching)
        except Exception as e:
            logger.error(f"Error processing Omnivore webhook: {e}", exc_info=True)
            return FlowResult(500, f"Error processing Omnivore webhook: {e}")

    async def _process(self, payload: WebhookPayload, matching: list[str]) -> FlowResult:
        article = await self.omnivore.fetch_article(payload.page_id)

        actions = resolve_label_actions(
            matching,
            article,
            self.trigger,
            default_prompt=self.settings.default_prompt,
            completed=self.settings.completed_label,
        )

        match dispatch_actions(actions):
            case RunTagGeneration(action):
                return await run_tag_generation(
                    action,
                    article,
                    omnivore=self.omnivore,
                    llm=self.llm,
                    trigger=self.trigger,
                    structured=self.settings.structured_output,
                )
            case RunAnnotation(action):
                return await run_annotation(
                    action,
                    article,
                    omnivore=self.omnivore,
                    llm=self.llm,
                )
            case NoAction():
                logger.info(f"Unhandled action: {payload.action}")
                return FlowResult(400, f"Unhandled action: {payload.action}")
