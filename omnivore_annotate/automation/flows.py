"""
Tag generation and annotation flows.

Each flow builds its prompt, calls the completion provider once and
writes the outcome back to Omnivore. Empty model output is a normal,
successful outcome.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from omnivore_annotate.automation.actions import LabelAction
from omnivore_annotate.automation.prompts import (
    TAGS_INSTRUCTION,
    TAGS_JSON_SCHEMA,
    assemble_prompt,
    labels_to_prompt,
)
from omnivore_annotate.integrations.omnivore import Article, Label, OmnivoreClient
from omnivore_annotate.providers.llm import LLMConfig, LLMProvider, Message
from omnivore_annotate.utils.json_parser import parse_tags_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FlowResult:
    """Outcome of a flow, mapped directly onto the HTTP response."""

    status_code: int
    message: str

    @property
    def success(self) -> bool:
        return self.status_code < 400


def escape_annotation(text: str) -> str:
    """Escape backslashes, then double quotes."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_tags_prompt(
    action: LabelAction,
    article: Article,
    all_labels: list[Label],
    trigger: str,
) -> str:
    return assemble_prompt(
        [
            TAGS_INSTRUCTION,
            *action.prompt,
            labels_to_prompt(article.labels, trigger, "Existing article tags:", as_json=True),
            labels_to_prompt(all_labels, trigger, "All labels in Omnivore:", as_json=True),
        ]
    )


async def run_tag_generation(
    action: LabelAction,
    article: Article,
    *,
    omnivore: OmnivoreClient,
    llm: LLMProvider,
    trigger: str,
    structured: bool = True,
) -> FlowResult:
    """
    Ask the model for new tags and add them, plus the replacement label.

    Args:
        action: The ``tags`` action being run
        article: Article the tags are for
        omnivore: Client used to read the taxonomy and write labels
        llm: Completion provider
        trigger: Trigger prefix, excluded from the label lists in the prompt
        structured: Constrain output with the tags JSON schema
    """
    all_labels = await omnivore.fetch_all_labels()
    prompt = build_tags_prompt(action, article, all_labels, trigger)
    logger.debug(f"Tags prompt for article {article.id}:\n{prompt}")

    config = LLMConfig(
        response_format="json_schema" if structured else "json",
        json_schema=TAGS_JSON_SCHEMA if structured else None,
        schema_name="article_tags",
    )
    reply = await llm.complete_json([Message.user(prompt)], config)

    existing = set(article.label_names)
    generated = [tag for tag in parse_tags_json(reply) if tag["name"] not in existing]

    if not generated:
        logger.info(f"No new tags generated for article {article.id}: {reply!r}")
        return FlowResult(200, "No new tags generated.")

    logger.info(f"Generated tags: {', '.join(tag['name'] for tag in generated)}")

    new_labels = [
        *article.labels,
        *(Label(name=tag["name"], description=tag["description"] or None) for tag in generated),
        Label(name=action.replacement_label),
    ]
    await omnivore.set_labels(article.id, new_labels)

    return FlowResult(
        200, "New tags added to the article and action updated to did: action."
    )


async def run_annotation(
    action: LabelAction,
    article: Article,
    *,
    omnivore: OmnivoreClient,
    llm: LLMProvider,
) -> FlowResult:
    """Generate free text for the action and write it as the article note."""
    prompt = assemble_prompt(action.prompt)
    logger.debug(f"Annotation prompt for article {article.id}:\n{prompt}")

    response = await llm.complete([Message.user(prompt)])
    text = (response.content or "").strip()

    if not text:
        logger.info(f"No generated response for article {article.id}")
        return FlowResult(200, "No generated response from the model.")

    note = await omnivore.upsert_note(
        article.id, escape_annotation(text), article.existing_note
    )
    logger.info(f"Annotation applied to article {article.id} (note {note.id})")
    return FlowResult(200, "Annotation applied to the article.")
