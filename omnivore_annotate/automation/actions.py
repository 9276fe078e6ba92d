"""
Label action resolution.

Turns each matching trigger label into a LabelAction: the operation it
names, the prompt fragments for it, and the label that marks it done.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from omnivore_annotate.automation.labels import split_label
from omnivore_annotate.config import DEFAULT_ANNOTATE_LABEL, DEFAULT_COMPLETED_LABEL
from omnivore_annotate.integrations.omnivore import Article

logger = logging.getLogger(__name__)

FALLBACK_PROMPT = "Return a tweet-length TL;DR of the following article."


@dataclass(frozen=True, slots=True)
class LabelAction:
    """
    One requested operation, derived from a single trigger label.

    Attributes:
        source_label: The trigger label as found on the event (``do:tags``)
        replacement_label: Label written back when done (``did:tags``)
        namespace: Part before the first colon (``do``)
        operation: Part after the first colon, empty for the bare trigger
        prompt: Ordered prompt fragments, empty ones already removed
        description: Description of the source label on the article
        done: Whether the action has been carried out
    """

    source_label: str
    replacement_label: str
    namespace: str
    operation: str
    prompt: tuple[str, ...]
    description: str | None = None
    done: bool = False

    @property
    def is_bare(self) -> bool:
        return not self.operation

    def mark_done(self) -> "LabelAction":
        return replace(self, done=True)


def replacement_label(
    name: str,
    trigger: str = DEFAULT_ANNOTATE_LABEL,
    completed: str = DEFAULT_COMPLETED_LABEL,
) -> str:
    """
    Label that marks ``name`` as completed.

    Only the first ``"{trigger}:"`` is swapped for ``"{completed}:"``.
    The bare trigger maps to the bare completed label (``do`` -> ``did``).
    """
    if name == trigger:
        return completed
    return name.replace(f"{trigger}:", f"{completed}:", 1)


def resolve_prompt_template(
    description: str | None,
    default_prompt: str | None = None,
) -> str:
    """First non-blank of label description, configured default, built-in fallback."""
    for candidate in (description, default_prompt):
        if candidate and candidate.strip():
            return candidate
    return FALLBACK_PROMPT


def build_prompt_fragments(template: str, article: Article) -> tuple[str, ...]:
    note = article.existing_note
    fragments = [
        template,
        f"Article title: {article.title}",
        f"Article content: {article.content}",
        f"Existing note: {note.annotation}" if note and note.annotation else "",
    ]
    return tuple(f for f in fragments if f)


def resolve_label_actions(
    matching_labels: Iterable[str],
    article: Article,
    trigger: str = DEFAULT_ANNOTATE_LABEL,
    *,
    default_prompt: str | None = None,
    completed: str = DEFAULT_COMPLETED_LABEL,
) -> list[LabelAction]:
    """
    Build one LabelAction per matching label name, preserving order.

    Args:
        matching_labels: Trigger label names from classify_labels()
        article: The article the event refers to
        trigger: Trigger label prefix
        default_prompt: Prompt used when the label has no description
        completed: Prefix for replacement labels

    Returns:
        Fresh, not-done actions
    """
    actions = []
    for name in matching_labels:
        namespace, operation = split_label(name)
        label = article.get_label(name)
        description = label.description if label else None
        template = resolve_prompt_template(description, default_prompt)

        actions.append(
            LabelAction(
                source_label=name,
                replacement_label=replacement_label(name, trigger, completed),
                namespace=namespace,
                operation=operation,
                prompt=build_prompt_fragments(template, article),
                description=description,
            )
        )

    logger.debug(f"Resolved label actions: {[a.source_label for a in actions]}")
    return actions
