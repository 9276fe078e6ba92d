"""
Label automation core.

Maps trigger labels on an Omnivore webhook to a single tag-generation
or annotation run.
"""

from .actions import FALLBACK_PROMPT, LabelAction, replacement_label, resolve_label_actions
from .dispatch import (
    DispatchDecision,
    NoAction,
    RunAnnotation,
    RunTagGeneration,
    dispatch_actions,
)
from .flows import FlowResult, escape_annotation, run_annotation, run_tag_generation
from .handler import InvalidWebhookError, LabelWebhookHandler
from .labels import classify_labels, split_label
from .prompts import TAGS_JSON_SCHEMA, assemble_prompt, labels_to_prompt

__all__ = [
    "FALLBACK_PROMPT",
    "TAGS_JSON_SCHEMA",
    "DispatchDecision",
    "FlowResult",
    "InvalidWebhookError",
    "LabelAction",
    "LabelWebhookHandler",
    "NoAction",
    "RunAnnotation",
    "RunTagGeneration",
    "assemble_prompt",
    "classify_labels",
    "dispatch_actions",
    "escape_annotation",
    "labels_to_prompt",
    "replacement_label",
    "resolve_label_actions",
    "run_annotation",
    "run_tag_generation",
    "split_label",
]
