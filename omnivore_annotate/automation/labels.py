"""
Trigger label classification.

Picks out the labels on a webhook event that ask the automation to act:
the bare trigger (``do``) or any label in its namespace (``do:tags``).
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from omnivore_annotate.config import DEFAULT_ANNOTATE_LABEL

logger = logging.getLogger(__name__)


def _label_name(label: Any) -> str | None:
    """Name of a wire label (mapping or model), None if it has none."""
    if isinstance(label, Mapping):
        name = label.get("name")
    else:
        name = getattr(label, "name", None)
    return name if isinstance(name, str) else None


def is_trigger_label(name: str, trigger: str = DEFAULT_ANNOTATE_LABEL) -> bool:
    return name == trigger or name.startswith(f"{trigger}:")


def classify_labels(
    labels: Iterable[Any] | None,
    trigger: str = DEFAULT_ANNOTATE_LABEL,
) -> list[str]:
    """
    Return the names of trigger labels, in input order.

    Entries without a string ``name`` are skipped. Duplicates are kept,
    each one becomes its own action downstream. An empty result is a
    normal outcome, not an error.
    """
    matching = []
    for label in labels or ():
        name = _label_name(label)
        if name is not None and is_trigger_label(name, trigger):
            matching.append(name)

    if matching:
        logger.info(f"Found matching labels: {', '.join(matching)}")
    return matching


def split_label(name: str) -> tuple[str, str]:
    """
    Split ``"ns:operation"`` at the first colon.

    >>> split_label("do:tags")
    ('do', 'tags')
    >>> split_label("do")
    ('do', '')
    """
    namespace, _, operation = name.partition(":")
    return namespace, operation
