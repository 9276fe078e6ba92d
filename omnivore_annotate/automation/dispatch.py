"""
Action dispatch.

Exactly one action runs per webhook delivery. Tag generation is the only
privileged operation; every other operation is a free-text note.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from omnivore_annotate.automation.actions import LabelAction

logger = logging.getLogger(__name__)

TAGS_OPERATION = "tags"


@dataclass(frozen=True, slots=True)
class RunTagGeneration:
    """Generate new tags for the article and write them as labels."""

    action: LabelAction


@dataclass(frozen=True, slots=True)
class RunAnnotation:
    """Generate free text and write it as the article note."""

    action: LabelAction


@dataclass(frozen=True, slots=True)
class NoAction:
    """Nothing left to do."""


DispatchDecision = RunTagGeneration | RunAnnotation | NoAction


def dispatch_actions(actions: Sequence[LabelAction]) -> DispatchDecision:
    """
    Pick the single action to run for this delivery.

    - The first ``tags`` action wins over everything else, wherever it sits.
    - Otherwise the first action not yet done is annotated.
    - No actions (or all done) means NoAction.

    Actions not chosen stay unresolved until a later delivery presents them.
    """
    decision: DispatchDecision

    tags_action = next(
        (a for a in actions if a.operation == TAGS_OPERATION and not a.done), None
    )
    if tags_action is not None:
        decision = RunTagGeneration(tags_action)
    else:
        next_action = next((a for a in actions if not a.done), None)
        decision = RunAnnotation(next_action) if next_action is not None else NoAction()

    match decision:
        case RunTagGeneration(action) | RunAnnotation(action):
            logger.info(
                f"Dispatch: {type(decision).__name__} for '{action.source_label}' "
                f"({len(actions) - 1} other action(s) deferred)"
            )
        case NoAction():
            logger.info("Dispatch: no open actions")
    return decision
