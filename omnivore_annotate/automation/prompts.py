"""
Prompt assembly.

Prompts are sent as a bullet list: every non-empty fragment becomes one
``- `` line.
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from omnivore_annotate.integrations.omnivore import Label

TAGS_EXAMPLE = [
    {"name": "Tag Name", "description": "Really short tag description or an empty string"},
    {"name": "Gender and Education", "description": ""},
    {
        "name": "Inclusive Knowledge Preservation",
        "description": "Accessibility and long-term preservation of human knowledge",
    },
]

TAGS_INSTRUCTION = (
    "Generate a list of useful tags that could be added to this article. "
    'Provide them as a JSON object {"tags": [...]} where each tag has name and description properties.\n'
    "ONLY respond with the JSON.\n"
    f"Example: {json.dumps({'tags': TAGS_EXAMPLE})}\n"
    "Please keep with the existing taxonomy and use the same language as the existing tags. "
    "Don't have multiple tags referring to the same topic. Please reuse existing tags if they are similar.\n"
    "If a tag falls outside of the existing structure but makes sense in the context of the article, "
    "add it as a new tag.\n"
    "ONLY respond with the JSON!"
)

TAGS_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "tags": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["name", "description"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["tags"],
    "additionalProperties": False,
}


def assemble_prompt(fragments: Iterable[str | None]) -> str:
    """
    Join fragments into a bullet-list prompt.

    >>> assemble_prompt(["a", None, "", "b"])
    '- a\\n- b'
    """
    return "\n".join(
        f"- {fragment}" for fragment in fragments if fragment is not None and fragment.strip()
    )


def labels_to_prompt(
    labels: Sequence[Label],
    trigger: str,
    pre_prompt: str = "",
    as_json: bool = False,
) -> str | None:
    """
    Render labels for a prompt, leaving out the trigger namespace.

    Args:
        labels: Labels to render
        trigger: Trigger prefix; labels in its namespace are skipped
        pre_prompt: Lead-in text for the plain-text rendering
        as_json: Render as a JSON array of {name, description}

    Returns:
        Rendered text, or None when there are no labels at all
    """
    if not labels:
        return None

    relevant = [label for label in labels if label.namespace != trigger]
    if as_json:
        rendered = json.dumps(
            [{"name": label.name, "description": label.description or ""} for label in relevant]
        )
        return f"{pre_prompt} {rendered}" if pre_prompt else rendered
    return f"{pre_prompt} {', '.join(label.name for label in relevant)}"
