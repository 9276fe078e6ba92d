"""
Tests for prompt assembly.
"""

import json

from omnivore_annotate.automation.prompts import (
    TAGS_JSON_SCHEMA,
    assemble_prompt,
    labels_to_prompt,
)
from omnivore_annotate.integrations.omnivore import Label


class TestAssemblePrompt:
    """Tests for assemble_prompt."""

    def test_drops_empty_fragments(self):
        assert assemble_prompt(["a", None, "", "b"]) == "- a\n- b"

    def test_drops_whitespace_only_fragments(self):
        assert assemble_prompt(["  ", "\n", "x"]) == "- x"

    def test_keeps_fragment_text_untrimmed(self):
        assert assemble_prompt([" a "]) == "-  a "

    def test_empty_input(self):
        assert assemble_prompt([]) == ""

    def test_accepts_generator(self):
        assert assemble_prompt(f for f in ["one", "two"]) == "- one\n- two"


class TestLabelsToPrompt:
    """Tests for labels_to_prompt."""

    def test_none_for_no_labels(self):
        assert labels_to_prompt([], "do", "Tags:") is None

    def test_plain_text_excludes_trigger_namespace(self):
        labels = [Label(name="python"), Label(name="do:tags"), Label(name="do"), Label(name="ai")]
        assert labels_to_prompt(labels, "do", "Tags:") == "Tags: python, ai"

    def test_json_rendering(self):
        labels = [Label(name="python", description="Lang"), Label(name="reading")]
        rendered = labels_to_prompt(labels, "do", as_json=True)

        assert json.loads(rendered) == [
            {"name": "python", "description": "Lang"},
            {"name": "reading", "description": ""},
        ]

    def test_json_rendering_with_lead_in(self):
        rendered = labels_to_prompt([Label(name="x")], "do", "Existing:", as_json=True)
        assert rendered == 'Existing: [{"name": "x", "description": ""}]'


class TestTagsSchema:
    """The tags schema must be usable in strict JSON-schema mode."""

    def test_tag_items_require_name_and_description(self):
        items = TAGS_JSON_SCHEMA["properties"]["tags"]["items"]
        assert items["required"] == ["name", "description"]
        assert items["additionalProperties"] is False
        assert TAGS_JSON_SCHEMA["required"] == ["tags"]
