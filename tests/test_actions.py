"""
Tests for label action resolution.
"""

from omnivore_annotate.automation.actions import (
    FALLBACK_PROMPT,
    LabelAction,
    replacement_label,
    resolve_label_actions,
)


class TestReplacementLabel:
    """Tests for replacement_label."""

    def test_namespaced(self):
        assert replacement_label("do:tags") == "did:tags"

    def test_only_first_occurrence_replaced(self):
        assert replacement_label("do:undo:do:x") == "did:undo:do:x"

    def test_bare_trigger_maps_to_bare_completed(self):
        assert replacement_label("do") == "did"

    def test_custom_prefixes(self):
        assert replacement_label("ai:summary", "ai", "done") == "done:summary"


class TestResolveLabelActions:
    """Tests for resolve_label_actions."""

    def test_one_action_per_name_in_order(self, make_article):
        article = make_article()
        actions = resolve_label_actions(["do:summary", "do:tags", "do:summary"], article)

        assert [a.source_label for a in actions] == ["do:summary", "do:tags", "do:summary"]
        assert all(isinstance(a, LabelAction) for a in actions)
        assert all(a.done is False for a in actions)

    def test_fields(self, make_article):
        article = make_article(labels=[("do:summary", "Summarize in three bullets")])
        (action,) = resolve_label_actions(["do:summary"], article)

        assert action.namespace == "do"
        assert action.operation == "summary"
        assert action.replacement_label == "did:summary"
        assert action.description == "Summarize in three bullets"

    def test_bare_trigger_action(self, make_article):
        (action,) = resolve_label_actions(["do"], make_article())

        assert action.operation == ""
        assert action.is_bare
        assert action.replacement_label == "did"

    def test_description_is_prompt_template(self, make_article):
        article = make_article(labels=[("do:summary", "Summarize in three bullets")])
        (action,) = resolve_label_actions(["do:summary"], article, default_prompt="Default")

        assert action.prompt[0] == "Summarize in three bullets"

    def test_default_prompt_when_no_description(self, make_article):
        article = make_article(labels=[("do:summary", "")])
        (action,) = resolve_label_actions(["do:summary"], article, default_prompt="Default")

        assert action.prompt[0] == "Default"

    def test_fallback_prompt(self, make_article):
        (action,) = resolve_label_actions(["do:summary"], make_article())

        assert action.prompt[0] == FALLBACK_PROMPT
        assert action.description is None

    def test_prompt_fragments_without_note(self, make_article):
        (action,) = resolve_label_actions(["do"], make_article())

        assert action.prompt == (
            FALLBACK_PROMPT,
            "Article title: The Future of Reading",
            "Article content: Read-it-later apps change how people read.",
        )

    def test_prompt_includes_existing_note_last(self, make_article):
        article = make_article(note="Earlier thoughts")
        (action,) = resolve_label_actions(["do"], article)

        assert len(action.prompt) == 4
        assert action.prompt[-1] == "Existing note: Earlier thoughts"

    def test_custom_trigger_and_completed_prefix(self, make_article):
        (action,) = resolve_label_actions(
            ["ai:tags"], make_article(), "ai", completed="done"
        )

        assert action.replacement_label == "done:tags"
        assert action.operation == "tags"

    def test_mark_done_returns_copy(self, make_article):
        (action,) = resolve_label_actions(["do:tags"], make_article())
        done = action.mark_done()

        assert done.done is True
        assert action.done is False
        assert done.source_label == action.source_label
