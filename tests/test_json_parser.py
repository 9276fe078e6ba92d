"""
Tests for robust JSON parsing utilities.
"""

from omnivore_annotate.utils.json_parser import (
    clean_json_string,
    extract_json_from_text,
    parse_json_value,
    parse_tags_json,
)


class TestExtractJsonFromText:
    """Tests for extract_json_from_text."""

    def test_extracts_from_json_code_block(self):
        text = '```json\n{"key": "value"}\n```'
        assert extract_json_from_text(text) == '{"key": "value"}'

    def test_extracts_from_plain_code_block(self):
        text = '```\n{"key": "value"}\n```'
        assert extract_json_from_text(text) == '{"key": "value"}'

    def test_extracts_json_object_from_text(self):
        text = 'Here is the result: {"key": "value"} and some more text'
        assert extract_json_from_text(text) == '{"key": "value"}'

    def test_extracts_json_array_from_text(self):
        text = 'tags = [{"name": "a"}]'
        assert extract_json_from_text(text) == '[{"name": "a"}]'

    def test_returns_original_when_no_json(self):
        assert extract_json_from_text("Just plain text") == "Just plain text"


class TestCleanJsonString:
    """Tests for clean_json_string."""

    def test_removes_trailing_commas(self):
        assert clean_json_string('{"a": 1, "b": 2,}') == '{"a": 1, "b": 2}'

    def test_removes_trailing_comma_in_array(self):
        assert clean_json_string("[1, 2, 3,]") == "[1, 2, 3]"

    def test_removes_comments(self):
        result = clean_json_string('{"a": /* c */ 1 // comment\n}')
        assert "comment" not in result
        assert "/*" not in result

    def test_keeps_urls(self):
        assert "https://example.com" in clean_json_string('{"u": "https://example.com"}')


class TestParseJsonValue:
    """Tests for parse_json_value."""

    def test_parses_object(self):
        assert parse_json_value('{"key": "value"}') == {"key": "value"}

    def test_parses_array(self):
        assert parse_json_value("[1, 2]") == [1, 2]

    def test_parses_from_markdown(self):
        assert parse_json_value('```json\n{"key": "value"}\n```') == {"key": "value"}

    def test_parses_with_trailing_comma(self):
        assert parse_json_value('{"tags": ["a",]}') == {"tags": ["a"]}

    def test_empty_and_invalid_give_none(self):
        assert parse_json_value("") is None
        assert parse_json_value(None) is None
        assert parse_json_value("not json") is None


class TestParseTagsJson:
    """Tests for parse_tags_json."""

    def test_object_with_tags(self):
        reply = {"tags": [{"name": "AI", "description": "Artificial intelligence"}]}
        assert parse_tags_json(reply) == [{"name": "AI", "description": "Artificial intelligence"}]

    def test_bare_array_text(self):
        assert parse_tags_json('[{"name": "AI"}]') == [{"name": "AI", "description": ""}]

    def test_string_items(self):
        assert parse_tags_json(["AI", " ML "]) == [
            {"name": "AI", "description": ""},
            {"name": "ML", "description": ""},
        ]

    def test_drops_unusable_items(self):
        reply = {"tags": [{"name": ""}, {"description": "x"}, 3, None, {"name": "ok"}]}
        assert parse_tags_json(reply) == [{"name": "ok", "description": ""}]

    def test_missing_or_invalid(self):
        assert parse_tags_json(None) == []
        assert parse_tags_json("") == []
        assert parse_tags_json({"labels": []}) == []
        assert parse_tags_json({"tags": "AI"}) == []
