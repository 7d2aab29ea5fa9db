"""
Tests for locating a JSON object embedded in free text.
"""

from mediagen.services.json_fragment import extract_json_from_text, parse_json_fragment


class TestExtractJsonFromText:

    def test_bare_object(self):
        assert extract_json_from_text('{"a": 1}') == '{"a": 1}'

    def test_object_surrounded_by_prose(self):
        text = 'Here is the result: {"url": "https://x/y.png"} Hope that helps!'
        assert extract_json_from_text(text) == '{"url": "https://x/y.png"}'

    def test_nested_objects_use_outermost_pair(self):
        text = 'x {"a": {"b": {"c": 1}}, "d": 2} y {"other": 3}'
        assert extract_json_from_text(text) == '{"a": {"b": {"c": 1}}, "d": 2}'

    def test_braces_inside_strings_are_ignored(self):
        text = 'answer: {"caption": "a } tricky { one", "url": "https://x"} done'
        assert extract_json_from_text(text) == '{"caption": "a } tricky { one", "url": "https://x"}'

    def test_escaped_quote_inside_string(self):
        text = '{"caption": "say \\"}\\" loudly", "url": "https://x"}'
        assert extract_json_from_text(text) == text

    def test_no_brace(self):
        assert extract_json_from_text("nothing structured here") == ""

    def test_unbalanced(self):
        assert extract_json_from_text('prefix {"a": {"b": 1}') == ""

    def test_closing_brace_before_opening_is_ignored(self):
        assert extract_json_from_text('} then {"a": 1}') == '{"a": 1}'


class TestParseJsonFragment:

    def test_parses_object(self):
        assert parse_json_fragment('ok {"image_url": "https://x"}') == {"image_url": "https://x"}

    def test_malformed_fragment_is_none(self):
        assert parse_json_fragment("look {image_url: https://x}") is None

    def test_missing_fragment_is_none(self):
        assert parse_json_fragment("plain text") is None
