"""
Tests for recovering JSON objects from model output.
"""
import pytest

from collegepath.utils.json_utils import parse_json_response
from collegepath.utils.text import count_words


class TestParseJsonResponse:

    def test_plain_object(self):
        assert parse_json_response('{"tone": "warm"}') == {"tone": "warm"}

    def test_fenced_object(self):
        assert parse_json_response('```json\n{"a": 1}\n```') == {"a": 1}

    def test_object_embedded_in_prose(self):
        assert parse_json_response('Here you go: {"a": 1} Hope it helps.') == {"a": 1}

    @pytest.mark.parametrize("text", ["", "no json here", "[1, 2]", "42"])
    def test_rejects_non_objects(self, text):
        with pytest.raises(ValueError):
            parse_json_response(text)


class TestCountWords:

    @pytest.mark.parametrize("text,expected", [
        ("", 0),
        (None, 0),
        ("Hello world", 2),
        ("  spaced\tout\n\nwords  ", 3),
    ])
    def test_whitespace_split(self, text, expected):
        assert count_words(text) == expected
